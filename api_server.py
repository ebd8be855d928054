import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.container import global_container
from app.core.schemas import GenerateTxRequest
from app.core.settings import settings
from errors import classify_exception, http_status_for
from observability import build_log_context, configure_logging, log_event

configure_logging(settings.LOG_LEVEL, settings.SERVICE_NAME)

API_CTX = build_log_context(tool="api_server")

app = FastAPI(title=f"{settings.PROJECT_NAME} transaction generator API", version=settings.VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=sorted(settings.CORS_ORIGINS),
    allow_methods=["POST", "GET", "OPTIONS"],
    allow_headers=["Content-Type", "Content-Length", "Accept-Encoding", "Authorization"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Schema failures are client errors, same as unparseable amounts.
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"{loc}: {first.get('msg', 'invalid request')}" if loc else "invalid request"
    return JSONResponse(status_code=400, content={"error": message, "code": "invalid_request"})


@app.post("/api/generate-tx")
def generate_tx(req: GenerateTxRequest):
    """
    Build, sign and hash a transaction.

    Runs in the worker thread pool; the generator serializes signing.
    """
    try:
        return global_container.generator.generate(req)
    except Exception as e:
        err = classify_exception(e)
        status = http_status_for(err)
        log_event(
            "tx_generation_failed",
            ctx=API_CTX,
            data={"txn_type": req.txn_type, "code": err.code, "error": err.message, "status": status},
            level=logging.WARNING if status < 500 else logging.ERROR,
        )
        return JSONResponse(status_code=status, content={"error": err.message, "code": err.code})


@app.get("/health")
def health_check():
    return {"status": "ok"}


def main() -> None:
    import uvicorn

    log_event("api_server_started", ctx=API_CTX, data={"port": settings.API_PORT, "host": settings.API_HOST})
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)


if __name__ == "__main__":
    main()
