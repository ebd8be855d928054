from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict

_LOGGER_NAME = "txgen"

_service_name = "txgen"


def _configure() -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(logging.INFO)
    return logger


_logger = _configure()


def configure_logging(level: str = "info", service_name: str = "txgen") -> None:
    """
    Apply the configured level and service name to all later events.
    """
    global _service_name
    _logger.setLevel(getattr(logging, level.strip().upper(), logging.INFO))
    _service_name = service_name


def build_log_context(**fields: Any) -> Dict[str, Any]:
    """
    Fields attached to every event logged with this context.
    """
    return {k: v for k, v in fields.items() if v is not None}


def log_event(
    event: str,
    *,
    ctx: Dict[str, Any] | None = None,
    data: Dict[str, Any] | None = None,
    level: int = logging.INFO,
) -> None:
    if not _logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"ts_ms": int(time.time() * 1000), "event": event, "service": _service_name}
    payload.update(ctx or {})
    if data:
        payload["data"] = data
    _logger.log(level, json.dumps(payload, sort_keys=True, default=str))
