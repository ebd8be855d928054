from .logging import build_log_context, configure_logging, log_event

__all__ = ["build_log_context", "configure_logging", "log_event"]
