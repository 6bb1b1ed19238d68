"""Observability - Logging and request metrics."""

from .logger import LogContext, configure_logging, get_log_context
from .metrics import LoggerBackend, MetricsCollector, get_global_collector, reset_global_collector

__all__ = [
    "MetricsCollector",
    "LoggerBackend",
    "get_global_collector",
    "reset_global_collector",
    "configure_logging",
    "get_log_context",
    "LogContext",
]
