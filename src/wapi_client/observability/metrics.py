"""Request metrics for the WAPI connector."""

from collections import Counter, defaultdict
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


class LoggerBackend:
    """
    Simple in-memory metrics backend that aggregates stats for logging.
    """

    def __init__(self) -> None:
        self.counters: Counter[str] = Counter()
        self.timings: dict[str, list[float]] = defaultdict(list)

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        """Increment a counter."""
        self.counters[self._format_key(name, tags)] += value

    def timing(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        """Record a timing."""
        self.timings[self._format_key(name, tags)].append(value)

    def _format_key(self, name: str, tags: dict[str, str] | None) -> str:
        if not tags:
            return name
        tag_str = ",".join(f"{k}={v}" for k, v in sorted(tags.items()))
        return f"{name}[{tag_str}]"

    def get_summary(self) -> dict[str, Any]:
        """Return a summary of collected metrics."""
        summary: dict[str, Any] = {"counters": dict(self.counters), "timings": {}}

        for name, values in self.timings.items():
            if values:
                summary["timings"][name] = {
                    "count": len(values),
                    "avg": sum(values) / len(values),
                    "min": min(values),
                    "max": max(values),
                }
        return summary


class MetricsCollector:
    """
    Central collector for connector metrics.
    """

    def __init__(self) -> None:
        self.backend = LoggerBackend()

    def count_request(self, method: str, status: int | str) -> None:
        """Record a request outcome."""
        self.backend.increment(
            "wapi_requests_total", tags={"method": method, "status": str(status)}
        )

    def record_latency(self, method: str, duration_ms: float) -> None:
        """Record request latency."""
        self.backend.timing("wapi_latency_ms", duration_ms, tags={"method": method})

    def get_summary(self) -> dict[str, Any]:
        return self.backend.get_summary()

    def log_summary(self) -> None:
        """Emit the current summary as a single log event."""
        logger.info("WAPI request metrics", **self.get_summary())


# Singleton instance
_GLOBAL_COLLECTOR: MetricsCollector | None = None


def get_global_collector() -> MetricsCollector:
    """Get or create the global metrics collector."""
    global _GLOBAL_COLLECTOR
    if _GLOBAL_COLLECTOR is None:
        _GLOBAL_COLLECTOR = MetricsCollector()
    return _GLOBAL_COLLECTOR


def reset_global_collector() -> None:
    """Drop the global collector so the next call starts from zero."""
    global _GLOBAL_COLLECTOR
    _GLOBAL_COLLECTOR = None
