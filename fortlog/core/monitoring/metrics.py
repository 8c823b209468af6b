"""Prometheus metrics for the logger itself."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, generate_latest


class LoggerMetrics:
    """Counts log lines that could not be written to the output.

    Write errors can't be logged (there is nowhere else to log them to), so
    they are dropped and only counted here. Failed writes are not retried.
    """

    def __init__(self, *, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()
        self.write_errors_total = Counter(
            "fortlog_write_errors_total",
            "Total count of log lines dropped because writing to the output failed.",
            ("error",),
            registry=self.registry,
        )

    def record_write_error(self, exc: BaseException) -> None:
        """Count a failed write, labelled with the exception class name."""

        self.write_errors_total.labels(error=type(exc).__name__).inc()

    def render(self) -> bytes:
        """Render metrics in Prometheus exposition format."""

        return generate_latest(self.registry)


_DEFAULT_METRICS: LoggerMetrics | None = None


def get_logger_metrics() -> LoggerMetrics:
    """Return the global logger metrics instance."""

    global _DEFAULT_METRICS
    if _DEFAULT_METRICS is None:
        _DEFAULT_METRICS = LoggerMetrics()
    return _DEFAULT_METRICS


def configure_logger_metrics(metrics: LoggerMetrics | None) -> None:
    """Override the global logger metrics for application wiring or tests."""

    global _DEFAULT_METRICS
    _DEFAULT_METRICS = metrics


__all__ = ["LoggerMetrics", "configure_logger_metrics", "get_logger_metrics"]
