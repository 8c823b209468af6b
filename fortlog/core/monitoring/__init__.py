"""Metrics about the logger itself."""

from fortlog.core.monitoring.metrics import LoggerMetrics, configure_logger_metrics, get_logger_metrics

__all__ = ["LoggerMetrics", "configure_logger_metrics", "get_logger_metrics"]
