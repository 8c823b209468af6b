"""Pytest configuration for the fortlog test suite."""

from __future__ import annotations

import io
from collections.abc import Iterator

import pytest
from prometheus_client import CollectorRegistry

from fortlog.core.logging import LoggerContext, use_context
from fortlog.core.monitoring import LoggerMetrics, configure_logger_metrics


@pytest.fixture(autouse=True)
def log_context() -> Iterator[LoggerContext]:
    """Fresh logging context (default config, Info level) writing to a buffer."""

    ctx = LoggerContext(output=io.StringIO())
    with use_context(ctx):
        yield ctx


@pytest.fixture()
def log_output(log_context: LoggerContext) -> io.StringIO:
    output = log_context.output
    assert isinstance(output, io.StringIO)
    return output


@pytest.fixture()
def metrics() -> Iterator[LoggerMetrics]:
    collector = LoggerMetrics(registry=CollectorRegistry())
    configure_logger_metrics(collector)
    yield collector
    configure_logger_metrics(None)
