"""HTTP logging helpers."""

from fortlog.web.http_logging import (
    LogAndCallMiddleware,
    ResponseRecorder,
    append_tls_info_attrs,
    log_and_call,
    log_request,
    log_response,
    tls_info,
)

__all__ = [
    "LogAndCallMiddleware",
    "ResponseRecorder",
    "append_tls_info_attrs",
    "log_and_call",
    "log_request",
    "log_response",
    "tls_info",
]
