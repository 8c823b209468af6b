"""HTTP request/response logging for ASGI (FastAPI/Starlette) apps and httpx clients."""

from __future__ import annotations

import time
from collections.abc import Sequence
from typing import Any

import httpx
from fastapi import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from fortlog.core.attributes import KeyVal, attr, integer, quote, text
from fortlog.core.levels import Level
from fortlog.core.logging import current_context, log, log_attrs, log_verbose


def _tls(scope: Scope) -> dict[str, Any] | None:
    # ASGI TLS extension, when the server provides it.
    return scope.get("extensions", {}).get("tls")


def _peer_cn(subject: str | None) -> str:
    """Common name from an RFC 4514 subject like ``CN=client,O=org``."""
    if not subject:
        return ""
    for part in subject.split(","):
        key, _, value = part.strip().partition("=")
        if key.upper() == "CN":
            return value
    return ""


def tls_info(request: Request) -> str:
    """`` https <cipher suite> "<peer CN>"`` for TLS requests, ``""`` otherwise.

    Use :func:`append_tls_info_attrs` unless you want just text.
    """
    tls = _tls(request.scope)
    if tls is None:
        return " https" if request.url.scheme == "https" else ""
    cipher = tls.get("cipher_suite")
    info = " https"
    if cipher is not None:
        info += f" 0x{cipher:04X}"
    peer = _peer_cn(tls.get("client_cert_name"))
    if peer:
        info += " " + quote(peer)
    return info


def append_tls_info_attrs(attrs: list[KeyVal], request: Request) -> list[KeyVal]:
    """Add ``tls`` (and ``tls.peer_cn`` for mTLS) attributes for TLS requests."""
    tls = _tls(request.scope)
    if tls is None and request.url.scheme != "https":
        return attrs
    attrs.append(attr("tls", True))
    if tls is not None:
        peer = _peer_cn(tls.get("client_cert_name"))
        if peer:
            attrs.append(text("tls.peer_cn", peer))
    return attrs


def _request_attrs(request: Request) -> list[KeyVal]:
    url = request.url.path
    if request.url.query:
        url += "?" + request.url.query
    client = request.client
    remote_addr = f"{client.host}:{client.port}" if client else ""
    headers = request.headers
    return [
        text("method", request.method),
        text("url", url),
        text("proto", "HTTP/" + request.scope.get("http_version", "1.1")),
        text("remote_addr", remote_addr),
        text("host", headers.get("host", "")),
        text("header.x-forwarded-proto", headers.get("x-forwarded-proto", "")),
        text("header.x-forwarded-for", headers.get("x-forwarded-for", "")),
        text("user-agent", headers.get("user-agent", "")),
    ]


def _log_request(request: Request, msg: str, extra: Sequence[KeyVal], stacklevel: int) -> None:
    if not log(Level.INFO):
        return
    attrs = append_tls_info_attrs(_request_attrs(request), request)
    attrs.extend(extra)
    if log_verbose():
        merged: dict[str, list[str]] = {}
        for name, value in request.headers.items():
            if name == "host":  # already logged
                continue
            merged.setdefault(name, []).append(value)
        attrs.extend(text("header." + name, ",".join(values)) for name, values in merged.items())
    log_attrs(Level.INFO, msg, attrs, stacklevel=stacklevel + 1)


def log_request(request: Request, msg: str, *extra: KeyVal) -> None:
    """Log an incoming request at Info level (all headers too when Verbose is on)."""
    _log_request(request, msg, extra, 2)


class ResponseRecorder:
    """ASGI ``send`` wrapper recording the status code and body size."""

    def __init__(self, send: Send) -> None:
        self._send = send
        self.start_time = time.monotonic()
        self.status_code = 0
        self.content_length = 0

    async def __call__(self, message: Message) -> None:
        if message["type"] == "http.response.start":
            self.status_code = message["status"]
        elif message["type"] == "http.response.body":
            self.content_length += len(message.get("body", b""))
        try:
            await self._send(message)
        except OSError:
            self.status_code = 500
            raise

    def microseconds(self) -> int:
        return int((time.monotonic() - self.start_time) * 1e6)


def _status_and_size(response: ResponseRecorder | Response | httpx.Response) -> tuple[int, int]:
    if isinstance(response, ResponseRecorder):
        return response.status_code, response.content_length
    length = response.headers.get("content-length")
    if length is not None and length.isdigit():
        return response.status_code, int(length)
    if isinstance(response, httpx.Response):
        # -1: unknown, like a missing Content-Length
        return response.status_code, response.num_bytes_downloaded if response.is_stream_consumed else -1
    return response.status_code, len(response.body)


def log_response(response: ResponseRecorder | Response | httpx.Response, msg: str, *extra: KeyVal) -> None:
    """Log a response status and size at Info level.

    Works for server side responses (:class:`ResponseRecorder`, Starlette
    ``Response``) and httpx client responses.
    """
    if not log(Level.INFO):
        return
    status, size = _status_and_size(response)
    attrs = [integer("status", status), integer("size", size), *extra]
    log_attrs(Level.INFO, msg, attrs, stacklevel=2)


class LogAndCallMiddleware:
    """ASGI middleware logging each HTTP request and its response.

    With ``combine_request_and_response`` (the server default) a single
    entry is logged once the response is done, including status, size and
    duration. Otherwise the request is logged before calling the app and the
    response after. Exceptions raised by the app are logged at Critical level
    and re-raised.
    """

    def __init__(self, app: ASGIApp, msg: str = "request", extra: Sequence[KeyVal] = ()) -> None:
        self.app = app
        self.msg = msg
        self.extra = tuple(extra)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        request = Request(scope)
        recorder = ResponseRecorder(send)
        if current_context().config.combine_request_and_response:
            try:
                await self.app(scope, receive, recorder)
            except Exception as exc:
                log_attrs(Level.CRITICAL, "panic in handler", [attr("error", exc)])
                if recorder.status_code == 0:
                    recorder.status_code = 500
                raise
            finally:
                attrs = [
                    integer("status", recorder.status_code),
                    integer("size", recorder.content_length),
                    integer("microsec", recorder.microseconds()),
                    *self.extra,
                ]
                _log_request(request, self.msg, attrs, 1)
            return
        _log_request(request, self.msg, self.extra, 1)
        await self.app(scope, receive, recorder)
        log_response(recorder, self.msg, integer("microsec", recorder.microseconds()))


def log_and_call(msg: str, app: ASGIApp, *extra: KeyVal) -> LogAndCallMiddleware:
    """Wrap an ASGI app with :class:`LogAndCallMiddleware`."""
    return LogAndCallMiddleware(app, msg, extra)


__all__ = [
    "LogAndCallMiddleware",
    "ResponseRecorder",
    "append_tls_info_attrs",
    "log_and_call",
    "log_request",
    "log_response",
    "tls_info",
]
