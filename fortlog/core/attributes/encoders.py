"""Attribute value encoders.

Values are rendered as JSON fragments, which are also used as is for the text
and color output formats. Two encoders implement the same rules:

- :func:`encode_full` (default) hands structured values it doesn't know about
  to pydantic's serializer and supports the :class:`JSONMarshaler` hook.
- :func:`encode_minimal` only knows primitives, errors, references, lists and
  mappings; anything else is logged as its quoted ``str()``.

Both emit ``NaN``, ``Inf`` and ``-Inf`` as bare tokens (not valid JSON but
greppable) and sort mapping keys.
"""

from __future__ import annotations

import dataclasses
import json
import math
import weakref
from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

import numpy as np
from pydantic import BaseModel
from pydantic_core import PydanticSerializationError, to_jsonable_python

NULL = "null"


@runtime_checkable
class JSONMarshaler(Protocol):
    """Types providing their own JSON representation."""

    def marshal_json(self) -> str | bytes: ...


def quote(s: str) -> str:
    """JSON string literal for ``s`` (control characters, quotes and backslashes escaped)."""
    return json.dumps(s, ensure_ascii=False)


def format_float(f: float) -> str:
    if math.isnan(f):
        return "NaN"
    if math.isinf(f):
        return "Inf" if f > 0 else "-Inf"
    return repr(f)


def _diagnostic(value: Any, exc: Exception) -> str:
    return quote(f"ERR marshaling {value!r}: {exc}")


def _marshal(value: JSONMarshaler) -> str:
    try:
        out = value.marshal_json()
    except Exception as exc:  # user hook, must not fail the log call
        return _diagnostic(value, exc)
    if isinstance(out, bytes):
        return out.decode("utf-8", errors="replace")
    if not isinstance(out, str):
        return _diagnostic(value, TypeError(f"marshal_json returned {type(out).__name__}, not str or bytes"))
    return out


def _nested(value: Any, path: set[int], render: Callable[[], str]) -> str:
    # path holds the ids of the containers being encoded above this one.
    key = id(value)
    if key in path:
        return _diagnostic(value, ValueError("cycle detected"))
    path.add(key)
    try:
        return render()
    finally:
        path.discard(key)


def _encode_mapping(m: Mapping[Any, Any], full: bool, path: set[int]) -> str:
    items = sorted(((str(k), v) for k, v in m.items()), key=lambda kv: kv[0])
    return "{" + ",".join(quote(k) + ":" + _encode(v, full, path) for k, v in items) + "}"


def _encode_fields(pairs: list[tuple[str, Any]], path: set[int]) -> str:
    # Structured objects keep their declaration order.
    return "{" + ",".join(quote(k) + ":" + _encode(v, True, path) for k, v in pairs) + "}"


def _encode(value: Any, full: bool, path: set[int]) -> str:
    if value is None:
        return NULL
    # bool before int, bool is an int.
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, str):
        return quote(value)
    if isinstance(value, np.generic):
        return _encode(value.item(), full, path)
    if isinstance(value, BaseException):
        if full and isinstance(value, JSONMarshaler):
            return _marshal(value)
        return quote(str(value))
    if isinstance(value, weakref.ref):
        return _encode(value(), full, path)
    if isinstance(value, (list, tuple)):
        return _nested(value, path, lambda: "[" + ",".join(_encode(e, full, path) for e in value) + "]")
    if isinstance(value, np.ndarray):
        return _encode(value.tolist(), full, path)
    if isinstance(value, Mapping):
        return _nested(value, path, lambda: _encode_mapping(value, full, path))
    if not full:
        return quote(str(value))
    return _encode_structured(value, path)


def _encode_structured(value: Any, path: set[int]) -> str:
    if isinstance(value, JSONMarshaler):
        return _marshal(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        pairs = [(f.name, getattr(value, f.name)) for f in dataclasses.fields(value)]
        return _nested(value, path, lambda: _encode_fields(pairs, path))
    if isinstance(value, BaseModel):
        pairs = [(name, getattr(value, name)) for name in type(value).model_fields]
        return _nested(value, path, lambda: _encode_fields(pairs, path))
    try:
        converted = to_jsonable_python(value)
    except (PydanticSerializationError, ValueError, TypeError) as exc:
        return _diagnostic(value, exc)
    return _encode(converted, True, path)


def _encode_top(value: Any, full: bool) -> str:
    try:
        return _encode(value, full, set())
    except RecursionError as exc:
        # Nested deeper than the interpreter allows, repr() would fail too.
        return quote(f"ERR marshaling {type(value).__name__}: {exc}")


def encode_full(value: Any) -> str:
    """JSON fragment for ``value``, using pydantic for types not handled directly.

    Errors (cycles, failing ``marshal_json()``, unsupported types) are
    rendered as a quoted ``ERR marshaling ...`` diagnostic, never raised.
    """
    return _encode_top(value, True)


def encode_minimal(value: Any) -> str:
    """JSON fragment for ``value`` without any general purpose serializer."""
    return _encode_top(value, False)


__all__ = [
    "JSONMarshaler",
    "NULL",
    "encode_full",
    "encode_minimal",
    "format_float",
    "quote",
]
