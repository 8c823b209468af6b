"""Structured attributes (key/value pairs) passed to ``s()``."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from fortlog.core.attributes.encoders import encode_full, encode_minimal, quote
from fortlog.core.logging.context import current_context

T = TypeVar("T")


class StringValue:
    """Text value, quoted when rendered."""

    __slots__ = ("val",)

    def __init__(self, val: str) -> None:
        self.val = val

    def __str__(self) -> str:
        return quote(self.val)


class ValueType(Generic[T]):
    """Any value, rendered with the current context's encoder.

    ``val`` can be updated in place to reuse the same attribute across calls.
    """

    __slots__ = ("val",)

    def __init__(self, val: T) -> None:
        self.val = val

    def __str__(self) -> str:
        if current_context().full_json:
            return encode_full(self.val)
        return encode_minimal(self.val)


class KeyVal:
    """One attribute. The value is only stringified when the line is logged."""

    __slots__ = ("key", "value")

    def __init__(self, key: str, value: StringValue | ValueType[Any]) -> None:
        self.key = key
        self.value = value

    def string_value(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"KeyVal({self.key!r}, {self.value.val!r})"


def text(key: str, value: str) -> KeyVal:
    return KeyVal(key, StringValue(value))


def attr(key: str, value: Any) -> KeyVal:
    return KeyVal(key, ValueType(value))


def integer(key: str, value: int) -> KeyVal:
    return KeyVal(key, ValueType(value))


def floating(key: str, value: float) -> KeyVal:
    return KeyVal(key, ValueType(value))


def boolean(key: str, value: bool) -> KeyVal:
    return KeyVal(key, ValueType(value))


__all__ = [
    "KeyVal",
    "StringValue",
    "ValueType",
    "attr",
    "boolean",
    "floating",
    "integer",
    "text",
]
