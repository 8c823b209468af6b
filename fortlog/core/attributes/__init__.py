"""Structured attributes and their JSON fragment encoders."""

from fortlog.core.attributes.encoders import JSONMarshaler, encode_full, encode_minimal, quote
from fortlog.core.attributes.values import (
    KeyVal,
    StringValue,
    ValueType,
    attr,
    boolean,
    floating,
    integer,
    text,
)

__all__ = [
    "JSONMarshaler",
    "KeyVal",
    "StringValue",
    "ValueType",
    "attr",
    "boolean",
    "encode_full",
    "encode_minimal",
    "floating",
    "integer",
    "quote",
    "text",
]
