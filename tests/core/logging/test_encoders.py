"""Tests for attribute value encoding."""

from __future__ import annotations

import io
import json
import math
import weakref
from dataclasses import dataclass
from datetime import UTC, datetime

import numpy as np
import pytest
from pydantic import BaseModel

from fortlog import Level, LoggerContext, attr, boolean, floating, integer, s, text
from fortlog.core.attributes import KeyVal, StringValue, ValueType, encode_full, encode_minimal


@dataclass
class Point:
    y: int
    x: int


class Order(BaseModel):
    symbol: str
    quantity: int
    tags: list[str] = []


class MarshaledError(Exception):
    def marshal_json(self) -> str:
        return '{"code":42}'


class BrokenMarshaler:
    def marshal_json(self) -> str:
        raise RuntimeError("nope")

    def __repr__(self) -> str:
        return "BrokenMarshaler()"


class Opaque:
    def __str__(self) -> str:
        return "opaque!"


BOTH = pytest.mark.parametrize("encode", [encode_full, encode_minimal], ids=["full", "minimal"])


@BOTH
@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, "null"),
        (True, "true"),
        (False, "false"),
        (42, "42"),
        (-7, "-7"),
        (1.5, "1.5"),
        (math.nan, "NaN"),
        (math.inf, "Inf"),
        (-math.inf, "-Inf"),
        ("a\"b\\c\n", '"a\\"b\\\\c\\n"'),
        ("héllo", '"héllo"'),
        ([1, "two", None], '[1,"two",null]'),
        ((True, 2.0), "[true,2.0]"),
        ({"b": 1, "a": 2}, '{"a":2,"b":1}'),
        ({"z": {"y": 1, "x": [math.nan]}}, '{"z":{"x":[NaN],"y":1}}'),
        (ValueError("bad value"), '"bad value"'),
        (np.int64(3), "3"),
        (np.float32(0.5), "0.5"),
        (np.float64(-np.inf), "-Inf"),
        (np.array([1, 2, 3]), "[1,2,3]"),
    ],
)
def test_primitive_encoding(encode, value, expected) -> None:
    assert encode(value) == expected


@BOTH
def test_map_keys_sorted_regardless_of_insertion_order(encode) -> None:
    first = {"b": 1, "a": 2}
    second = {"a": 2, "b": 1}

    assert encode(first) == encode(second) == '{"a":2,"b":1}'


@BOTH
def test_weakref_is_dereferenced(encode) -> None:
    target = Point(1, 2)
    ref = weakref.ref(target)

    assert encode(ref) == encode(target)


def test_dead_weakref_is_null() -> None:
    target = Point(1, 2)
    ref = weakref.ref(target)
    del target

    assert encode_full(ref) == "null"


def test_full_encoder_structured_values() -> None:
    assert encode_full(Point(y=1, x=2)) == '{"y":1,"x":2}'
    assert encode_full(Order(symbol="AAPL", quantity=3, tags=["b", "a"])) == (
        '{"symbol":"AAPL","quantity":3,"tags":["b","a"]}'
    )
    assert encode_full({"when": datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)}) == (
        '{"when":"2024-01-02T03:04:05Z"}'
    )
    assert encode_full({1, 1}) == "[1]"


def test_full_encoder_marshaler_hook() -> None:
    assert encode_full(MarshaledError("ignored")) == '{"code":42}'
    assert encode_minimal(MarshaledError("shown")) == '"shown"'


def test_full_encoder_failures_become_diagnostics() -> None:
    assert encode_full(BrokenMarshaler()) == '"ERR marshaling BrokenMarshaler(): nope"'

    diagnostic = json.loads(encode_full(object()))
    assert diagnostic.startswith("ERR marshaling <object object at")


def test_minimal_encoder_falls_back_to_str() -> None:
    assert encode_minimal(Opaque()) == '"opaque!"'
    assert encode_minimal(Point(1, 2)) == '"Point(y=1, x=2)"'


def test_value_type_uses_context_encoder(log_context: LoggerContext) -> None:
    value = ValueType(Point(1, 2))
    assert str(value) == '{"y":1,"x":2}'

    log_context.full_json = False
    assert str(value) == '"Point(y=1, x=2)"'


def test_value_type_can_be_reused(log_context: LoggerContext, log_output: io.StringIO) -> None:
    log_context.config.json = False
    log_context.config.log_file_and_line = False
    counter = attr("count", 0)

    for i in range(3):
        counter.value.val = i
        s(Level.INFO, "tick", counter)

    assert log_output.getvalue().splitlines() == ["I> tick, count=0", "I> tick, count=1", "I> tick, count=2"]


def test_constructors() -> None:
    assert isinstance(text("k", "v").value, StringValue)
    assert text("k", 'say "hi"').string_value() == '"say \\"hi\\""'
    assert integer("n", 5).string_value() == "5"
    assert floating("f", math.nan).string_value() == "NaN"
    assert boolean("b", False).string_value() == "false"
    assert repr(KeyVal("k", ValueType([1]))) == "KeyVal('k', [1])"


class DictMarshaler:
    def marshal_json(self) -> dict[str, int]:
        return {"not": 1}

    def __repr__(self) -> str:
        return "DictMarshaler()"


@dataclass
class Node:
    name: str
    children: list[Node]


@BOTH
def test_self_referencing_list(encode) -> None:
    items: list[object] = [1]
    items.append(items)

    encoded = encode(items)

    assert encoded == '[1,"ERR marshaling [1, [...]]: cycle detected"]'


@BOTH
def test_self_referencing_mapping(encode) -> None:
    mapping: dict[str, object] = {"a": 1}
    mapping["self"] = mapping

    decoded = json.loads(encode(mapping))

    assert decoded["a"] == 1
    assert decoded["self"].startswith("ERR marshaling {")
    assert decoded["self"].endswith(": cycle detected")


def test_self_referencing_dataclass() -> None:
    root = Node("root", [])
    root.children.append(root)

    decoded = json.loads(encode_full(root))

    assert decoded["name"] == "root"
    assert decoded["children"][0].endswith(": cycle detected")


def test_shared_values_are_not_cycles() -> None:
    shared = [1, 2]

    assert encode_full({"a": shared, "b": shared}) == '{"a":[1,2],"b":[1,2]}'


@BOTH
def test_too_deeply_nested(encode) -> None:
    nested: list[object] = []
    for _ in range(10_000):
        nested = [nested]

    encoded = encode(nested)

    assert json.loads(encoded).startswith("ERR marshaling list: ")


def test_marshaler_returning_non_string() -> None:
    assert encode_full(DictMarshaler()) == (
        '"ERR marshaling DictMarshaler(): marshal_json returned dict, not str or bytes"'
    )


def test_bad_attribute_does_not_fail_the_log_call(log_context: LoggerContext, log_output: io.StringIO) -> None:
    cycle: list[object] = []
    cycle.append(cycle)

    s(Level.INFO, "cyc", attr("a", cycle), attr("m", DictMarshaler()), attr("ok", 1))

    record = json.loads(log_output.getvalue())
    assert record["a"] == ["ERR marshaling [[...]]: cycle detected"]
    assert record["m"].startswith("ERR marshaling DictMarshaler(): ")
    assert record["ok"] == 1
