"""Decoding laws that hold across every type in the shared catalogs."""

import copy
from datetime import datetime, timezone

import pytest

from decode_engine import sym

from tests.helpers.catalogs import ADVANCED_STRUCT, BASIC_STRUCT, FILMOGRAPHY, SPECS, basic_struct


def _samples():
    sym("ok")
    sym("c")
    return [
        (SPECS, "union_atom_str", "ok"),
        (SPECS, "tuple_test", ["ok", 1, "s"]),
        (SPECS, "list_test", [1, 2, 3]),
        (SPECS, "map_required_test", {"ok": 1}),
        (SPECS, "map_exact_test", {"key1": 1, "key2": "s", "key3": 3}),
        (SPECS, "maybe_int", None),
        (SPECS, "tree", {"value": 1, "children": [{"value": 2}]}),
        (SPECS, "date_test", "2024-01-02"),
        (SPECS, "naive_datetime_test", "2024-01-02T03:04:05"),
        (SPECS, "datetime_test", "2024-01-02T03:04:05+01:00"),
        (BASIC_STRUCT, "t", {"int": 9}),
        (
            ADVANCED_STRUCT,
            "t",
            {
                "datetime": datetime(2024, 1, 1, tzinfo=timezone.utc),
                "example": "b",
                "basics": [{"str": "x"}],
                "map": {"c": "c"},
                "tuple": ["a", "b"],
            },
        ),
        (
            FILMOGRAPHY,
            "t",
            {"subject": {"name": "N", "birth_year": 1}, "acting_credits": [{"film": "F", "lead?": False}]},
        ),
    ]


@pytest.mark.parametrize("module,name,value", _samples())
def test_decoding_is_idempotent(decoder, module, name, value) -> None:
    once = decoder.decode_or_raise(value, module, name)
    assert decoder.decode_or_raise(once, module, name) == once


@pytest.mark.parametrize("module,name,value", _samples())
def test_input_is_not_mutated(decoder, module, name, value) -> None:
    before = copy.deepcopy(value)
    decoder.decode_or_raise(value, module, name)
    assert value == before


@pytest.mark.parametrize("module,name,value", _samples())
def test_decoding_is_deterministic(decoder, module, name, value) -> None:
    assert decoder.decode(value, module, name) == decoder.decode(value, module, name)


def test_record_zero_value_is_fresh(decoder) -> None:
    first = decoder.decode_or_raise({}, BASIC_STRUCT)
    assert first == basic_struct()
    assert decoder.decode_or_raise({}, BASIC_STRUCT) is not first
