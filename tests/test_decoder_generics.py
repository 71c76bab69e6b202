"""Decoder tests for references, type parameters and recursion."""

import pytest

from decode_engine import ConvertError, Record, SchemaNotFound, TypeNotFound, UnboundTypeVariable, sym
from decode_engine import builders as t

from tests.helpers.catalogs import PARAMETERIZED_STRUCT, SPECS, STRINGS


class TestInstantiation:
    def test_parameter_substitution(self, decoder) -> None:
        assert decoder.decode(5, SPECS, "maybe_int") == (5, None)
        assert decoder.decode(None, SPECS, "maybe_int") == (None, None)
        value, err = decoder.decode("x", SPECS, "maybe_int")
        assert value is None
        assert isinstance(err, ConvertError)

    def test_arguments_at_the_entry_point(self, decoder) -> None:
        assert decoder.decode_or_raise("s", SPECS, "maybe", [t.string()]) == "s"
        with pytest.raises(ConvertError):
            decoder.decode_or_raise(1, SPECS, "maybe", [t.string()])

    def test_parameterized_field_set(self, decoder) -> None:
        assert decoder.decode_or_raise({"value": 5}, SPECS, "box_int") == {sym("value"): 5}
        with pytest.raises(ConvertError) as excinfo:
            decoder.decode_or_raise({"value": "x"}, SPECS, "box_int")
        assert excinfo.value.path == ["value"]

    def test_variable_passed_through_to_nested_reference(self, decoder) -> None:
        decoded = decoder.decode_or_raise({"value": [1, "a"]}, SPECS, "boxed_pair", [t.integer()])
        assert decoded == {sym("value"): (1, "a")}
        with pytest.raises(ConvertError) as excinfo:
            decoder.decode_or_raise({"value": ["a", "a"]}, SPECS, "boxed_pair", [t.integer()])
        assert excinfo.value.location == "$.value[0]"

    def test_argument_resolves_in_the_module_it_was_written_in(self, decoder) -> None:
        assert decoder.decode_or_raise({"value": "s"}, SPECS, "remote_box") == {sym("value"): "s"}

    def test_argument_local_reference_resolves_at_call_site(self, decoder) -> None:
        # "maybe_int" only exists in specs, even though box is instantiated from there too.
        decoded = decoder.decode_or_raise({"value": None}, SPECS, "box", [t.ref("maybe_int")])
        assert decoded == {sym("value"): None}

    def test_parameterized_record(self, decoder) -> None:
        decoded = decoder.decode_or_raise({"test": "x"}, PARAMETERIZED_STRUCT)
        assert decoded == Record(sym(PARAMETERIZED_STRUCT), {sym("test"): "x"})
        value, err = decoder.decode({"test": 1}, PARAMETERIZED_STRUCT)
        assert value is None
        assert err.path == ["test"]


class TestResolutionErrors:
    def test_unbound_variable(self, decoder) -> None:
        assert decoder.decode([], SPECS, "unbound") == ([], None)
        value, err = decoder.decode([1], SPECS, "unbound")
        assert value is None
        assert isinstance(err, UnboundTypeVariable)
        assert err.token == "T"

    def test_unbound_variable_raises(self, decoder) -> None:
        with pytest.raises(UnboundTypeVariable):
            decoder.decode_or_raise([1], SPECS, "unbound")

    def test_arity_mismatch(self, decoder) -> None:
        with pytest.raises(TypeNotFound) as excinfo:
            decoder.decode_or_raise({"value": 1}, SPECS, "box")
        assert excinfo.value.arity == 0
        assert str(excinfo.value) == "type not found: specs.box/0"

        with pytest.raises(TypeNotFound):
            decoder.decode_or_raise(1, SPECS, "maybe_int", [t.integer()])

    def test_missing_reference(self, decoder) -> None:
        value, err = decoder.decode(1, SPECS, "missing_ref")
        assert value is None
        assert isinstance(err, TypeNotFound)
        assert (err.module, err.name) == (SPECS, "nowhere")

    def test_missing_type(self, decoder) -> None:
        with pytest.raises(TypeNotFound):
            decoder.decode_or_raise(1, STRINGS, "nope")

    def test_missing_module(self, decoder) -> None:
        with pytest.raises(SchemaNotFound) as excinfo:
            decoder.decode_or_raise(1, "no.such.module")
        assert excinfo.value.module == "no.such.module"

    def test_missing_module_inside_union_is_not_absorbed(self, decoder) -> None:
        node = t.union(t.ref("t", module="no.such.module"), t.integer())
        with pytest.raises(SchemaNotFound):
            decoder.decode_node(1, node, SPECS)


class TestRecursion:
    def test_recursive_type(self, decoder) -> None:
        tree = {
            "value": 1,
            "children": [
                {"value": 2},
                {"value": 3, "children": [{"value": 4, "children": []}]},
            ],
        }
        decoded = decoder.decode_or_raise(tree, SPECS, "tree")
        value, children = sym("value"), sym("children")
        assert decoded[value] == 1
        assert decoded[children][0] == {value: 2}
        assert decoded[children][1][children][0] == {value: 4, children: []}

    def test_recursive_error_path(self, decoder) -> None:
        tree = {"value": 1, "children": [{"value": 2, "children": [{"value": "deep"}]}]}
        with pytest.raises(ConvertError) as excinfo:
            decoder.decode_or_raise(tree, SPECS, "tree")
        assert excinfo.value.location == "$.children[0].children[0].value"
