from collections import OrderedDict
from decimal import Decimal

import pytest

from avro_payload_validator.leaf_checker import LeafTypeChecker, describe, kind_of
from avro_payload_validator.schema import compile_declaration


@pytest.mark.parametrize(
    "value, kind",
    [
        (None, "null"),
        (True, "boolean"),
        (3, "number"),
        (2.5, "number"),
        ("x", "string"),
        (b"\x00", "bytes"),
        ([1], "array"),
        ((1,), "array"),
        ({"a": 1}, "object"),
        (OrderedDict(), "object"),
        ({1, 2}, "set"),
    ],
)
def test_kind_of(value, kind):
    assert kind_of(value) == kind


def test_describe_renders_compact_json(pet_owner_declaration):
    root, named = compile_declaration(pet_owner_declaration)
    name, age, _, pets = root.fields

    assert describe(name.type) == '"string"'
    assert describe(age.type) == '["null","int"]'
    assert describe(pets.type) == '{"type":"array","items":"Pet"}'
    assert describe(named["Pet"]) == (
        '{"type":"record","name":"Pet","fields":[{"name":"kind","type":"PetKind"},{"name":"name","type":"string"}]}'
    )


def test_describe_recursive_record_terminates():
    root, _ = compile_declaration({
        "type": "record",
        "name": "Node",
        "fields": [{"name": "next", "type": ["null", "Node"]}],
    })
    assert describe(root.fields[0].type) == '["null","Node"]'


def test_checker_covers_every_node(pet_owner_declaration):
    root, named = compile_declaration(pet_owner_declaration)
    checker = LeafTypeChecker(root)

    pet_kind = named["PetKind"]
    assert checker.is_valid(pet_kind, "CAT")
    assert not checker.is_valid(pet_kind, "FISH")
    assert checker.describe(pet_kind) == describe(pet_kind)

    pet = named["Pet"]
    assert checker.is_valid(pet, {"kind": "DOG", "name": "Rex"})
    assert not checker.is_valid(pet, {"kind": "DOG"})

    age = root.fields[1].type
    assert checker.is_valid(age, None)
    assert checker.is_valid(age, 42)
    assert not checker.is_valid(age, "42")


def test_checker_handles_recursive_records():
    root, _ = compile_declaration({
        "type": "record",
        "name": "Node",
        "fields": [{"name": "value", "type": "int"}, {"name": "next", "type": ["null", "Node"]}],
    })
    checker = LeafTypeChecker(root)
    union = root.fields[1].type
    assert checker.is_valid(union, {"value": 1, "next": {"value": 2, "next": None}})
    assert not checker.is_valid(union, {"value": 1, "next": {"value": "two", "next": None}})


def test_defaults_in_any_union_position_are_accepted():
    root, _ = compile_declaration({
        "type": "record",
        "name": "R",
        "fields": [{"name": "a", "type": ["int", "null"], "default": None}],
    })
    checker = LeafTypeChecker(root)
    assert checker.is_valid(root.fields[0].type, 1)
    assert checker.is_valid(root.fields[0].type, None)


DECIMALS = {
    "type": "record",
    "name": "Invoice",
    "fields": [
        {"name": "price", "type": {"type": "bytes", "logicalType": "decimal", "precision": 4, "scale": 2}},
        {
            "name": "total",
            "type": {"type": "fixed", "name": "Amount", "size": 8, "logicalType": "decimal", "precision": 10, "scale": 2},
        },
    ],
}


def test_describe_keeps_decimal_properties():
    root, _ = compile_declaration(DECIMALS)
    assert describe(root.fields[0].type) == '{"type":"bytes","logicalType":"decimal","precision":4,"scale":2}'
    assert describe(root.fields[1].type) == (
        '{"type":"fixed","name":"Amount","size":8,"logicalType":"decimal","precision":10,"scale":2}'
    )


def test_bytes_decimal_checks_precision_and_scale():
    root, _ = compile_declaration(DECIMALS)
    checker = LeafTypeChecker(root)
    price = root.fields[0].type
    assert checker.is_valid(price, Decimal("1.23"))
    assert not checker.is_valid(price, "1.23")
    assert not checker.is_valid(price, Decimal("123.45"))
    assert not checker.is_valid(price, Decimal("1.234"))


def test_fixed_decimal():
    root, _ = compile_declaration(DECIMALS)
    checker = LeafTypeChecker(root)
    total = root.fields[1].type
    assert checker.is_valid(total, Decimal("12.34"))
    assert not checker.is_valid(total, b"\x00")


def test_every_node_is_parsed_when_the_checker_is_built(pet_owner_declaration):
    root, _ = compile_declaration(pet_owner_declaration)
    checker = LeafTypeChecker(root)
    assert set(checker._parsed) == set(checker._descriptions)
    assert all(isinstance(parsed, dict) and parsed.get("__fastavro_parsed") for parsed in checker._parsed.values())
