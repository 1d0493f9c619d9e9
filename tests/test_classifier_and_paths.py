from avro_payload_validator.classifier import FieldClass, classify, container_of, is_nullable
from avro_payload_validator.paths import child, index
from avro_payload_validator.schema import NO_DEFAULT, ArrayNode, Field, PrimitiveNode, RecordNode, UnionNode


NULL = PrimitiveNode("null")
STRING = PrimitiveNode("string")
INT = PrimitiveNode("int")


def test_child_path():
    assert child("", "name") == "name"
    assert child("owner", "name") == "owner.name"
    assert child("pets[0]", "name") == "pets[0].name"


def test_index_path():
    assert index("pets", 0) == "pets[0]"
    assert index("rows[1]", 2) == "rows[1][2]"


def test_nullable_union_without_default():
    assert classify(Field("age", UnionNode((NULL, INT)))) == FieldClass(nullable=True, has_default=False)


def test_null_marker_position_does_not_matter():
    assert classify(Field("age", UnionNode((INT, NULL)))).nullable


def test_default_without_nullability():
    field_class = classify(Field("country", STRING, default="Unknown"))
    assert field_class == FieldClass(nullable=False, has_default=True)
    assert field_class.may_be_absent


def test_null_default_counts_as_a_default():
    assert classify(Field("x", UnionNode((NULL, INT)), default=None)).has_default


def test_required_field():
    field_class = classify(Field("name", STRING, default=NO_DEFAULT))
    assert not field_class.nullable
    assert not field_class.has_default
    assert not field_class.may_be_absent


def test_bare_null_type_is_not_a_nullable_union():
    assert not is_nullable(NULL)


def test_container_of():
    record = RecordNode("R")
    array = ArrayNode(INT)

    assert container_of(record) is record
    assert container_of(array) is array
    assert container_of(UnionNode((NULL, record))) is record
    assert container_of(UnionNode((array, NULL))) is array
    assert container_of(UnionNode((NULL, record, STRING))) is None
    assert container_of(UnionNode((record,))) is None
    assert container_of(STRING) is None
