import copy
import logging

import pytest

from avro_payload_validator import compile_schema
from avro_payload_validator.schema import loader


PET_OWNER_SCHEMA = {
    "type": "record",
    "name": "PetOwner",
    "fields": [
        {"name": "name", "type": "string"},
        {"name": "age", "type": ["null", "int"], "default": None},
        {"name": "country", "type": "string", "default": "Unknown"},
        {
            "name": "pets",
            "type": {
                "type": "array",
                "items": {
                    "type": "record",
                    "name": "Pet",
                    "fields": [
                        {"name": "kind", "type": {"type": "enum", "name": "PetKind", "symbols": ["CAT", "DOG"]}},
                        {"name": "name", "type": "string"},
                    ],
                },
            },
        },
    ],
}


@pytest.fixture
def pet_owner_declaration():
    return copy.deepcopy(PET_OWNER_SCHEMA)


@pytest.fixture
def pet_owner_schema(pet_owner_declaration):
    return compile_schema(pet_owner_declaration)


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    loader.clear_cache()
