# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""JSON Schema describing the shape of an Avro schema declaration.

Only structure is checked here (required keys, value kinds). Name
resolution, duplicate detection and the top-level-record rule are left to
the compiler because they depend on declaration order.
"""

from typing import Any, Dict

import jsonschema
from jsonschema.exceptions import best_match

from ..exceptions import SchemaDefinitionError


AVRO_DECLARATION_META_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "$ref": "#/definitions/schema",
    "definitions": {
        "simple_name": {"type": "string", "pattern": "^[A-Za-z_][A-Za-z0-9_]*$"},
        "full_name": {
            "type": "string",
            "pattern": "^([A-Za-z_][A-Za-z0-9_]*\\.)*[A-Za-z_][A-Za-z0-9_]*$",
        },
        "schema": {
            "anyOf": [
                {"$ref": "#/definitions/full_name"},
                {"$ref": "#/definitions/union"},
                {"$ref": "#/definitions/complex"},
            ]
        },
        "union": {"type": "array", "items": {"$ref": "#/definitions/schema"}},
        "field": {
            "type": "object",
            "required": ["name", "type"],
            "properties": {
                "name": {"$ref": "#/definitions/simple_name"},
                "type": {"$ref": "#/definitions/schema"},
                "doc": {"type": "string"},
            },
        },
        "complex": {
            "type": "object",
            "required": ["type"],
            "properties": {
                "type": {"type": "string"},
                "namespace": {"type": ["string", "null"]},
                "doc": {"type": "string"},
                "logicalType": {"type": "string"},
            },
            "allOf": [
                {
                    "if": {"properties": {"type": {"enum": ["record", "error"]}}},
                    "then": {
                        "required": ["name", "fields"],
                        "properties": {
                            "name": {"$ref": "#/definitions/full_name"},
                            "fields": {"type": "array", "items": {"$ref": "#/definitions/field"}},
                        },
                    },
                },
                {
                    "if": {"properties": {"type": {"const": "enum"}}},
                    "then": {
                        "required": ["name", "symbols"],
                        "properties": {
                            "name": {"$ref": "#/definitions/full_name"},
                            "symbols": {
                                "type": "array",
                                "items": {"$ref": "#/definitions/simple_name"},
                                "uniqueItems": True,
                            },
                            "default": {"type": "string"},
                        },
                    },
                },
                {
                    "if": {"properties": {"type": {"const": "fixed"}}},
                    "then": {
                        "required": ["name", "size"],
                        "properties": {
                            "name": {"$ref": "#/definitions/full_name"},
                            "size": {"type": "integer", "minimum": 0},
                        },
                    },
                },
                {
                    "if": {"properties": {"type": {"const": "array"}}},
                    "then": {
                        "required": ["items"],
                        "properties": {"items": {"$ref": "#/definitions/schema"}},
                    },
                },
                {
                    "if": {"properties": {"type": {"const": "map"}}},
                    "then": {
                        "required": ["values"],
                        "properties": {"values": {"$ref": "#/definitions/schema"}},
                    },
                },
            ],
        },
    },
}

_validator = jsonschema.Draft7Validator(AVRO_DECLARATION_META_SCHEMA)


def _error_path(error: jsonschema.ValidationError) -> str:
    return "/" + "/".join(str(p) for p in error.absolute_path) if error.absolute_path else ""


def check_declaration(declaration: Any) -> None:
    """Raise :class:`SchemaDefinitionError` if *declaration* is not a well-formed Avro schema."""
    error = best_match(_validator.iter_errors(declaration))
    if error is None:
        return
    raise SchemaDefinitionError(f"Malformed schema declaration: {error.message}", schema_path=_error_path(error) or "/")
