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

"""Public entry points: compile a schema, validate payloads against it."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from .config import validator_config
from .exceptions import PayloadError
from .leaf_checker import LeafTypeChecker, kind_of
from .schema.compiler import compile_declaration
from .schema.nodes import NamedNode, RecordNode
from .walker import ValidationError, validate_record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledSchema:
    """A checked and compiled record schema, safe to share between threads."""
    root: RecordNode
    named_types: Dict[str, NamedNode]
    declaration: Any
    leaf_checker: LeafTypeChecker

    @property
    def name(self) -> str:
        return self.root.name


def compile_schema(declaration: Any) -> CompiledSchema:
    """Compile a raw Avro declaration (dict, as read from an ``.avsc`` file).

    Raises:
        SchemaDefinitionError: If the declaration is malformed or not a record.
    """
    if isinstance(declaration, CompiledSchema):
        return declaration
    root, named_types = compile_declaration(declaration)
    return CompiledSchema(
        root=root,
        named_types=named_types,
        declaration=declaration,
        leaf_checker=LeafTypeChecker(root),
    )


def validate_payload(
    schema: Union[CompiledSchema, Any],
    payload: Any,
    *,
    allow_extra: Optional[bool] = None,
) -> List[ValidationError]:
    """Validate *payload* and return every conformance error found.

    Args:
        schema: A :class:`CompiledSchema` or a raw record declaration
        payload: Mapping to validate
        allow_extra: If False, keys not declared by a record are reported.
            If None, uses global config.

    Returns:
        Errors in field-declaration, depth-first order; empty if the payload conforms

    Raises:
        SchemaDefinitionError: If the schema is malformed or recursive on this payload
        PayloadError: If *payload* is not a mapping
    """
    compiled = compile_schema(schema)
    if not isinstance(payload, Mapping):
        raise PayloadError(f"Payload for record '{compiled.name}' must be a mapping, got {kind_of(payload)}")

    if allow_extra is None:
        allow_extra = validator_config.allow_extra

    errors = validate_record(compiled.root, payload, compiled.leaf_checker, allow_extra=allow_extra)
    logger.debug(f"Validated payload against '{compiled.name}': {len(errors)} error(s)")
    return errors


def validate_against_schema(schema: Union[CompiledSchema, Any], payload: Any) -> List[str]:
    """Validate *payload* and return the error messages only."""
    return [error.message for error in validate_payload(schema, payload, allow_extra=True)]
