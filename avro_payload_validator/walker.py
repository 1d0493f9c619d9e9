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

"""Recursive payload walk producing path-qualified errors.

Every call returns its own list of errors; callers concatenate. Order is
field-declaration order, depth first. Nothing stops at the first error.

Absence, explicit null and a present value are three distinct cases at every
level: a default only excuses absence, nullability only excuses null.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, FrozenSet, List

from .classifier import classify, container_of, is_nullable
from .exceptions import RecursiveSchemaError
from .leaf_checker import LeafTypeChecker, kind_of
from .paths import FieldPath, child, index
from .schema.nodes import ArrayNode, PrimitiveNode, RecordNode, SchemaNode


MISSING_REQUIRED = "missing_required"
NULL_NOT_ALLOWED = "null_not_allowed"
TYPE_MISMATCH = "type_mismatch"
ARRAY_TYPE_MISMATCH = "array_type_mismatch"
UNKNOWN_FIELD = "unknown_field"


@dataclass(frozen=True)
class ValidationError:
    path: FieldPath
    message: str
    code: str = TYPE_MISMATCH

    def __str__(self) -> str:
        return self.message


def missing_required(path: FieldPath) -> ValidationError:
    return ValidationError(path, f"Missing required field: '{path}'", MISSING_REQUIRED)


def null_not_allowed(path: FieldPath) -> ValidationError:
    return ValidationError(path, f"Field '{path}' is null, but null is not allowed", NULL_NOT_ALLOWED)


def type_mismatch(path: FieldPath, expected: str, value: Any) -> ValidationError:
    return ValidationError(
        path,
        f"Invalid type for field '{path}', expected: {expected}, received: {kind_of(value)}",
        TYPE_MISMATCH,
    )


def array_type_mismatch(path: FieldPath, value: Any) -> ValidationError:
    return ValidationError(
        path,
        f"Invalid type for field '{path}', expected: array, received: {kind_of(value)}",
        ARRAY_TYPE_MISMATCH,
    )


def unknown_field(path: FieldPath) -> ValidationError:
    return ValidationError(path, f"Unknown field: '{path}'", UNKNOWN_FIELD)


def validate_record(
    record: RecordNode,
    value: Mapping,
    checker: LeafTypeChecker,
    parent_path: FieldPath = "",
    *,
    allow_extra: bool = True,
    in_progress: FrozenSet[str] = frozenset(),
) -> List[ValidationError]:
    """Validate a mapping against *record*.

    Args:
        record: Record node to validate against
        value: Mapping from field name to value
        checker: Leaf checker built for the schema *record* belongs to
        parent_path: Path of *value* itself ("" at the top level)
        allow_extra: If False, undeclared keys are reported
        in_progress: Names of the records being expanded above this one

    Raises:
        RecursiveSchemaError: If *record* is already being expanded on this path
    """
    if record.name in in_progress:
        raise RecursiveSchemaError(
            f"Recursive schema not supported: record '{record.name}' contains itself",
            schema_path=parent_path or None,
        )
    in_progress = in_progress | {record.name}

    errors: List[ValidationError] = []
    for field in record.fields:
        path = child(parent_path, field.name)
        field_class = classify(field)

        if field.name not in value:
            if not field_class.may_be_absent:
                errors.append(missing_required(path))
            continue

        errors.extend(
            _validate_value(field.type, value[field.name], path, checker, allow_extra, in_progress)
        )

    if not allow_extra:
        declared = set(record.field_names)
        for key in value:
            if key not in declared:
                errors.append(unknown_field(child(parent_path, str(key))))

    return errors


def _validate_value(
    node: SchemaNode,
    value: Any,
    path: FieldPath,
    checker: LeafTypeChecker,
    allow_extra: bool,
    in_progress: FrozenSet[str],
) -> List[ValidationError]:
    if value is None:
        # A bare "null" type accepts null as well.
        if is_nullable(node) or (isinstance(node, PrimitiveNode) and node.is_null):
            return []
        return [null_not_allowed(path)]

    target = container_of(node)

    if isinstance(target, RecordNode):
        if not isinstance(value, Mapping):
            return [type_mismatch(path, checker.describe(node), value)]
        return validate_record(target, value, checker, path, allow_extra=allow_extra, in_progress=in_progress)

    if isinstance(target, ArrayNode):
        if not isinstance(value, (list, tuple)):
            return [array_type_mismatch(path, value)]
        errors: List[ValidationError] = []
        for i, item in enumerate(value):
            errors.extend(_validate_value(target.items, item, index(path, i), checker, allow_extra, in_progress))
        return errors

    if not checker.is_valid(node, value):
        return [type_mismatch(path, checker.describe(node), value)]
    return []
