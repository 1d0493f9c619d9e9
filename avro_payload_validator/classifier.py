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

"""Field classification: may the value be null, and may it be absent."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .schema.nodes import ArrayNode, Field, RecordNode, SchemaNode, UnionNode


@dataclass(frozen=True)
class FieldClass:
    nullable: bool
    has_default: bool

    @property
    def may_be_absent(self) -> bool:
        return self.nullable or self.has_default


def is_nullable(node: SchemaNode) -> bool:
    """A type is nullable iff it is a union with ``"null"`` among its members."""
    return isinstance(node, UnionNode) and node.is_nullable


def classify(field: Field) -> FieldClass:
    return FieldClass(nullable=is_nullable(field.type), has_default=field.has_default)


def container_of(node: SchemaNode) -> Optional[SchemaNode]:
    """Return the record or array the walker should descend into, if any.

    A nullable union descends into its only non-null member. Any other union
    is left to the leaf type checker.
    """
    if isinstance(node, (RecordNode, ArrayNode)):
        return node
    if isinstance(node, UnionNode):
        members = node.non_null_members()
        if node.is_nullable and len(members) == 1 and isinstance(members[0], (RecordNode, ArrayNode)):
            return members[0]
    return None
