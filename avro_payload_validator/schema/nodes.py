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

"""Compiled schema nodes.

A raw Avro declaration is compiled once into these nodes; everything
downstream dispatches on the node class instead of on ``"type"`` strings.

Nodes compare by identity (``eq=False``) so that a record referenced from
several places, or from itself, is a single object.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union


PRIMITIVE_TYPES = ("null", "boolean", "int", "long", "float", "double", "bytes", "string")


class _NoDefault:
    def __repr__(self) -> str:
        return "NO_DEFAULT"


# Distinguishes "no default declared" from "default: null".
NO_DEFAULT: Any = _NoDefault()


@dataclass(frozen=True, eq=False)
class PrimitiveNode:
    name: str
    logical_type: Optional[str] = None
    # Extra logical-type properties in declaration order, e.g. precision, scale
    attributes: Tuple[Tuple[str, Any], ...] = ()

    @property
    def is_null(self) -> bool:
        return self.name == "null"


@dataclass(frozen=True, eq=False)
class EnumNode:
    name: str
    symbols: Tuple[str, ...]
    default: Optional[str] = None


@dataclass(frozen=True, eq=False)
class FixedNode:
    name: str
    size: int
    logical_type: Optional[str] = None
    attributes: Tuple[Tuple[str, Any], ...] = ()


@dataclass(frozen=True, eq=False)
class ArrayNode:
    items: "SchemaNode"


@dataclass(frozen=True, eq=False)
class MapNode:
    values: "SchemaNode"


@dataclass(frozen=True, eq=False)
class UnionNode:
    members: Tuple["SchemaNode", ...]

    @property
    def is_nullable(self) -> bool:
        return any(isinstance(m, PrimitiveNode) and m.is_null for m in self.members)

    def non_null_members(self) -> Tuple["SchemaNode", ...]:
        return tuple(m for m in self.members if not (isinstance(m, PrimitiveNode) and m.is_null))


@dataclass(frozen=True)
class Field:
    name: str
    type: "SchemaNode"
    default: Any = NO_DEFAULT
    doc: Optional[str] = None

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT


@dataclass(frozen=True, eq=False)
class RecordNode:
    name: str
    # Set once by the compiler; self-references need the node to exist
    # before its fields do.
    fields: Tuple[Field, ...] = ()
    doc: Optional[str] = None

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)


SchemaNode = Union[PrimitiveNode, EnumNode, FixedNode, ArrayNode, MapNode, UnionNode, RecordNode]

NamedNode = Union[RecordNode, EnumNode, FixedNode]
NAMED_NODE_TYPES = (RecordNode, EnumNode, FixedNode)


def is_named(node: SchemaNode) -> bool:
    return isinstance(node, NAMED_NODE_TYPES)
