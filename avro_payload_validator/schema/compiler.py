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

"""Compile raw Avro declarations into :mod:`.nodes` trees."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..exceptions import SchemaDefinitionError
from .meta_schema import check_declaration
from .nodes import (
    NO_DEFAULT,
    PRIMITIVE_TYPES,
    ArrayNode,
    EnumNode,
    Field,
    FixedNode,
    MapNode,
    NamedNode,
    PrimitiveNode,
    RecordNode,
    SchemaNode,
    UnionNode,
)

logger = logging.getLogger(__name__)


def _join_path(base: str, token: Any) -> str:
    return f"{base}/{token}"


def _fullname(name: str, namespace: Optional[str], enclosing: Optional[str]) -> str:
    if "." in name:
        return name
    ns = namespace if namespace is not None else enclosing
    return f"{ns}.{name}" if ns else name


def _namespace_of(fullname: str) -> Optional[str]:
    ns, _, _ = fullname.rpartition(".")
    return ns or None


# Keys the nodes hold themselves; anything else on a primitive or fixed
# declaration (precision, scale, ...) is kept as an attribute.
_PRIMITIVE_KEYS = frozenset(("type", "logicalType", "doc"))
_FIXED_KEYS = frozenset(("type", "name", "namespace", "aliases", "size", "logicalType", "doc"))


def _extra_attributes(declaration: Dict[str, Any], reserved: frozenset) -> Tuple[Tuple[str, Any], ...]:
    return tuple((key, value) for key, value in declaration.items() if key not in reserved)


class SchemaCompiler:
    """Compiles one declaration; named types are registered as they are met."""

    def __init__(self):
        self.named_types: Dict[str, NamedNode] = {}

    def compile(self, declaration: Any, namespace: Optional[str] = None, path: str = "") -> SchemaNode:
        if isinstance(declaration, str):
            if declaration in PRIMITIVE_TYPES:
                return PrimitiveNode(declaration)
            return self._resolve(declaration, namespace, path)

        if isinstance(declaration, list):
            return self._compile_union(declaration, namespace, path)

        if isinstance(declaration, dict):
            return self._compile_complex(declaration, namespace, path)

        raise SchemaDefinitionError(
            f"Unsupported schema declaration of type {type(declaration).__name__}", schema_path=path or "/"
        )

    def _resolve(self, name: str, namespace: Optional[str], path: str) -> NamedNode:
        candidates = [name]
        if "." not in name and namespace:
            candidates.insert(0, f"{namespace}.{name}")
        for candidate in candidates:
            node = self.named_types.get(candidate)
            if node is not None:
                return node
        raise SchemaDefinitionError(f"Unknown type reference '{name}'", schema_path=path or "/")

    def _register(self, node: NamedNode, path: str) -> None:
        if node.name in self.named_types:
            raise SchemaDefinitionError(f"Named type '{node.name}' is defined more than once", schema_path=path or "/")
        self.named_types[node.name] = node

    def _compile_union(self, declaration: List[Any], namespace: Optional[str], path: str) -> UnionNode:
        members: List[SchemaNode] = []
        for idx, member in enumerate(declaration):
            member_path = _join_path(path, idx)
            if isinstance(member, list):
                raise SchemaDefinitionError("Unions may not immediately contain other unions", schema_path=member_path)
            members.append(self.compile(member, namespace, member_path))
        return UnionNode(tuple(members))

    def _compile_complex(self, declaration: Dict[str, Any], namespace: Optional[str], path: str) -> SchemaNode:
        type_name = declaration.get("type")
        if type_name is None:
            raise SchemaDefinitionError("Schema object has no 'type'", schema_path=path or "/")

        if type_name in PRIMITIVE_TYPES:
            return PrimitiveNode(
                type_name,
                declaration.get("logicalType"),
                _extra_attributes(declaration, _PRIMITIVE_KEYS),
            )

        if type_name in ("record", "error"):
            return self._compile_record(declaration, namespace, path)

        if type_name == "enum":
            node = EnumNode(
                name=_fullname(declaration["name"], declaration.get("namespace"), namespace),
                symbols=tuple(declaration["symbols"]),
                default=declaration.get("default"),
            )
            if node.default is not None and node.default not in node.symbols:
                raise SchemaDefinitionError(
                    f"Enum default '{node.default}' is not one of its symbols", schema_path=_join_path(path, "default")
                )
            self._register(node, path)
            return node

        if type_name == "fixed":
            node = FixedNode(
                name=_fullname(declaration["name"], declaration.get("namespace"), namespace),
                size=declaration["size"],
                logical_type=declaration.get("logicalType"),
                attributes=_extra_attributes(declaration, _FIXED_KEYS),
            )
            self._register(node, path)
            return node

        if type_name == "array":
            return ArrayNode(self.compile(declaration["items"], namespace, _join_path(path, "items")))

        if type_name == "map":
            return MapNode(self.compile(declaration["values"], namespace, _join_path(path, "values")))

        # {"type": "SomeNamedType"}
        return self._resolve(type_name, namespace, _join_path(path, "type"))

    def _compile_record(self, declaration: Dict[str, Any], namespace: Optional[str], path: str) -> RecordNode:
        name = _fullname(declaration["name"], declaration.get("namespace"), namespace)
        record = RecordNode(name=name, doc=declaration.get("doc"))
        # Registered before the fields so that fields may refer back to it.
        self._register(record, path)

        child_namespace = _namespace_of(name)
        seen = set()
        fields: List[Field] = []
        for idx, raw_field in enumerate(declaration["fields"]):
            field_path = _join_path(_join_path(path, "fields"), idx)
            field_name = raw_field.get("name")
            if field_name in seen:
                raise SchemaDefinitionError(
                    f"Field '{field_name}' is declared more than once in record '{name}'", schema_path=field_path
                )
            seen.add(field_name)
            if "type" not in raw_field:
                raise SchemaDefinitionError(f"Field '{field_name}' has no type", schema_path=field_path)

            fields.append(
                Field(
                    name=field_name,
                    type=self.compile(raw_field["type"], child_namespace, _join_path(field_path, "type")),
                    default=raw_field["default"] if "default" in raw_field else NO_DEFAULT,
                    doc=raw_field.get("doc"),
                )
            )
        object.__setattr__(record, "fields", tuple(fields))
        return record


def compile_declaration(declaration: Any) -> Tuple[RecordNode, Dict[str, NamedNode]]:
    """Check and compile a top-level declaration.

    Returns:
        The root record node and the table of named types by full name.

    Raises:
        SchemaDefinitionError: If the declaration is malformed, references an
            unknown type, or its top level is not a record.
    """
    check_declaration(declaration)

    compiler = SchemaCompiler()
    root = compiler.compile(declaration)
    if not isinstance(root, RecordNode):
        raise SchemaDefinitionError("Top-level schema must be a record", schema_path="/")

    logger.debug(f"Compiled schema '{root.name}' with {len(compiler.named_types)} named type(s)")
    return root, compiler.named_types
