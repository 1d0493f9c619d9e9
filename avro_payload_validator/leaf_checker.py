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

"""Single-type conformance checks backed by fastavro.

Every node of a compiled schema is rendered back to an Avro declaration,
wrapped as the single field of a holder record and parsed by fastavro once,
when the checker is built. fastavro only keeps named types on a parsed record,
so the holder lets unions and primitives be parsed up front too. Lookups are
keyed by node identity, so the walker never re-parses a type per field.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional, Set

import fastavro
from fastavro.schema import SchemaParseException
from fastavro.validation import validate as fastavro_validate

from .schema.nodes import (
    ArrayNode,
    EnumNode,
    FixedNode,
    MapNode,
    PrimitiveNode,
    RecordNode,
    SchemaNode,
    UnionNode,
    is_named,
)

logger = logging.getLogger(__name__)


def kind_of(value: Any) -> str:
    """Name the observed kind of *value* for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (bytes, bytearray)):
        return "bytes"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _render(node: SchemaNode, emitted: Optional[Set[int]], top: bool, with_defaults: bool = True) -> Any:
    """Render *node* as an Avro declaration.

    With ``emitted=None`` nested named types are written by name only. With a
    set, each named type is written in full the first time it is met and by
    name afterwards, which is what fastavro expects.
    """
    if is_named(node) and not top:
        if emitted is None or id(node) in emitted:
            return node.name
    if is_named(node) and emitted is not None:
        emitted.add(id(node))

    if isinstance(node, PrimitiveNode):
        if not node.logical_type and not node.attributes:
            return node.name
        declaration = {"type": node.name}
        if node.logical_type:
            declaration["logicalType"] = node.logical_type
        declaration.update(node.attributes)
        return declaration

    if isinstance(node, UnionNode):
        return [_render(m, emitted, False, with_defaults) for m in node.members]

    if isinstance(node, ArrayNode):
        return {"type": "array", "items": _render(node.items, emitted, False, with_defaults)}

    if isinstance(node, MapNode):
        return {"type": "map", "values": _render(node.values, emitted, False, with_defaults)}

    if isinstance(node, EnumNode):
        declaration = {"type": "enum", "name": node.name, "symbols": list(node.symbols)}
        if node.default is not None:
            declaration["default"] = node.default
        return declaration

    if isinstance(node, FixedNode):
        declaration = {"type": "fixed", "name": node.name, "size": node.size}
        if node.logical_type:
            declaration["logicalType"] = node.logical_type
        declaration.update(node.attributes)
        return declaration

    if isinstance(node, RecordNode):
        fields = []
        for f in node.fields:
            rendered = {"name": f.name, "type": _render(f.type, emitted, False, with_defaults)}
            if with_defaults and f.has_default:
                rendered["default"] = f.default
            fields.append(rendered)
        return {"type": "record", "name": node.name, "fields": fields}

    raise TypeError(f"Unknown schema node: {node!r}")


def describe(node: SchemaNode) -> str:
    """Compact JSON for *node*, e.g. ``"string"`` or ``["null","int"]``."""
    return json.dumps(_render(node, None, True), separators=(",", ":"))


def _iter_nodes(root: SchemaNode) -> Iterator[SchemaNode]:
    seen: Set[int] = set()
    stack = [root]
    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        yield node
        if isinstance(node, RecordNode):
            stack.extend(f.type for f in node.fields)
        elif isinstance(node, UnionNode):
            stack.extend(node.members)
        elif isinstance(node, ArrayNode):
            stack.append(node.items)
        elif isinstance(node, MapNode):
            stack.append(node.values)


# Holder record for single-type checks. It has no namespace, so names written
# inside it keep the namespaces they were compiled with.
_HOLDER_RECORD = "__avro_payload_validator_leaf__"
_HOLDER_FIELD = "value"


def _holder(node: SchemaNode, with_defaults: bool) -> Dict[str, Any]:
    return {
        "type": "record",
        "name": _HOLDER_RECORD,
        "fields": [{"name": _HOLDER_FIELD, "type": _render(node, set(), True, with_defaults)}],
    }


class LeafTypeChecker:
    """Precomputed ``is_valid`` / ``describe`` table for every node under a root."""

    def __init__(self, root: SchemaNode):
        self._parsed: Dict[int, Dict[str, Any]] = {}
        self._descriptions: Dict[int, str] = {}
        for node in _iter_nodes(root):
            self._parsed[id(node)] = self._parse(node)
            self._descriptions[id(node)] = describe(node)
        logger.debug(f"Prepared leaf checks for {len(self._parsed)} schema node(s)")

    @staticmethod
    def _parse(node: SchemaNode) -> Dict[str, Any]:
        try:
            return fastavro.parse_schema(_holder(node, with_defaults=True))
        except SchemaParseException as exc:
            # fastavro wants a union default to match the first member; the
            # null marker may sit anywhere here, so fall back to no defaults.
            logger.debug(f"Re-parsing {describe(node)} without field defaults: {exc}")
            return fastavro.parse_schema(_holder(node, with_defaults=False))

    def is_valid(self, node: SchemaNode, value: Any) -> bool:
        try:
            return fastavro_validate({_HOLDER_FIELD: value}, self._parsed[id(node)], raise_errors=False)
        except (TypeError, ValueError) as exc:
            # Logical-type writers (decimal precision/scale, ...) raise instead
            # of reporting a mismatch.
            logger.debug(f"Value rejected by {self.describe(node)}: {exc}")
            return False

    def describe(self, node: SchemaNode) -> str:
        return self._descriptions[id(node)]
