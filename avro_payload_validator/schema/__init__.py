"""Schema nodes, declaration checking and compilation.

This package does not depend on the walker or the leaf checker, so that a
compiled tree can be produced without fastavro being involved.
"""

from .nodes import (
    NO_DEFAULT,
    ArrayNode,
    EnumNode,
    Field,
    FixedNode,
    MapNode,
    PrimitiveNode,
    RecordNode,
    SchemaNode,
    UnionNode,
)
from .compiler import SchemaCompiler, compile_declaration
from .loader import clear_cache, load_schema
