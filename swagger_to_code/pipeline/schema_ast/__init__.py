"""
Schema AST (Abstract Syntax Tree) module.

Contains the AST node definitions and parser for Swagger schema objects.
"""

from __future__ import annotations

from .nodes import (
    AnyNode,
    ArrayNode,
    FileNode,
    IntersectionNode,
    NullableNode,
    NullNode,
    ObjectNode,
    PrimitiveNode,
    PropertyDef,
    RefNode,
    SchemaNode,
    TupleNode,
    TypeOverrideNode,
    UnionNode,
)
from .parser import SchemaParser

__all__ = [
    "SchemaNode",
    "NullNode",
    "RefNode",
    "TypeOverrideNode",
    "NullableNode",
    "UnionNode",
    "IntersectionNode",
    "PrimitiveNode",
    "FileNode",
    "ArrayNode",
    "TupleNode",
    "PropertyDef",
    "ObjectNode",
    "AnyNode",
    "SchemaParser",
]
