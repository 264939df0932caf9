"""
AST (Abstract Syntax Tree) node definitions for Swagger schema objects.

These nodes are a tagged-variant view of a raw schema dictionary. Each node
kind corresponds to one arm of type inference, in the priority order the
parser applies when several keywords are present on the same schema.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SchemaNode:
    """Base class for all AST nodes."""

    # Location in the document (for error messages)
    source_path: str = ""

    # Human-readable description, if any
    description: str | None = None


@dataclass
class NullNode(SchemaNode):
    """A missing schema, or an explicit ``type: null``."""


@dataclass
class RefNode(SchemaNode):
    """A ``$ref`` to a named definition."""

    ref_path: str = ""  # e.g., "#/definitions/Pet"


@dataclass
class TypeOverrideNode(SchemaNode):
    """A type given verbatim through the ``x-type`` vendor extension."""

    type_text: str = ""


@dataclass
class NullableNode(SchemaNode):
    """A schema flagged with ``x-nullable``."""

    inner: SchemaNode | None = None


@dataclass
class UnionNode(SchemaNode):
    """A oneOf / anyOf union, or a ``type`` given as a list of types."""

    variants: list[SchemaNode] = field(default_factory=list)
    union_type: str = "oneOf"  # "oneOf", "anyOf" or "typeArray"


@dataclass
class IntersectionNode(SchemaNode):
    """An inline allOf composition (nullable branches already dropped)."""

    variants: list[SchemaNode] = field(default_factory=list)


@dataclass
class PrimitiveNode(SchemaNode):
    """A string, integer, number, boolean or null type."""

    type_name: str = ""

    # Literal constraints rendered as literal types
    enum: list[Any] | None = None
    const: Any = None


@dataclass
class FileNode(SchemaNode):
    """A ``type: file`` parameter or response (binary content)."""


@dataclass
class ArrayNode(SchemaNode):
    """An array with a single item type."""

    items: SchemaNode | None = None


@dataclass
class TupleNode(SchemaNode):
    """An array whose ``items`` is a list of positional types."""

    items: list[SchemaNode] = field(default_factory=list)
    min_items: int | None = None
    max_items: int | None = None
    additional_items: SchemaNode | None = None


@dataclass
class PropertyDef(SchemaNode):
    """A property of an inline object."""

    name: str = ""
    type_node: SchemaNode | None = None
    is_required: bool = False


@dataclass
class ObjectNode(SchemaNode):
    """An inline object with declared properties and/or a value type for extra keys."""

    properties: list[PropertyDef] = field(default_factory=list)
    required: list[str] = field(default_factory=list)
    additional_properties: SchemaNode | None = None


@dataclass
class AnyNode(SchemaNode):
    """Fallback for schemas whose type cannot be determined."""

    type_name: str | None = None
