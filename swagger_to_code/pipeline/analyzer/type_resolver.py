"""
Type resolver that infers TypeScript type expressions from schema objects.

Phase 2 of type inference: dispatch over the SchemaNode variants produced by
the parser, rendering each one and collecting the constituent type names that
dependency resolution needs.
"""

from __future__ import annotations

from typing import Any

from ...utils import simple_ref, to_property_identifier
from ..schema_ast.nodes import (
    AnyNode,
    ArrayNode,
    FileNode,
    IntersectionNode,
    NullableNode,
    NullNode,
    ObjectNode,
    PrimitiveNode,
    RefNode,
    SchemaNode,
    TupleNode,
    TypeOverrideNode,
    UnionNode,
)
from ..schema_ast.parser import SchemaParser
from .ir_nodes import TypeExpression

NULL_TYPE = "null"
ANY_TYPE = "any"
BLOB_TYPE = "Blob"


class TypeResolver:
    """Converts schema objects into TypeExpressions."""

    def __init__(self, parser: SchemaParser | None = None):
        self.parser = parser or SchemaParser()

    def resolve(self, schema: dict[str, Any] | None, path: str = "#") -> TypeExpression:
        """
        Infer the type of a raw schema object.

        Args:
            schema: The schema dictionary (None for a missing schema)
            path: Location of the schema in the document

        Returns:
            The inferred TypeExpression
        """
        return self.resolve_node(self.parser.parse(schema, path))

    def resolve_node(self, node: SchemaNode | None) -> TypeExpression:
        """Infer the type of a parsed schema node."""
        if node is None or isinstance(node, NullNode):
            return TypeExpression.scalar(NULL_TYPE)

        if isinstance(node, RefNode):
            return TypeExpression.scalar(simple_ref(node.ref_path) or NULL_TYPE)

        if isinstance(node, TypeOverrideNode):
            text = node.type_text.replace("List<", "Array<")
            return TypeExpression.scalar(text or NULL_TYPE)

        if isinstance(node, NullableNode):
            inner = self.resolve_node(node.inner)
            all_types = list(inner.all_types) if inner.all_types is not None else None
            return TypeExpression(text=f"{NULL_TYPE} | {inner}", all_types=all_types)

        if isinstance(node, UnionNode):
            return TypeExpression.union(*[self.resolve_node(v) for v in node.variants])

        if isinstance(node, IntersectionNode):
            return TypeExpression.union(*[self.resolve_node(v) for v in node.variants], separator=" & ")

        if isinstance(node, PrimitiveNode):
            return self._resolve_primitive(node)

        if isinstance(node, FileNode):
            return TypeExpression.scalar(BLOB_TYPE)

        if isinstance(node, ArrayNode):
            item_type = self.resolve_node(node.items)
            return TypeExpression.compound(f"Array<{item_type}>", item_type)

        if isinstance(node, TupleNode):
            return self._resolve_tuple(node)

        if isinstance(node, ObjectNode):
            return self._resolve_object(node)

        if isinstance(node, AnyNode):
            return TypeExpression.scalar(ANY_TYPE)

        # Fallback
        return TypeExpression.scalar(ANY_TYPE)

    def _resolve_primitive(self, node: PrimitiveNode) -> TypeExpression:
        """Resolve string, numeric, boolean and null types, including literal types."""
        if node.type_name == "string":
            if node.enum:
                return TypeExpression.scalar(" | ".join(_string_literal(v) for v in node.enum))
            if node.const is not None:
                return TypeExpression.scalar(_string_literal(node.const))
            return TypeExpression.scalar("string")

        if node.type_name in ("integer", "number"):
            if node.enum:
                return TypeExpression.scalar(" | ".join(_number_literal(v) for v in node.enum))
            if node.const is not None:
                return TypeExpression.scalar(_number_literal(node.const))
            return TypeExpression.scalar("number")

        if node.type_name == "boolean":
            return TypeExpression.scalar("boolean")

        return TypeExpression.scalar(NULL_TYPE)

    def _resolve_tuple(self, node: TupleNode) -> TypeExpression:
        """Resolve a fixed-size array as a union of the allowed tuple lengths."""
        if not node.max_items:
            # A tuple of unbounded length has no TypeScript equivalent
            return TypeExpression.scalar(f"Array<{ANY_TYPE}>")

        min_items = node.min_items or 0
        max_items = node.max_items
        types = [self.resolve_node(item) for item in node.items]
        if node.additional_items is not None:
            types.append(self.resolve_node(node.additional_items))
        else:
            types.append(TypeExpression.scalar(ANY_TYPE))

        variants: list[str] = []
        for length in range(min_items, max_items + 1):
            variant = "[" + ", ".join(str(t) for t in types[:length]) + "]"
            if variant not in variants:
                variants.append(variant)

        return TypeExpression.compound(" | ".join(variants), *types[:max_items])

    def _resolve_object(self, node: ObjectNode) -> TypeExpression:
        """Resolve an inline object as a record type literal."""
        members = []
        member_types = []
        for prop in node.properties:
            prop_type = self.resolve_node(prop.type_node)
            member_types.append(prop_type)
            separator = ": " if prop.is_required else "?: "
            members.append(f"{to_property_identifier(prop.name)}{separator}{prop_type}")

        if node.additional_properties is not None:
            value_type = self.resolve_node(node.additional_properties)
            member_types.append(value_type)
            members.append(f"[key: string]: {value_type}")

        return TypeExpression.compound("{" + ", ".join(members) + "}", *member_types)


def _string_literal(value: Any) -> str:
    return "'" + str(value).replace("\\", "\\\\").replace("'", "\\'") + "'"


def _number_literal(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
