"""
Swagger schema parser that builds an AST.

Phase 1 of type inference: turn a raw schema dictionary into a tree of
SchemaNode variants, without resolving references or rendering anything.
"""

from __future__ import annotations

from typing import Any

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


class SchemaParser:
    """Parses Swagger schema objects into an AST."""

    # Primitive type names
    PRIMITIVE_TYPES = {"string", "integer", "number", "boolean", "null"}

    def parse(self, schema: dict[str, Any] | None, path: str = "#") -> SchemaNode:
        """
        Parse a schema object recursively.

        Args:
            schema: The schema dictionary (None for a missing schema)
            path: Current path in the document (for error messages)

        Returns:
            Appropriate SchemaNode subclass
        """
        if schema is None or not isinstance(schema, dict):
            return NullNode(source_path=path)

        description = schema.get("description")

        # Explicit null type
        if "type" in schema and schema["type"] is None:
            return NullNode(source_path=path, description=description)

        # Handle $ref
        if schema.get("$ref") is not None:
            return RefNode(ref_path=schema["$ref"], source_path=path, description=description)

        # Vendor type override
        if schema.get("x-type") is not None:
            return TypeOverrideNode(
                type_text=str(schema["x-type"]),
                source_path=path,
                description=description,
            )

        # Nullable marker wraps the same schema without the marker
        if schema.get("x-nullable"):
            inner = {k: v for k, v in schema.items() if k != "x-nullable"}
            return NullableNode(inner=self.parse(inner, path), source_path=path, description=description)

        if "type" not in schema:
            # Handle oneOf/anyOf
            if schema.get("anyOf") or schema.get("oneOf"):
                return self._parse_union_node(schema, path)

            # Handle inline allOf
            if schema.get("allOf"):
                return self._parse_intersection_node(schema, path)

            # Implicit object
            if "properties" in schema or schema.get("additionalProperties"):
                return self._parse_object_node(schema, path)

            return AnyNode(source_path=path, description=description)

        type_value = schema["type"]

        # Handle array of types (union)
        if isinstance(type_value, list):
            return self._parse_type_union(schema, type_value, path)

        if type_value == "array":
            return self._parse_array_node(schema, path)

        if type_value == "object":
            return self._parse_object_node(schema, path)

        if type_value == "file":
            return FileNode(source_path=path, description=description)

        if type_value in self.PRIMITIVE_TYPES:
            return self._parse_primitive_node(schema, type_value, path)

        # Fallback: unknown type name
        return AnyNode(type_name=str(type_value), source_path=path, description=description)

    def _parse_union_node(self, schema: dict[str, Any], path: str) -> UnionNode:
        """Parse a oneOf or anyOf union node."""
        union_type = "anyOf" if schema.get("anyOf") else "oneOf"
        variants = [self.parse(variant, f"{path}/{union_type}/{i}") for i, variant in enumerate(schema[union_type])]
        return UnionNode(
            variants=variants,
            union_type=union_type,
            source_path=path,
            description=schema.get("description"),
        )

    def _parse_intersection_node(self, schema: dict[str, Any], path: str) -> IntersectionNode:
        """Parse an inline allOf node, dropping nullable branches."""
        variants = [
            self.parse(variant, f"{path}/allOf/{i}")
            for i, variant in enumerate(schema["allOf"])
            if not (isinstance(variant, dict) and variant.get("x-nullable"))
        ]
        return IntersectionNode(variants=variants, source_path=path, description=schema.get("description"))

    def _parse_type_union(self, schema: dict[str, Any], types: list[Any], path: str) -> UnionNode:
        """Parse a union of types (e.g., ["string", "null"])."""
        variants = [self.parse({**schema, "type": t}, f"{path}/type/{i}") for i, t in enumerate(types)]
        return UnionNode(
            variants=variants,
            union_type="typeArray",  # Distinguish from explicit oneOf/anyOf
            source_path=path,
            description=schema.get("description"),
        )

    def _parse_array_node(self, schema: dict[str, Any], path: str) -> SchemaNode:
        """Parse an array type node."""
        items_schema = schema.get("items")

        if isinstance(items_schema, list):
            additional = schema.get("additionalItems")
            return TupleNode(
                items=[self.parse(item, f"{path}/items/{i}") for i, item in enumerate(items_schema)],
                min_items=schema.get("minItems"),
                max_items=schema.get("maxItems"),
                additional_items=self.parse(additional, f"{path}/additionalItems") if isinstance(additional, dict) else None,
                source_path=path,
                description=schema.get("description"),
            )

        items = self.parse(items_schema, f"{path}/items") if items_schema is not None else AnyNode(source_path=f"{path}/items")
        return ArrayNode(items=items, source_path=path, description=schema.get("description"))

    def _parse_object_node(self, schema: dict[str, Any], path: str) -> ObjectNode:
        """Parse an object type node."""
        required_fields = schema.get("required") or []

        properties = []
        for prop_name, prop_schema in (schema.get("properties") or {}).items():
            prop_path = f"{path}/properties/{prop_name}"
            prop_node = self.parse(prop_schema, prop_path)
            properties.append(
                PropertyDef(
                    name=prop_name,
                    type_node=prop_node,
                    is_required=prop_name in required_fields,
                    source_path=prop_path,
                    description=prop_node.description,
                )
            )

        additional = schema.get("additionalProperties")
        additional_node = None
        if isinstance(additional, dict):
            additional_node = self.parse(additional, f"{path}/additionalProperties")
        elif additional:
            additional_node = AnyNode(source_path=f"{path}/additionalProperties")

        return ObjectNode(
            properties=properties,
            required=list(required_fields),
            additional_properties=additional_node,
            source_path=path,
            description=schema.get("description"),
        )

    def _parse_primitive_node(self, schema: dict[str, Any], type_name: str, path: str) -> PrimitiveNode:
        """Parse a primitive type node."""
        enum = schema.get("enum") or None
        return PrimitiveNode(
            type_name=type_name,
            enum=list(enum) if enum else None,
            const=schema.get("const"),
            source_path=path,
            description=schema.get("description"),
        )
