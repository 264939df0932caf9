"""
Model builder that turns the document definitions into ModelDescriptors.

Runs three passes over the definitions:

1. Build a descriptor per definition, classifying it into exactly one kind
2. Link the inheritance hierarchy (parents <-> subclasses)
3. Resolve the direct dependencies of each model
"""

from __future__ import annotations

import logging
from typing import Any

from ...utils import (
    normalize_model_name,
    simple_ref,
    to_class_name,
    to_enum_name,
    to_file_name,
    to_property_identifier,
)
from ..config import CompilerConfig
from ..errors import UnresolvedReferenceError
from .dependency_resolver import DependencyResolver
from .ir_nodes import (
    EnumValueDescriptor,
    ModelDescriptor,
    ModelKind,
    PropertyDescriptor,
    TypeExpression,
)
from .type_resolver import TypeResolver

logger = logging.getLogger(__name__)


class ModelBuilder:
    """Builds the model table from the document definitions."""

    def __init__(self, config: CompilerConfig, type_resolver: TypeResolver | None = None):
        """
        Initialize the builder.

        Args:
            config: Compiler configuration
            type_resolver: Resolver used for property, element and alias types
        """
        self.config = config
        self.type_resolver = type_resolver or TypeResolver()

    def build(self, definitions: dict[str, Any]) -> dict[str, ModelDescriptor]:
        """
        Build, link and resolve all models.

        Args:
            definitions: The ``definitions`` section of the document

        Returns:
            The model table, keyed by normalized class name

        Raises:
            UnresolvedReferenceError: If a model extends an unknown model
        """
        models: dict[str, ModelDescriptor] = {}
        for name, schema in definitions.items():
            # Skip comment entries
            if not isinstance(schema, dict):
                continue

            model = self.build_model(name, schema)
            key = normalize_model_name(model.model_class)
            if key in models:
                logger.warning(
                    "Definition '%s' has the same class name as '%s' (%s). Using '%s'.",
                    name,
                    models[key].name,
                    model.model_class,
                    name,
                )
            models[key] = model

        self.link_hierarchy(models)
        self.resolve_dependencies(models)
        return models

    def build_model(self, name: str, schema: dict[str, Any]) -> ModelDescriptor:
        """Build the descriptor of a single definition."""
        model_class = to_class_name(name)
        model = ModelDescriptor(
            name=name,
            model_class=model_class,
            model_file=to_file_name(model_class) + self.config.model_file_suffix,
            description=schema.get("description"),
            example=schema.get("example"),
            example_file=to_file_name(model_class) + self.config.example_file_suffix,
        )
        path = f"#/definitions/{name}"

        if schema.get("allOf"):
            self._build_composition(model, schema, path)
        elif schema.get("type") == "array":
            model.kind = ModelKind.ARRAY
            model.element_type = self.type_resolver.resolve(schema, path)
        elif "type" not in schema and (schema.get("anyOf") or schema.get("oneOf")):
            variants_key = "anyOf" if schema.get("anyOf") else "oneOf"
            variants = [self.type_resolver.resolve(v, f"{path}/{variants_key}/{i}") for i, v in enumerate(schema[variants_key])]
            model.kind = ModelKind.UNION
            model.alias_type = TypeExpression.union(*variants, separator=" |\n  ")
        elif "type" not in schema or schema["type"] == "object":
            model.kind = ModelKind.OBJECT
            model.properties = self._build_properties(schema.get("properties") or {}, schema.get("required") or [], path)
            model.additional_properties_type = self._additional_properties_type(schema, path)
        else:
            model.kind = ModelKind.SIMPLE
            model.alias_type = self.type_resolver.resolve(schema, path)

        return model

    def _build_composition(self, model: ModelDescriptor, schema: dict[str, Any], path: str) -> None:
        """Classify an allOf definition: a subclass, an enum or a string alias."""
        parents = []
        properties: dict[str, Any] = {}
        required: list[str] = []
        additional_properties_type = None

        for i, branch in enumerate(schema["allOf"]):
            if not isinstance(branch, dict):
                continue
            if branch.get("$ref"):
                parent = simple_ref(branch["$ref"])
                if parent:
                    parents.append(parent)
                continue
            properties.update(branch.get("properties") or {})
            for name in branch.get("required") or []:
                if name not in required:
                    required.append(name)
            if additional_properties_type is None:
                additional_properties_type = self._additional_properties_type(branch, f"{path}/allOf/{i}")

        enum_values = schema.get("enum") or []

        if parents or (properties and not enum_values):
            model.kind = ModelKind.OBJECT
            model.parents = parents
            model.properties = self._build_properties(properties, required, path)
            model.additional_properties_type = additional_properties_type
        elif enum_values:
            model.kind = ModelKind.ENUM
            model.enum_values = self._build_enum_values(enum_values)
        else:
            model.kind = ModelKind.SIMPLE
            model.alias_type = TypeExpression.scalar("string")

    def _build_enum_values(self, values: list[Any]) -> list[EnumValueDescriptor]:
        """Build the enum constants, normalizing each value into a constant name."""
        last = len(values) - 1
        return [
            EnumValueDescriptor(
                name=to_enum_name(value),
                value=str(value).replace("'", "\\'"),
                is_last=i == last,
            )
            for i, value in enumerate(values)
        ]

    def _build_properties(self, properties: dict[str, Any], required: list[str], path: str) -> list[PropertyDescriptor]:
        """Build property descriptors sorted by name, flagging the last one."""
        result = []
        for name, prop in properties.items():
            result.append(
                PropertyDescriptor(
                    name=name,
                    identifier=to_property_identifier(name),
                    required=name in required,
                    description=prop.get("description") if isinstance(prop, dict) else None,
                    type=self.type_resolver.resolve(prop, f"{path}/properties/{name}"),
                )
            )

        result.sort(key=lambda p: p.name)
        if result:
            result[-1].is_last = True
        return result

    def _additional_properties_type(self, schema: dict[str, Any], path: str) -> TypeExpression | None:
        """Value type of the keys not declared as properties, if any are allowed."""
        additional = schema.get("additionalProperties")
        if isinstance(additional, dict):
            return self.type_resolver.resolve(additional, f"{path}/additionalProperties")
        if additional:
            return TypeExpression.scalar("any")
        return None

    def link_hierarchy(self, models: dict[str, ModelDescriptor]) -> None:
        """Link every object model to its parents, registering it as their subclass."""
        for model in models.values():
            # Only objects can have hierarchies
            if not model.is_object or not model.parents:
                continue

            linked = []
            for parent_name in model.parents:
                parent = models.get(normalize_model_name(parent_name))
                if parent is None:
                    raise UnresolvedReferenceError(
                        parent_name,
                        f"Model '{model.name}' extends '{parent_name}', which is not a known model",
                    )
                if model.model_class not in parent.subclasses:
                    parent.subclasses.append(model.model_class)
                linked.append(parent.model_class)
            model.parents = linked

    def resolve_dependencies(self, models: dict[str, ModelDescriptor]) -> None:
        """Compute the direct dependencies of each model."""
        for model in models.values():
            # Enums and simple types have no dependencies
            if model.is_enum or (model.kind == ModelKind.SIMPLE and not (model.alias_type and model.alias_type.is_compound)):
                model.dependencies = []
                continue

            dependencies = DependencyResolver(models, model.model_class)
            for parent in model.parents:
                dependencies.add(parent)
            for prop in model.properties:
                dependencies.add(prop.type)
            dependencies.add(model.element_type)
            dependencies.add(model.alias_type)
            dependencies.add(model.additional_properties_type)
            model.dependencies = dependencies.get()
