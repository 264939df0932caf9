"""
IR (Intermediate Representation) node definitions.

These nodes represent the compiled Swagger document, ready for rendering.
All type expressions are inferred, model relationships are linked by class
name through the model table, and unused descriptors have been pruned.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ...utils import normalize_model_name
from ..config import CompilerConfig


def strip_type_wrappers(text: str, nullable_only: bool = False) -> str:
    """Remove nullable and array designations from a rendered type.

    For example, "Array<Pet>" and "Pet[]" return "Pet", "null | Pet" returns
    "Pet", while "Pet" returns "Pet". With ``nullable_only`` only the
    nullable prefix is removed.
    """
    text = text.replace(" ", "")
    while True:
        if text.startswith("null|"):
            text = text[len("null|") :]
        elif text.startswith("undefined|"):
            text = text[len("undefined|") :]
        else:
            break
    if not text or nullable_only:
        return text
    while text.startswith("Array<") and text.endswith(">"):
        text = text[len("Array<") : -1]
    pos = text.find("[")
    return text[:pos] if pos > 0 else text


@dataclass
class TypeExpression:
    """A compiled type.

    Scalar expressions only carry their rendering. Compound expressions
    (unions, intersections, inline objects, arrays and tuples) also carry the
    ordered, deduplicated names of their constituent types, used to extract
    dependencies but never for display.
    """

    text: str = ""
    all_types: list[str] | None = None

    def __str__(self) -> str:
        return self.text

    @property
    def is_compound(self) -> bool:
        return self.all_types is not None

    def dependency_names(self) -> list[str]:
        """Candidate model names this type depends on."""
        if self.all_types is not None:
            return list(self.all_types)
        return [strip_type_wrappers(self.text)]

    def bare_name(self, nullable_only: bool = False) -> str:
        """The single type name behind this expression, or "object" for a compound of several types."""
        if self.all_types is not None:
            if len(self.all_types) == 1:
                return strip_type_wrappers(self.all_types[0], nullable_only)
            return "object"
        return strip_type_wrappers(self.text, nullable_only)

    @classmethod
    def scalar(cls, text: str) -> TypeExpression:
        return cls(text=text)

    @classmethod
    def compound(cls, text: str, *constituents: TypeExpression) -> TypeExpression:
        return cls(text=text, all_types=merge_types(*constituents))

    @classmethod
    def union(cls, *variants: TypeExpression, separator: str = " | ") -> TypeExpression:
        return cls.compound(separator.join(str(v) for v in variants), *variants)


def merge_types(*types: TypeExpression) -> list[str]:
    """Combine the constituents of several types, keeping first-seen order."""
    all_types: list[str] = []
    for type_expr in types:
        names = type_expr.all_types if type_expr.all_types is not None else [type_expr.text]
        for name in names:
            if name not in all_types:
                all_types.append(name)
    return all_types


class ModelKind(str, Enum):
    """Kind of a named model."""

    OBJECT = "object"  # Interface with properties (and parents)
    ENUM = "enum"  # Enumeration of constants
    ARRAY = "array"  # Alias for an array type
    SIMPLE = "simple"  # Alias for any other type
    UNION = "union"  # Alias for a oneOf / anyOf union


class ResultKind(str, Enum):
    """Shape of the value an operation returns."""

    VOID = "void"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ENUM = "enum"
    OBJECT = "object"
    PRIMITIVE_ARRAY = "primitive_array"
    FILE = "file"
    UNKNOWN = "unknown"


@dataclass
class PropertyDescriptor:
    """A property of an object model."""

    name: str = ""
    identifier: str = ""  # Quoted when not a bare identifier
    required: bool = False
    description: str | None = None
    type: TypeExpression = field(default_factory=TypeExpression)
    is_last: bool = False


@dataclass
class EnumValueDescriptor:
    """A constant of an enum model."""

    name: str = ""
    value: str = ""
    is_last: bool = False


@dataclass
class ModelDescriptor:
    """A named definition of the document."""

    name: str = ""  # Definition key
    model_class: str = ""
    model_file: str = ""
    description: str | None = None
    kind: ModelKind = ModelKind.OBJECT

    properties: list[PropertyDescriptor] = field(default_factory=list)

    # Class names, resolved through the model table
    parents: list[str] = field(default_factory=list)
    subclasses: list[str] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)

    enum_values: list[EnumValueDescriptor] = field(default_factory=list)
    element_type: TypeExpression | None = None
    alias_type: TypeExpression | None = None
    additional_properties_type: TypeExpression | None = None

    example: Any = None
    example_file: str = ""
    is_last: bool = False

    @property
    def is_object(self) -> bool:
        return self.kind == ModelKind.OBJECT

    @property
    def is_enum(self) -> bool:
        return self.kind == ModelKind.ENUM

    @property
    def is_array(self) -> bool:
        return self.kind == ModelKind.ARRAY

    @property
    def is_simple(self) -> bool:
        return self.kind in (ModelKind.SIMPLE, ModelKind.UNION)


@dataclass
class ParameterDescriptor:
    """A parameter of an operation."""

    name: str = ""
    location: str = ""  # "path", "query", "header", "body" or "formData"
    identifier: str = ""
    full_access: str = ""  # Identifier, scoped to the parameters container if any
    required: bool = False
    type: TypeExpression = field(default_factory=TypeExpression)
    description: str | None = None
    collection_format: str | None = None
    is_array: bool = False
    to_json: bool = False  # Form value that must be JSON-encoded
    is_last: bool = False


@dataclass
class ResponseDescriptor:
    """A declared response with a schema."""

    code: str = ""
    type: TypeExpression = field(default_factory=TypeExpression)
    description: str | None = None

    @property
    def is_success(self) -> bool:
        return is_success_status(self.code)


def is_success_status(code: str) -> bool:
    """Whether a response code is a 2xx status."""
    return code.isdigit() and 200 <= int(code) < 300


@dataclass
class OperationDescriptor:
    """An operation (path + method) of a service."""

    name: str = ""
    method: str = ""
    path: str = ""
    path_expression: str = ""
    parameters: list[ParameterDescriptor] = field(default_factory=list)
    responses: dict[str, ResponseDescriptor] = field(default_factory=dict)
    result_type: TypeExpression = field(default_factory=lambda: TypeExpression.scalar("null"))
    result_description: str | None = None
    result_kind: ResultKind = ResultKind.UNKNOWN
    returns_headers: bool = False
    is_multipart: bool = False
    params_class: str | None = None
    description: str = ""

    @property
    def response_type(self) -> str:
        """How the response body must be decoded: "blob", "text" or "json"."""
        if self.result_kind == ResultKind.FILE:
            return "blob"
        if self.result_kind in (
            ResultKind.VOID,
            ResultKind.STRING,
            ResultKind.NUMBER,
            ResultKind.BOOLEAN,
            ResultKind.ENUM,
        ):
            return "text"
        return "json"


@dataclass
class ServiceDescriptor:
    """The operations sharing a tag."""

    name: str = ""  # Normalized tag
    service_class: str = ""
    service_file: str = ""
    description: str | None = None
    operations: list[OperationDescriptor] = field(default_factory=list)

    # Class names of the models used by successful responses and parameters,
    # and by error responses
    dependencies: list[str] = field(default_factory=list)
    error_dependencies: list[str] = field(default_factory=list)

    is_last: bool = False


@dataclass
class CompiledApi:
    """The complete Intermediate Representation."""

    # Keyed by normalized model class name, in definition order
    models: dict[str, ModelDescriptor] = field(default_factory=dict)

    # Keyed by normalized tag, in first-seen order
    services: dict[str, ServiceDescriptor] = field(default_factory=dict)

    root_url: str = ""

    config: CompilerConfig = field(default_factory=CompilerConfig)

    def model(self, name: str) -> ModelDescriptor | None:
        """Look up a model by class or definition name."""
        return self.models.get(normalize_model_name(name))
