"""
Analyzer module.

Contains type inference, model and operation building, dependency
resolution, tag filtering and the compiler driving them.
"""

from __future__ import annotations

from .compiler import SwaggerCompiler
from .dependency_resolver import DependencyResolver
from .ir_nodes import (
    CompiledApi,
    EnumValueDescriptor,
    ModelDescriptor,
    ModelKind,
    OperationDescriptor,
    ParameterDescriptor,
    PropertyDescriptor,
    ResponseDescriptor,
    ResultKind,
    ServiceDescriptor,
    TypeExpression,
)
from .model_builder import ModelBuilder
from .operation_builder import OperationBuilder
from .reference_resolver import ReferenceResolver
from .tag_filter import TagFilter
from .type_resolver import TypeResolver

__all__ = [
    "CompiledApi",
    "DependencyResolver",
    "EnumValueDescriptor",
    "ModelBuilder",
    "ModelDescriptor",
    "ModelKind",
    "OperationBuilder",
    "OperationDescriptor",
    "ParameterDescriptor",
    "PropertyDescriptor",
    "ReferenceResolver",
    "ResponseDescriptor",
    "ResultKind",
    "ServiceDescriptor",
    "SwaggerCompiler",
    "TagFilter",
    "TypeExpression",
    "TypeResolver",
]
