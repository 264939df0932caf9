"""
Swagger compiler that transforms a document into the IR.

Runs the phases strictly in order, since each one consumes the tables built
by the previous ones:

1. Models: classify definitions, link hierarchies, resolve dependencies
2. Services: build operations, classify results against the model table
3. Filter: drop excluded services and unreachable models
"""

from __future__ import annotations

import logging
from typing import Any

from ..config import CompilerConfig
from ..errors import UnsupportedDocumentError
from ..schema_ast.parser import SchemaParser
from .ir_nodes import CompiledApi
from .model_builder import ModelBuilder
from .operation_builder import OperationBuilder
from .reference_resolver import ReferenceResolver
from .tag_filter import TagFilter
from .type_resolver import TypeResolver

logger = logging.getLogger(__name__)

SUPPORTED_VERSION = "2.0"


class SwaggerCompiler:
    """Compiles a bundled Swagger 2.0 document into model and service tables."""

    def __init__(self, config: CompilerConfig | None = None):
        """
        Initialize the compiler.

        Args:
            config: Compiler configuration (defaults apply when None)
        """
        self.config = config or CompilerConfig()
        self.type_resolver = TypeResolver(SchemaParser())

    def compile(self, document: dict[str, Any]) -> CompiledApi:
        """
        Compile a document.

        Args:
            document: The bundled Swagger document

        Returns:
            CompiledApi with the filtered model and service tables

        Raises:
            UnsupportedDocumentError: If the document is not Swagger 2.0
            UnresolvedReferenceError: If a reference or a parent model cannot be resolved
        """
        version = document.get("swagger")
        if version != SUPPORTED_VERSION:
            raise UnsupportedDocumentError(f"Invalid swagger specification. Must be a {SUPPORTED_VERSION}. Currently {version}")

        ref_resolver = ReferenceResolver(document)
        ref_resolver.check_references()

        models = ModelBuilder(self.config, self.type_resolver).build(document.get("definitions") or {})
        services = OperationBuilder(self.config, models, ref_resolver, self.type_resolver).build(document)
        logger.debug("Compiled %d models and %d services", len(models), len(services))

        TagFilter(
            self.config.include_tags,
            self.config.exclude_tags,
            self.config.ignore_unused_models,
            self.config.default_tag,
        ).apply(models, services)

        if self.config.generate_examples:
            for model in models.values():
                if model.example is not None:
                    model.example = ref_resolver.resolve_recursive(model.example)

        # Rendering convenience: flag the last element of each table
        for table in (models, services):
            for item in table.values():
                item.is_last = False
            if table:
                list(table.values())[-1].is_last = True

        return CompiledApi(
            models=models,
            services=services,
            root_url=self.root_url(document),
            config=self.config,
        )

    def root_url(self, document: dict[str, Any]) -> str:
        """Root URL of the API, built from schemes, host and basePath."""
        root_url = ""
        host = document.get("host")
        if host:
            schemes = document.get("schemes") or []
            scheme = f"{schemes[0]}://" if schemes else "//"
            root_url = scheme + host
        base_path = document.get("basePath")
        if base_path and base_path != "/":
            root_url += base_path
        return root_url
