"""
Pipeline - Swagger 2.0 to Angular client generator.

This module provides a multi-phase architecture for generating a client
from a Swagger document:

1. Phase 1 (Loader): Read the JSON or YAML document
2. Phase 2 (Parser): Parse schemas into the Schema AST
3. Phase 3 (Analyzer): Build the model and service tables, filter them by tag
4. Phase 4 (Backend): Render the tables with the TypeScript templates
5. Phase 5 (Output): Write the files atomically and remove stale ones
"""

from __future__ import annotations

from .analyzer import CompiledApi, SwaggerCompiler
from .config import CompilerConfig, SortParams
from .errors import (
    CompilationError,
    ConfigurationError,
    DocumentLoadError,
    UnresolvedReferenceError,
    UnsupportedDocumentError,
)
from .generator import PipelineGenerator
from .loader import load_document
from .output import OutputWriter

__all__ = [
    "PipelineGenerator",
    "SwaggerCompiler",
    "CompiledApi",
    "CompilerConfig",
    "SortParams",
    "CompilationError",
    "ConfigurationError",
    "DocumentLoadError",
    "UnresolvedReferenceError",
    "UnsupportedDocumentError",
    "OutputWriter",
    "load_document",
]
