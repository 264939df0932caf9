"""Swagger to Code Generator

A Python package for generating an Angular TypeScript client from Swagger 2.0
documents. Compiles definitions and paths into model and service tables,
filters them by tag and renders them with Jinja2 templates.
"""

__version__ = "1.0.0"

from .pipeline import (
    CompilationError,
    CompilerConfig,
    OutputWriter,
    PipelineGenerator,
    SwaggerCompiler,
    load_document,
)

__all__ = [
    "PipelineGenerator",
    "SwaggerCompiler",
    "CompilerConfig",
    "CompilationError",
    "OutputWriter",
    "load_document",
]
