"""
Pipeline generator that chains loading, compilation, rendering and writing.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .analyzer import CompiledApi, SwaggerCompiler
from .backends import TypeScriptBackend
from .config import CompilerConfig
from .loader import load_document
from .output import OutputWriter

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """
    Generator turning a Swagger document into an Angular client.

    Pipeline:
    1. Load the document (JSON or YAML)
    2. Compile it into the model and service tables
    3. Render the tables with the TypeScript templates
    4. Write the files atomically, removing stale ones
    """

    def __init__(self, config: CompilerConfig | None = None):
        """
        Initialize the generator.

        Args:
            config: Compiler configuration
        """
        self.config = config or CompilerConfig()
        self.compiler = SwaggerCompiler(self.config)
        self.backend = TypeScriptBackend(self.config)

    def compile(self, document: dict[str, Any]) -> CompiledApi:
        return self.compiler.compile(document)

    def render(self, document: dict[str, Any]) -> dict[str, str]:
        """
        Compile and render a document.

        Returns:
            Generated sources keyed by path relative to the output directory
        """
        return self.backend.render(self.compile(document))

    def generate(self, document: dict[str, Any], output_dir: Path | str) -> list[Path]:
        """
        Compile, render and write a document.

        Args:
            document: The bundled Swagger document
            output_dir: Root of the generated client

        Returns:
            The paths that were written
        """
        files = self.render(document)
        writer = OutputWriter(self.config.remove_stale_files, self._optional_files())
        written = writer.write_all(output_dir, files)
        logger.info("Generated %d files in %s", len(written), output_dir)
        return written

    def generate_file(self, path: Path | str, output_dir: Path | str) -> list[Path]:
        """Load a document from a file, then generate it."""
        return self.generate(load_document(path), output_dir)

    def _optional_files(self) -> list[str]:
        """Top-level files that only exist when their flag is enabled."""
        optional = []
        if not self.config.model_index:
            optional.append(self.backend.model_index_file())
        if not self.config.service_index:
            optional.append(self.backend.service_index_file())
        if not self.config.api_module:
            optional.append(self.backend.module_file() + ".ts")
        return optional
