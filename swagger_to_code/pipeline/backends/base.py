"""
Base class for code generation backends.

Defines the interface that all language-specific backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import jinja2

from ..analyzer.ir_nodes import CompiledApi
from ..config import CompilerConfig


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    def __init__(self, config: CompilerConfig):
        """
        Initialize the backend.

        Args:
            config: Compiler configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        loaders = [jinja2.FileSystemLoader(str(template_dir))]
        # Custom templates override the bundled ones file by file
        if self.config.templates:
            loaders.insert(0, jinja2.FileSystemLoader(str(self.config.templates)))
        self.jinja_env = jinja2.Environment(
            loader=jinja2.ChoiceLoader(loaders),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
            undefined=jinja2.StrictUndefined,
        )
        self.jinja_env.filters["comments"] = self.format_comments

    def render_template(self, name: str, **context: Any) -> str:
        """Render a template, dropping trailing whitespace on every line."""
        template = self.jinja_env.get_template(f"{name}.{self.FILE_EXTENSION}.jinja2")
        code = template.render(**context)
        return "\n".join(line.rstrip() for line in code.split("\n"))

    @abstractmethod
    def render(self, api: CompiledApi) -> dict[str, str]:
        """
        Generate code from the IR.

        Args:
            api: The compiled API

        Returns:
            Generated sources keyed by path relative to the output directory
        """

    @abstractmethod
    def format_comments(self, text: str | None, level: int = 0) -> str:
        """
        Format documentation text as a comment block.

        Args:
            text: The documentation text
            level: Indentation level

        Returns:
            The comment block, followed by the indentation of the next line
        """
