"""
TypeScript code generation backend.

Generates an Angular client (model interfaces, services, indexes, module and
configuration) from the compiled API.
"""

from __future__ import annotations

import json
from typing import Any

from ...utils import to_class_name, to_file_name
from ..analyzer.ir_nodes import CompiledApi, ModelDescriptor, ServiceDescriptor
from .base import CodeBackend


class TypeScriptBackend(CodeBackend):
    """TypeScript code generation backend."""

    TEMPLATE_LANG = "typescript"
    FILE_EXTENSION = "ts"

    MODELS_DIR = "models"
    SERVICES_DIR = "services"

    def _setup_templates(self) -> None:
        super()._setup_templates()
        self.jinja_env.filters["literal"] = self.format_literal

    def render(self, api: CompiledApi) -> dict[str, str]:
        """Generate all TypeScript files from the compiled API."""
        context = self._globals(api)
        files: dict[str, str] = {}

        models = list(api.models.values())
        for model in models:
            files[f"{self.MODELS_DIR}/{model.model_file}.ts"] = self.render_template(
                "model",
                model=model,
                imports=self._imports(api, model.dependencies),
                **context,
            )
            if self.config.generate_examples and model.example is not None:
                files[f"{self.MODELS_DIR}/{model.example_file}.ts"] = self.render_template("example", model=model, **context)
        if self.config.model_index:
            files[self.model_index_file()] = self.render_template("models", models=models, **context)

        services = list(api.services.values())
        for service in services:
            files[f"{self.SERVICES_DIR}/{service.service_file}.ts"] = self.render_template(
                "service",
                service=service,
                imports=self._imports(api, self._service_imports(service)),
                **context,
            )
        if self.config.service_index:
            files[self.service_index_file()] = self.render_template("services", services=services, **context)

        if self.config.api_module:
            files[f"{context['module_file']}.ts"] = self.render_template("module", services=services, **context)

        files[f"{context['configuration_file']}.ts"] = self.render_template("configuration", **context)
        files["strict-http-response.ts"] = self.render_template("strict-http-response", **context)
        files["base-service.ts"] = self.render_template("base-service", **context)
        return files

    def model_index_file(self) -> str:
        return "models.ts"

    def service_index_file(self) -> str:
        return "services.ts"

    def module_file(self) -> str:
        """File stem of the Angular module (``xxx.module``, as Angular style requires)."""
        module_file = to_file_name(to_class_name(self.config.prefix + "Module"))
        if module_file.endswith("-module"):
            module_file = module_file[: -len("-module")] + ".module"
        return module_file

    def _globals(self, api: CompiledApi) -> dict[str, Any]:
        """Names shared by all templates."""
        configuration_class = to_class_name(self.config.prefix + "Configuration")
        return {
            "config": self.config,
            "generation_comment": self._generation_comment(),
            "prefix": self.config.prefix,
            "root_url": api.root_url,
            "module_class": to_class_name(self.config.prefix + "Module"),
            "module_file": self.module_file(),
            "configuration_class": configuration_class,
            "configuration_interface": to_class_name(self.config.prefix + "ConfigurationInterface"),
            "configuration_file": to_file_name(configuration_class),
        }

    def _generation_comment(self) -> str:
        if not self.config.add_generation_comment:
            return ""
        return f"// Generated by {self.config.command_line}. Do not edit.\n"

    def _service_imports(self, service: ServiceDescriptor) -> list[str]:
        names = list(service.dependencies)
        for name in service.error_dependencies:
            if name not in names:
                names.append(name)
        return names

    def _imports(self, api: CompiledApi, names: list[str]) -> list[ModelDescriptor]:
        """Models to import, skipping those pruned from the table."""
        imports = []
        for name in names:
            model = api.model(name)
            if model is not None and model not in imports:
                imports.append(model)
        return imports

    def format_comments(self, text: str | None, level: int = 0) -> str:
        """Format text as a ``/** ... */`` block indented by ``level`` steps."""
        indent = "  " * level
        if not text:
            return indent
        result = "\n" + indent + "/**\n"
        for line in text.strip().split("\n"):
            result += indent + " *" + ("" if line == "" else " " + line) + "\n"
        return result + indent + " */\n" + indent

    def format_literal(self, value: Any, level: int = 0) -> str:
        """Format a JSON value as a TypeScript literal whose continuation lines are indented by ``level`` steps."""
        return json.dumps(value, indent=2, ensure_ascii=False, default=str).replace("\n", "\n" + "  " * level)
