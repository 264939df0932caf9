"""
Configuration for the Swagger compiler and the TypeScript generator.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any

from .errors import ConfigurationError

_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0"}


class SortParams(str, Enum):
    """Order of operation parameters within the required / optional groups."""

    ASC = "asc"
    DESC = "desc"
    NONE = "none"  # Keep document order


@dataclass
class CompilerConfig:
    """Configuration options for compilation and generation."""

    # Tags of the services to generate (None = all). A list or a comma-separated string
    include_tags: list[str] | str | None = None

    # Tags of the services to skip (None = none)
    exclude_tags: list[str] | str | None = None

    # Whether models not used by any generated service are dropped
    ignore_unused_models: bool = True

    # Number of parameters from which an operation takes a parameters container
    min_params_for_container: int = 2

    # Order of parameters by name, after required ones
    sort_params: str = SortParams.DESC.value

    # Tag of operations declaring none
    default_tag: str = "Api"

    # Lower-case the first letter of operation names
    camel_case: bool = False

    # Prefix of the module and configuration class names
    prefix: str = "Api"

    # Suffixes appended to generated file stems
    model_file_suffix: str = ""
    service_file_suffix: str = ".service"
    example_file_suffix: str = "-example"

    # Generate an example file for each model declaring an example
    generate_examples: bool = False

    # Directory of templates overriding the bundled ones, file by file
    templates: str | None = None

    # Artifacts requested from the renderer
    error_handler: bool = True
    api_module: bool = True
    model_index: bool = True
    service_index: bool = True
    enum_module: bool = True

    # Remove previously generated files that are no longer produced
    remove_stale_files: bool = True

    # Add a generation comment on top of every file
    add_generation_comment: bool = True

    # Command line echoed in the generation comment
    command_line: str = field(default="swagger_to_code", repr=False)

    # Keys of the historical JSON configuration file
    CAMEL_CASE_KEYS = {
        "includeTags": "include_tags",
        "excludeTags": "exclude_tags",
        "ignoreUnusedModels": "ignore_unused_models",
        "minParamsForContainer": "min_params_for_container",
        "sortParams": "sort_params",
        "defaultTag": "default_tag",
        "camelCase": "camel_case",
        "errorHandler": "error_handler",
        "apiModule": "api_module",
        "modelIndex": "model_index",
        "serviceIndex": "service_index",
        "enumModule": "enum_module",
        "removeStaleFiles": "remove_stale_files",
        "generateExamples": "generate_examples",
    }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> CompilerConfig:
        """
        Create a config from a dictionary with snake_case or camelCase keys.

        Values are coerced to the type of the field default, so that numbers
        and booleans written as strings are accepted.

        Raises:
            ConfigurationError: If a value cannot be coerced
        """
        if not isinstance(d, dict):
            raise ConfigurationError(f"Configuration must be a mapping. Currently {type(d).__name__}")
        config = CompilerConfig()
        defaults = {f.name: getattr(config, f.name) for f in fields(config) if f.name != "command_line"}
        for k, v in d.items():
            k = CompilerConfig.CAMEL_CASE_KEYS.get(k, k)
            if k == "customFileSuffix" and isinstance(v, dict):
                for kind in ("model", "service", "example"):
                    if kind in v:
                        setattr(config, f"{kind}_file_suffix", _coerce(f"customFileSuffix.{kind}", v[kind], ""))
            elif k in defaults:
                setattr(config, k, _coerce(k, v, defaults[k]))
        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name != "command_line"}


def _coerce(key: str, value: Any, default: Any) -> Any:
    """Convert a configuration value to the type of its default."""
    if default is None:
        return value
    if value is None:
        raise ConfigurationError(f"Configuration '{key}' cannot be null")
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in _TRUE_STRINGS | _FALSE_STRINGS:
            return value.strip().lower() in _TRUE_STRINGS
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        raise ConfigurationError(f"Configuration '{key}' must be a boolean. Currently {value!r}")
    if isinstance(default, int):
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Configuration '{key}' must be an integer. Currently {value!r}") from e
    if isinstance(default, str):
        if isinstance(value, (dict, list)):
            raise ConfigurationError(f"Configuration '{key}' must be a string. Currently {value!r}")
        return str(value)
    return value
