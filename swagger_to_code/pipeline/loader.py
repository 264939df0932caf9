"""
Loading of Swagger documents from JSON or YAML files.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from .errors import DocumentLoadError

YAML_SUFFIXES = (".yaml", ".yml")


def load_document(path: Path | str) -> dict[str, Any]:
    """
    Load a bundled Swagger document.

    Args:
        path: Path to a ``.json``, ``.yaml`` or ``.yml`` file

    Returns:
        The document as a dictionary

    Raises:
        DocumentLoadError: If the file cannot be parsed or is not a mapping
        OSError: If the file cannot be read
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            if path.suffix.lower() in YAML_SUFFIXES:
                document = yaml.safe_load(f)
            else:
                document = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise DocumentLoadError(str(path), f"cannot parse document: {e}") from e

    if not isinstance(document, dict):
        raise DocumentLoadError(str(path), "the document must be a mapping")
    return document
