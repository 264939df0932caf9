"""
Tag filter over the compiled service and model tables.

Services are kept or dropped by tag, then models that are not reachable from
any surviving service are dropped. Both tables are mutated in place.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ...utils import normalize_model_name, tag_name
from .ir_nodes import ModelDescriptor, ServiceDescriptor

logger = logging.getLogger(__name__)


def normalize_tags(tags: Iterable[str] | str | None, default_tag: str = "Api") -> set[str] | None:
    """
    Normalize a tag list the same way operation tags are normalized.

    Args:
        tags: A list of tags, a comma-separated string, or None
        default_tag: Tag standing for empty names

    Returns:
        The set of normalized tags, or None when no tag is given
    """
    if tags is None:
        return None
    if isinstance(tags, str):
        tags = tags.split(",")
    elif not isinstance(tags, (list, tuple, set)):
        # A single scalar, such as a number read from YAML
        tags = [tags]
    names = [str(tag).strip() for tag in tags if tag is not None]
    normalized = {tag_name(name, default_tag) for name in names if name}
    return normalized or None


def collect_dependencies(roots: Iterable[str], models: dict[str, ModelDescriptor]) -> set[str]:
    """
    Compute the class names of every model reachable from the given ones.

    Args:
        roots: Class names of the directly used models
        models: The model table

    Returns:
        Normalized class names of the transitive closure
    """
    visited: set[str] = set()
    stack = [normalize_model_name(name) for name in roots]
    while stack:
        key = stack.pop()
        if key in visited:
            continue
        model = models.get(key)
        if model is None:
            continue
        visited.add(key)
        stack.extend(normalize_model_name(dep) for dep in reversed(model.dependencies))
    return visited


class TagFilter:
    """Applies include / exclude tags and drops unused models."""

    def __init__(
        self,
        include_tags: Iterable[str] | str | None = None,
        exclude_tags: Iterable[str] | str | None = None,
        ignore_unused_models: bool = True,
        default_tag: str = "Api",
    ):
        """
        Initialize the filter.

        Args:
            include_tags: Tags of the services to keep (None = all)
            exclude_tags: Tags of the services to drop (None = none)
            ignore_unused_models: Whether unreachable models are dropped
            default_tag: Tag standing for empty names
        """
        self.included = normalize_tags(include_tags, default_tag)
        self.excluded = normalize_tags(exclude_tags, default_tag)
        self.ignore_unused_models = ignore_unused_models

    def includes(self, tag: str) -> bool:
        """Whether a service with the given normalized tag is kept."""
        return (self.included is None or tag in self.included) and (self.excluded is None or tag not in self.excluded)

    def apply(self, models: dict[str, ModelDescriptor], services: dict[str, ServiceDescriptor]) -> None:
        """
        Filter the tables in place.

        Args:
            models: The model table
            services: The service table
        """
        used: list[str] = []
        for name in list(services):
            if not self.includes(name):
                logger.info("Ignoring service %s because it was not included", name)
                del services[name]
            elif self.ignore_unused_models:
                service = services[name]
                used.extend(service.dependencies)
                used.extend(service.error_dependencies)

        if not self.ignore_unused_models:
            return

        reachable = collect_dependencies(used, models)
        for key in list(models):
            if normalize_model_name(models[key].model_class) not in reachable:
                logger.info("Ignoring model %s because it was not used by any service", models[key].name)
                del models[key]
