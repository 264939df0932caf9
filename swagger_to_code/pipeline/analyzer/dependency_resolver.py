"""
Dependency resolver for models and services.

Accumulates candidate type names, keeping only those backed by a model, in
first-seen order. This order is the order in which dependent models are
imported by the rendered code.
"""

from __future__ import annotations

from ...utils import normalize_model_name
from .ir_nodes import ModelDescriptor, TypeExpression, strip_type_wrappers


class DependencyResolver:
    """Collects the models a model or service depends on."""

    def __init__(self, models: dict[str, ModelDescriptor], owner: str | None = None):
        """
        Initialize the resolver.

        Args:
            models: The model table, keyed by normalized name
            owner: Class name of the model being resolved (never its own dependency)
        """
        self.models = models
        self.owner = normalize_model_name(owner) if owner else None
        self._dependencies: list[str] = []
        self._seen: set[str] = set()

    def add(self, candidate: TypeExpression | str | None) -> None:
        """Add a type, or a type name, as a candidate dependency.

        Names that are not models (primitives, literal types, unknown names)
        are ignored.
        """
        if candidate is None:
            return

        if isinstance(candidate, str):
            names = [candidate]
        else:
            names = candidate.dependency_names()

        for name in names:
            key = normalize_model_name(strip_type_wrappers(name))
            if key == self.owner or key in self._seen:
                continue
            model = self.models.get(key)
            if model is None:
                continue
            model_key = normalize_model_name(model.model_class)
            if model_key == self.owner or model_key in self._seen:
                continue
            self._seen.add(key)
            self._seen.add(model_key)
            self._dependencies.append(model.model_class)

    def get(self) -> list[str]:
        """Return the class names of the resolved dependencies."""
        return list(self._dependencies)
