"""
Reference resolver for local $ref resolution.

The document is expected to be bundled already, so only local references
(``#/...`` JSON pointers) are supported.
"""

from __future__ import annotations

from typing import Any

from ..errors import UnresolvedReferenceError


class ReferenceResolver:
    """Resolves local $ref pointers against a document."""

    def __init__(self, document: dict[str, Any]):
        """
        Initialize the resolver.

        Args:
            document: The whole Swagger document
        """
        self.document = document

    def resolve(self, ref: str) -> Any:
        """
        Resolve a local reference to the node it points to.

        Args:
            ref: A JSON pointer such as "#/parameters/limit"

        Returns:
            The referenced node

        Raises:
            UnresolvedReferenceError: If the reference is not local or does not resolve
        """
        if not ref.startswith("#/"):
            raise UnresolvedReferenceError(ref, f"Resolved references must start with #/. Current: {ref}")

        result: Any = self.document
        for part in ref[2:].split("/"):
            if part == "":
                continue
            part = part.replace("~1", "/").replace("~0", "~")
            if isinstance(result, dict) and part in result:
                result = result[part]
            elif isinstance(result, list) and part.isdigit() and int(part) < len(result):
                result = result[int(part)]
            else:
                raise UnresolvedReferenceError(ref)

        return {} if result is self.document else result

    def resolve_object(self, node: Any) -> Any:
        """Follow $ref chains until reaching a node that is not a reference."""
        seen: set[str] = set()
        while isinstance(node, dict) and isinstance(node.get("$ref"), str):
            ref = node["$ref"]
            if ref in seen:
                raise UnresolvedReferenceError(ref, f"Circular reference: {ref}")
            seen.add(ref)
            node = self.resolve(ref)
        return node

    def check_references(self) -> int:
        """
        Resolve every $ref of the document once.

        Returns:
            The number of references checked

        Raises:
            UnresolvedReferenceError: On the first reference that does not resolve
        """
        count = 0
        stack: list[Any] = [self.document]
        while stack:
            node = stack.pop()
            if isinstance(node, dict):
                ref = node.get("$ref")
                if isinstance(ref, str):
                    self.resolve(ref)
                    count += 1
                stack.extend(value for key, value in node.items() if key != "$ref")
            elif isinstance(node, list):
                stack.extend(node)
        return count

    def resolve_recursive(self, value: Any, seen: frozenset[str] = frozenset()) -> Any:
        """
        Return a copy of a value with every $ref replaced by its target.

        Args:
            value: Any JSON value, for instance a model example
            seen: References being expanded, to detect cycles

        Raises:
            UnresolvedReferenceError: If a reference does not resolve or is circular
        """
        if isinstance(value, dict):
            ref = value.get("$ref")
            if isinstance(ref, str):
                if ref in seen:
                    raise UnresolvedReferenceError(ref, f"Circular reference: {ref}")
                return self.resolve_recursive(self.resolve(ref), seen | {ref})
            return {key: self.resolve_recursive(item, seen) for key, item in value.items()}
        if isinstance(value, list):
            return [self.resolve_recursive(item, seen) for item in value]
        return value
