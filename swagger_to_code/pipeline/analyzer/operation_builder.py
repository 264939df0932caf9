"""
Operation builder that turns the document paths into ServiceDescriptors.

Each path + method pair becomes an operation of the service of its first tag.
Parameters, responses, the result classification and the documentation block
are computed per operation; dependencies are then resolved per service.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from ...utils import normalize_model_name, tag_name, to_class_name, to_file_name, to_identifier
from ..config import CompilerConfig, SortParams
from .dependency_resolver import DependencyResolver
from .ir_nodes import (
    ModelDescriptor,
    OperationDescriptor,
    ParameterDescriptor,
    ResponseDescriptor,
    ResultKind,
    ServiceDescriptor,
    TypeExpression,
    is_success_status,
)
from .reference_resolver import ReferenceResolver
from .type_resolver import BLOB_TYPE, NULL_TYPE, TypeResolver

logger = logging.getLogger(__name__)

_PATH_PLACEHOLDER = re.compile(r"\{([^}]+)\}")


class OperationBuilder:
    """Builds the service table from the document paths."""

    def __init__(
        self,
        config: CompilerConfig,
        models: dict[str, ModelDescriptor],
        ref_resolver: ReferenceResolver,
        type_resolver: TypeResolver | None = None,
    ):
        """
        Initialize the builder.

        Args:
            config: Compiler configuration
            models: The model table, used to classify results and resolve dependencies
            ref_resolver: Resolver for $ref parameters and responses
            type_resolver: Resolver used for parameter and response types
        """
        self.config = config
        self.models = models
        self.ref_resolver = ref_resolver
        self.type_resolver = type_resolver or TypeResolver()

    def build(self, document: dict[str, Any]) -> dict[str, ServiceDescriptor]:
        """
        Build all services.

        Args:
            document: The whole Swagger document

        Returns:
            The service table, keyed by normalized tag
        """
        services: dict[str, ServiceDescriptor] = {}
        operation_ids: dict[str, set[str]] = {}

        for url, path_item in (document.get("paths") or {}).items():
            if not isinstance(path_item, dict):
                continue
            path_parameters = path_item.get("parameters") or []

            for method, definition in path_item.items():
                if method == "parameters" or method.startswith("x-") or not isinstance(definition, dict):
                    continue

                tags = definition.get("tags") or []
                tag = tag_name(tags[0] if tags else None, self.config.default_tag)
                service = services.get(tag)
                if service is None:
                    service = self._new_service(tag)
                    services[tag] = service
                    operation_ids[tag] = set()

                operation = self.build_operation(
                    service,
                    url,
                    method,
                    definition,
                    path_item,
                    path_parameters,
                    operation_ids[tag],
                )
                service.operations.append(operation)

        self._apply_tag_descriptions(services, document.get("tags") or [])
        for service in services.values():
            self.resolve_dependencies(service)
        return services

    def _new_service(self, tag: str) -> ServiceDescriptor:
        service_class = to_class_name(tag)
        return ServiceDescriptor(
            name=tag,
            service_class=service_class + "Service",
            service_file=to_file_name(service_class) + self.config.service_file_suffix,
        )

    def _apply_tag_descriptions(self, services: dict[str, ServiceDescriptor], tags: list[Any]) -> None:
        """Use the document's tag descriptions as service descriptions."""
        for tag in tags:
            if not isinstance(tag, dict):
                continue
            service = services.get(tag_name(tag.get("name"), self.config.default_tag))
            if service is not None and tag.get("description"):
                service.description = tag["description"]

    def build_operation(
        self,
        service: ServiceDescriptor,
        url: str,
        method: str,
        definition: dict[str, Any],
        path_item: dict[str, Any],
        path_parameters: list[Any],
        known_ids: set[str],
    ) -> OperationDescriptor:
        """Build a single operation."""
        operation_id = self.operation_id(definition.get("operationId"), method, url, known_ids)

        raw_parameters = list(definition.get("parameters") or []) + list(path_parameters)

        params_class = None
        if len(raw_parameters) >= self.config.min_params_for_container:
            params_class = operation_id[:1].upper() + operation_id[1:] + "Params"

        parameters = [self.build_parameter(raw, params_class is not None) for raw in raw_parameters]
        parameters = self.sort_parameters(parameters)
        if parameters:
            parameters[-1].is_last = True

        operation = OperationDescriptor(
            name=operation_id[:1].lower() + operation_id[1:] if self.config.camel_case else operation_id,
            method=method.upper(),
            path=url,
            path_expression=self.path_expression(parameters, params_class is not None, url),
            parameters=parameters,
            params_class=params_class,
            is_multipart=any(p.location == "formData" for p in parameters),
        )
        self._process_responses(operation, definition.get("responses") or {})
        operation.result_kind = self.classify_result(operation.result_type)

        summary = (definition.get("summary") or path_item.get("summary") or "").strip()
        operation.description = self.build_description(
            summary,
            (definition.get("description") or "").strip(),
            operation,
            service.service_class,
        )
        return operation

    def operation_id(self, given: str | None, method: str, url: str, known_ids: set[str]) -> str:
        """
        Return a unique operation id within a service.

        Args:
            given: The declared operationId, if any
            method: HTTP method
            url: Path template
            known_ids: Ids already used in the service, updated in place

        Returns:
            The declared id, or one synthesized from method + path, suffixed
            with ``_1``, ``_2``, ... when already taken
        """
        generate = given is None
        operation_id = to_identifier(method + url) if generate else to_identifier(given)

        duplicated = operation_id in known_ids
        if duplicated:
            i = 1
            while f"{operation_id}_{i}" in known_ids:
                i += 1
            operation_id = f"{operation_id}_{i}"

        if generate:
            logger.warning("Operation '%s' on '%s' defines no operationId. Assuming '%s'.", method, url, operation_id)
        elif duplicated:
            logger.warning(
                "Operation '%s' on '%s' defines a duplicated operationId: %s. Assuming '%s'.",
                method,
                url,
                given,
                operation_id,
            )

        known_ids.add(operation_id)
        return operation_id

    def build_parameter(self, raw: dict[str, Any], in_container: bool) -> ParameterDescriptor:
        """Build a parameter, resolving it first if it is a reference."""
        param = self.ref_resolver.resolve_object(raw)
        location = param.get("in", "")
        name = param.get("name", "")

        if param.get("schema") is not None:
            param_type = self.type_resolver.resolve(param["schema"], f"#/parameters/{name}/schema")
        else:
            param_type = self.type_resolver.resolve(param, f"#/parameters/{name}")

        identifier = to_identifier(name)
        bare_type = param_type.bare_name(nullable_only=True)
        return ParameterDescriptor(
            name=name,
            location=location,
            identifier=identifier,
            full_access=("params." if in_container else "") + identifier,
            required=param.get("required") is True or location == "path",
            type=param_type,
            description=param.get("description"),
            collection_format=param.get("collectionFormat"),
            is_array=param.get("type") == "array",
            to_json=location == "formData" and not param.get("enum") and bare_type not in (BLOB_TYPE, "string"),
        )

    def sort_parameters(self, parameters: list[ParameterDescriptor]) -> list[ParameterDescriptor]:
        """Sort required parameters first, then by name according to the configuration."""
        sort_params = self.config.sort_params
        if sort_params == SortParams.ASC.value:
            parameters = sorted(parameters, key=lambda p: p.name)
        elif sort_params == SortParams.DESC.value:
            parameters = sorted(parameters, key=lambda p: p.name, reverse=True)
        return sorted(parameters, key=lambda p: not p.required)

    def path_expression(self, parameters: list[ParameterDescriptor], in_container: bool, url: str) -> str:
        """
        Return the path as a template literal body, for example
        "/a/{var1}/b/{var2}" returns "/a/${encodeURIComponent(params.var1)}/b/${encodeURIComponent(params.var2)}"
        with a parameters container, or "/a/${encodeURIComponent(var1)}/b/${encodeURIComponent(var2)}" otherwise.
        """
        by_name = {p.name: p for p in parameters}

        def replace(match: re.Match[str]) -> str:
            param = by_name.get(match.group(1))
            identifier = param.identifier if param else match.group(1)
            scope = "params." if in_container else ""
            return "${encodeURIComponent(" + scope + identifier + ")}"

        return _PATH_PLACEHOLDER.sub(replace, url or "")

    def _process_responses(self, operation: OperationDescriptor, responses: dict[str, Any]) -> None:
        """Collect the responses declaring a schema and compute the result type."""
        result_types: list[TypeExpression] = []
        descriptions: list[str] = []

        for code, response in responses.items():
            code = str(code)
            response = self.ref_resolver.resolve_object(response)
            if not isinstance(response, dict) or response.get("schema") is None:
                continue

            response_type = self.type_resolver.resolve(response["schema"], f"#/responses/{code}/schema")
            description = response.get("description")
            if is_success_status(code):
                result_types.append(response_type)
                if description:
                    descriptions.append(description)
                if response.get("headers"):
                    operation.returns_headers = True

            operation.responses[code] = ResponseDescriptor(code=code, type=response_type, description=description)

        if len(result_types) == 1:
            operation.result_type = result_types[0]
        elif result_types:
            operation.result_type = TypeExpression.union(*result_types)
        else:
            operation.result_type = TypeExpression.scalar(NULL_TYPE)
        operation.result_description = " or ".join(descriptions) or None

    def classify_result(self, result_type: TypeExpression) -> ResultKind:
        """Classify the result type into the shape used to decode responses."""
        model = self.models.get(normalize_model_name(result_type.bare_name()))
        actual = result_type
        if model is not None and model.is_simple and model.alias_type is not None:
            actual = model.alias_type
        text = str(actual)

        if text in (NULL_TYPE, "void"):
            return ResultKind.VOID
        if text == "string":
            return ResultKind.STRING
        if text == "number":
            return ResultKind.NUMBER
        if text == "boolean":
            return ResultKind.BOOLEAN
        if text == BLOB_TYPE:
            return ResultKind.FILE
        if model is not None and model.is_enum:
            return ResultKind.ENUM
        if model is not None and model.is_object:
            return ResultKind.OBJECT
        if model is None and ("Array<" in str(result_type) or "[]" in str(result_type)):
            return ResultKind.PRIMITIVE_ARRAY
        return ResultKind.UNKNOWN

    def build_description(self, summary: str, description: str, operation: OperationDescriptor, service_class: str) -> str:
        """Assemble the documentation block of an operation."""
        doc = description
        if summary:
            doc = summary if not doc else f"{summary}\n\n{doc}"

        if operation.params_class is None:
            for param in operation.parameters:
                doc += f"\n@param {param.name} {param.description or ''}".rstrip()
        else:
            doc += f"\n@param params The `{service_class}.{operation.params_class}` containing the following parameters:\n"
            for param in operation.parameters:
                doc += f"\n- `{param.name}`: "
                lines = (param.description or "").strip().split("\n")
                for i, line in enumerate(lines):
                    if line == "":
                        doc += "\n"
                    else:
                        doc += ("" if i == 0 else "  ") + line + "\n"

        if operation.result_description:
            doc += f"\n@return {operation.result_description}"
        return doc.strip("\n")

    def resolve_dependencies(self, service: ServiceDescriptor) -> None:
        """Resolve the models used by successful and by error responses of a service."""
        dependencies = DependencyResolver(self.models)
        error_dependencies = DependencyResolver(self.models)
        for operation in service.operations:
            for code, response in operation.responses.items():
                if not code.isdigit():
                    continue
                target = dependencies if is_success_status(code) else error_dependencies
                target.add(response.type)
            for param in operation.parameters:
                dependencies.add(param.type)
        service.dependencies = dependencies.get()
        service.error_dependencies = error_dependencies.get()
