"""OpenAPI 3.0 document synthesis from a ParsedProject."""

import logging

from autodoc.config import DocumentConfig
from autodoc.generator.schema import build_schemas
from autodoc.ir import EndpointData, HttpMethod, ParameterData, ParsedProject, TypeRef

logger = logging.getLogger(__name__)

OPENAPI_VERSION = "3.0.0"
SCHEMA_REF_PREFIX = "#/components/schemas/"
JSON_CONTENT = "application/json"


def schema_ref(name: str) -> dict:
    return {"$ref": SCHEMA_REF_PREFIX + name}


class OpenApiBuilder:
    """Builds the ``paths`` map and the full document.

    Response schemas are resolved two levels deep: the declared type, and
    for generic wrappers the wrapped ``data`` type. Anything nested deeper
    falls back to a ``$ref`` of its base name.
    """

    def __init__(self, document: DocumentConfig | None = None):
        self.document = document or DocumentConfig()

    def build(self, project: ParsedProject) -> dict:
        return {
            "openapi": OPENAPI_VERSION,
            "info": {"title": self.document.title, "version": self.document.version},
            "servers": [_server(s.url, s.description) for s in self.document.servers],
            "paths": self.build_paths(project.endpoints),
            "components": {"schemas": build_schemas(project.models)},
        }

    def build_paths(self, endpoints: list[EndpointData]) -> dict[str, dict]:
        paths: dict[str, dict] = {}
        for endpoint in endpoints:
            path = endpoint.path or "/"
            method = endpoint.method.value.lower()
            item = paths.setdefault(path, {})
            if method in item:
                logger.warning(
                    "Duplicate operation %s %s from %s replaces an earlier one",
                    endpoint.method.value, path, endpoint.controller_qualified_name,
                )
            item[method] = self.build_operation(endpoint)
        return paths

    def build_operation(self, endpoint: EndpointData) -> dict:
        operation: dict = {}
        if endpoint.tags:
            operation["tags"] = list(endpoint.tags)
        if endpoint.summary:
            operation["summary"] = endpoint.summary
        if endpoint.description:
            operation["description"] = endpoint.description

        operation["parameters"] = [build_parameter(p) for p in endpoint.parameters]

        if endpoint.request_body_type is not None and endpoint.method is not HttpMethod.GET:
            operation["requestBody"] = {
                "required": True,
                "content": {JSON_CONTENT: {"schema": {"type": "object"}}},
            }

        operation["responses"] = {
            "200": {
                "description": "Successful Response",
                "content": {JSON_CONTENT: {"schema": self.response_schema(endpoint.response_type)}},
            },
        }
        if endpoint.deprecated:
            operation["deprecated"] = True
        return operation

    def response_schema(self, type_ref: TypeRef | None) -> dict:
        if type_ref is None or not type_ref.base:
            return {"type": "object"}
        # plain types, and generics with several arguments such as Map<K, V>
        if len(type_ref.args) != 1:
            return schema_ref(type_ref.base)
        if type_ref.base in self.document.collection_types:
            return {"type": "array", "items": schema_ref(type_ref.args[0].base)}
        return {
            "allOf": [
                schema_ref(type_ref.base),
                {"properties": {"data": self.wrapped_schema(type_ref.args[0])}},
            ],
        }

    def wrapped_schema(self, type_ref: TypeRef) -> dict:
        """Schema of the type inside a generic wrapper, resolved one level."""
        if type_ref.args:
            if type_ref.base in self.document.collection_types:
                return {"type": "array", "items": schema_ref(type_ref.args[0].base)}
            return schema_ref(type_ref.base)
        if type_ref.base in self.document.placeholder_types:
            return {"type": "object"}
        return schema_ref(type_ref.base)


def build_parameter(param: ParameterData) -> dict:
    return {
        "name": param.name,
        "in": param.location.value,
        "required": param.required,
        "schema": {"type": "string"},
    }


def build_document(project: ParsedProject, document: DocumentConfig | None = None) -> dict:
    return OpenApiBuilder(document).build(project)


def _server(url: str, description: str) -> dict:
    server = {"url": url}
    if description:
        server["description"] = description
    return server
