"""EndpointData extraction from controller declarations."""

import logging

from autodoc.config import HeuristicsConfig
from autodoc.extractor.typeref import resolve
from autodoc.ir import EndpointData, HttpMethod, ParameterData, ParameterLocation
from autodoc.parser.declarations import (
    MethodDecl,
    ParameterDecl,
    Tag,
    TypeDecl,
    find_tag,
    has_tag,
)

logger = logging.getLogger(__name__)


class EndpointExtractor:
    """One EndpointData per controller method carrying an HTTP mapping tag."""

    def __init__(self, heuristics: HeuristicsConfig | None = None):
        self.heuristics = heuristics or HeuristicsConfig()

    def extract(self, decl: TypeDecl) -> list[EndpointData]:
        h = self.heuristics
        class_mapping = find_tag(decl.tags, h.generic_mapping_tag)
        base_path = mapping_path(class_mapping) if class_mapping is not None else ""
        tags = self.controller_tags(decl)

        endpoints = []
        for method in decl.methods:
            mapping = find_tag(method.tags, *h.mapping_tags)
            if mapping is None:
                continue

            http_method = self.http_method(mapping)
            if http_method is None:
                logger.warning(
                    "%s.%s: unsupported HTTP method %s, skipping",
                    decl.qualified_name, method.name, mapping.get("method"),
                )
                continue

            summary, description = self.operation_text(method)
            body = self.request_body(method)
            endpoints.append(EndpointData(
                path=combine_paths(base_path, mapping_path(mapping)),
                method=http_method,
                summary=summary,
                description=description,
                tags=list(tags),
                parameters=self.parameters(method),
                request_body_type=resolve(body.type) if body is not None else None,
                response_type=resolve(method.return_type),
                controller_name=decl.name,
                controller_package=decl.namespace,
                deprecated=has_tag(method.tags, h.deprecation_tag),
            ))

        logger.debug("%s: %d endpoints", decl.qualified_name, len(endpoints))
        return endpoints

    def http_method(self, mapping: Tag) -> HttpMethod | None:
        """Verb of a mapping tag; the generic mapping defaults to GET."""
        verb = self.heuristics.verb_mapping_tags.get(mapping.name)
        if verb is None:
            raw = mapping.get_string("method")
            if not raw:
                return HttpMethod.GET
            verb = raw.rsplit(".", 1)[-1].upper()
        try:
            return HttpMethod(verb)
        except ValueError:
            return None

    def parameters(self, method: MethodDecl) -> list[ParameterData]:
        h = self.heuristics
        params = []
        for param in method.parameters:
            path_tag = find_tag(param.tags, *h.path_param_tags)
            if path_tag is not None:
                params.append(_parameter(method, param, path_tag, ParameterLocation.PATH, True))
                continue

            query_tag = find_tag(param.tags, *h.query_param_tags)
            if query_tag is not None:
                required = query_tag.get_bool("required")
                params.append(_parameter(
                    method, param, query_tag, ParameterLocation.QUERY,
                    True if required is None else required,
                ))
        return params

    def request_body(self, method: MethodDecl) -> ParameterDecl | None:
        for param in method.parameters:
            if has_tag(param.tags, *self.heuristics.body_tags):
                return param
        return None

    def operation_text(self, method: MethodDecl) -> tuple[str, str]:
        """Summary and description: documentation first, operation tag as fallback."""
        summary = method.doc.summary
        description = method.doc.description
        operation = find_tag(method.tags, *self.heuristics.operation_tags)
        if operation is not None:
            if not summary:
                summary = operation.get_string("summary", "value") or ""
            if not description:
                description = operation.get_string("description", "notes") or ""
        return summary, description

    def controller_tags(self, decl: TypeDecl) -> list[str]:
        grouping = find_tag(decl.tags, *self.heuristics.grouping_tags)
        if grouping is not None:
            names = [n for n in grouping.get_strings("name", "tags", "value") if n]
            if names:
                return names
        suffix = self.heuristics.controller_suffix
        return [decl.name.removesuffix(suffix) or decl.name]


def mapping_path(tag: Tag) -> str:
    return tag.get_string("value", "path") or ""


def combine_paths(base: str, relative: str) -> str:
    """Join two path parts with exactly one slash between them."""
    if not relative:
        return base
    return base.rstrip("/") + "/" + relative.lstrip("/")


def _parameter(
    method: MethodDecl,
    param: ParameterDecl,
    tag: Tag,
    location: ParameterLocation,
    required: bool,
) -> ParameterData:
    return ParameterData(
        name=tag.get_string("value", "name") or param.name,
        location=location,
        required=required,
        description=method.doc.params.get(param.name, ""),
        type=resolve(param.type),
    )
