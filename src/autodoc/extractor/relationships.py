"""Injected-collaborator and inheritance edges between declarations."""

import logging

from autodoc.config import HeuristicsConfig
from autodoc.ir import (
    DependencyData,
    EndpointData,
    InjectionType,
    Relationship,
    RelationshipType,
)
from autodoc.parser.declarations import DeclarationKind, TypeDecl, has_tag

logger = logging.getLogger(__name__)

CONSTRUCTOR_METHOD = "<init>"


class RelationshipExtractor:
    """Finds INJECTS, EXTENDS and IMPLEMENTS edges.

    A field is an injected collaborator when it carries an injection tag or
    when its type or name looks like a service. Constructor parameters are
    judged by the naming heuristic alone.
    """

    def __init__(self, heuristics: HeuristicsConfig | None = None):
        self.heuristics = heuristics or HeuristicsConfig()

    def extract(self, decls: list[TypeDecl]) -> list[Relationship]:
        relationships = []
        for decl in decls:
            relationships.extend(self.injections(decl))
        for decl in decls:
            relationships.extend(self.inheritance(decl))
        return relationships

    def injections(self, decl: TypeDecl) -> list[Relationship]:
        source = decl.qualified_name
        edges = []

        for field in decl.fields:
            if field.is_static:
                continue
            type_name = field.type.name
            if has_tag(field.tags, *self.heuristics.injection_tags) or self.is_likely_service(
                type_name
            ) or self.is_likely_service(field.name):
                edges.append(Relationship(
                    source_class=source,
                    target_class=type_name,
                    type=RelationshipType.INJECTS,
                    name=field.name,
                    injection_type=InjectionType.FIELD,
                ))

        for constructor in decl.constructors:
            for param in constructor.parameters:
                type_name = param.type.name
                if self.is_likely_service(type_name) or self.is_likely_service(param.name):
                    edges.append(Relationship(
                        source_class=source,
                        target_class=type_name,
                        type=RelationshipType.INJECTS,
                        name=param.name,
                        injection_type=InjectionType.CONSTRUCTOR,
                        source_method=CONSTRUCTOR_METHOD,
                    ))
        return edges

    def inheritance(self, decl: TypeDecl) -> list[Relationship]:
        source = decl.qualified_name
        edges = []
        if decl.superclass is not None:
            edges.append(Relationship(
                source_class=source,
                target_class=decl.superclass.name,
                type=RelationshipType.EXTENDS,
            ))

        # interfaces extend their super-interfaces; everything else implements them
        iface_edge = (
            RelationshipType.EXTENDS
            if decl.kind is DeclarationKind.INTERFACE
            else RelationshipType.IMPLEMENTS
        )
        for iface in decl.interfaces:
            edges.append(Relationship(source_class=source, target_class=iface.name, type=iface_edge))
        return edges

    def is_likely_service(self, name: str) -> bool:
        h = self.heuristics
        lowered = name.lower()
        return name.endswith(h.service_suffixes) or any(k.lower() in lowered for k in h.service_keywords)


def group_dependencies(relationships: list[Relationship]) -> dict[str, list[DependencyData]]:
    """INJECTS edges grouped by fully-qualified source class."""
    grouped: dict[str, list[DependencyData]] = {}
    for rel in relationships:
        if rel.type is not RelationshipType.INJECTS:
            continue
        grouped.setdefault(rel.source_class, []).append(DependencyData(
            name=rel.name or "",
            type=rel.target_class,
            injection_type=rel.injection_type or InjectionType.FIELD,
        ))
    return grouped


def merge_dependencies(endpoints: list[EndpointData], relationships: list[Relationship]) -> None:
    """Attach grouped INJECTS edges to the endpoints of their controller."""
    grouped = group_dependencies(relationships)
    for endpoint in endpoints:
        deps = grouped.get(endpoint.controller_qualified_name)
        if deps is not None:
            endpoint.dependencies = [d.model_copy() for d in deps]
