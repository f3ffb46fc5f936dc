"""Builds a ParsedProject from a forest of declarations."""

import logging

from autodoc.config import HeuristicsConfig, Settings
from autodoc.extractor.classifier import Classification, DeclarationClassifier
from autodoc.extractor.endpoints import EndpointExtractor
from autodoc.extractor.models import ModelExtractor
from autodoc.extractor.relationships import RelationshipExtractor, merge_dependencies
from autodoc.extractor.tags import TagHandlerRegistry
from autodoc.ir import EndpointData, ModelData, ParsedProject, RelationshipType
from autodoc.parser.declarations import TypeDecl

logger = logging.getLogger(__name__)


class ProjectExtractor:
    """Runs classification and extraction over all declarations.

    Declarations are visited in the given order, which becomes the order of
    models and endpoints in every output. Interfaces mined for accessor
    properties are appended after all other models.
    """

    def __init__(
        self,
        heuristics: HeuristicsConfig | None = None,
        registry: TagHandlerRegistry | None = None,
    ):
        self.heuristics = heuristics or HeuristicsConfig()
        self.classifier = DeclarationClassifier(self.heuristics)
        self.model_extractor = ModelExtractor(registry or TagHandlerRegistry.with_defaults())
        self.endpoint_extractor = EndpointExtractor(self.heuristics)
        self.relationship_extractor = RelationshipExtractor(self.heuristics)

    def extract(self, decls: list[TypeDecl]) -> ParsedProject:
        models: list[ModelData] = []
        endpoints: list[EndpointData] = []
        interfaces: list[TypeDecl] = []

        for decl in decls:
            label = self.classifier.classify(decl)
            if label is Classification.MODEL:
                models.append(self.model_extractor.extract(decl))
            elif label is Classification.CONTROLLER:
                endpoints.extend(self.endpoint_extractor.extract(decl))
            elif self.classifier.is_model_interface(decl):
                interfaces.append(decl)

        for decl in interfaces:
            models.append(self.model_extractor.extract_interface(decl))

        relationships = self.relationship_extractor.extract(decls)
        merge_dependencies(endpoints, relationships)
        _warn_duplicate_names(models)

        project = ParsedProject()
        for model in models:
            project.add_model(model)
        for endpoint in endpoints:
            project.add_endpoint(endpoint)
        for rel in relationships:
            if rel.type is RelationshipType.INJECTS:
                project.add_component(rel.target_class)

        logger.info(
            "Extracted %d endpoints and %d models from %d declarations",
            len(endpoints), len(models), len(decls),
        )
        return project


def extract_project(decls: list[TypeDecl], settings: Settings | None = None) -> ParsedProject:
    settings = settings or Settings()
    return ProjectExtractor(settings.heuristics).extract(decls)


def _warn_duplicate_names(models: list[ModelData]) -> None:
    seen = set()
    for model in models:
        if model.name in seen:
            logger.warning("Duplicate model name %s; later schema replaces earlier", model.name)
        seen.add(model.name)
