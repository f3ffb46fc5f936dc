"""Declaration classification: model, controller, or skipped."""

import logging
from enum import Enum

from autodoc.config import HeuristicsConfig
from autodoc.parser.declarations import DeclarationKind, TypeDecl, has_tag

logger = logging.getLogger(__name__)


class Classification(Enum):
    MODEL = "model"
    CONTROLLER = "controller"
    SKIP = "skip"


class DeclarationClassifier:
    """Labels declarations using tag names and namespace keywords.

    For models the infrastructure-namespace check runs before the model-tag
    check: a tagged class under a ``service`` namespace is still skipped.
    """

    def __init__(self, heuristics: HeuristicsConfig | None = None):
        self.heuristics = heuristics or HeuristicsConfig()

    def classify(self, decl: TypeDecl) -> Classification:
        if self.is_controller(decl):
            return Classification.CONTROLLER
        if self.is_model(decl):
            return Classification.MODEL
        logger.debug("Skipping %s", decl.qualified_name)
        return Classification.SKIP

    def is_controller(self, decl: TypeDecl) -> bool:
        h = self.heuristics
        return (
            decl.kind is DeclarationKind.CLASS
            and has_tag(decl.tags, *h.controller_tags)
            and not has_tag(decl.tags, *h.advice_tags)
        )

    def is_model(self, decl: TypeDecl) -> bool:
        if decl.kind in (DeclarationKind.INTERFACE, DeclarationKind.ANNOTATION) or decl.is_abstract:
            return False
        if self.in_infrastructure_namespace(decl):
            return False
        if has_tag(decl.tags, *self.heuristics.model_tags):
            return True
        if self.in_model_namespace(decl):
            return True
        return decl.kind in (DeclarationKind.ENUM, DeclarationKind.RECORD)

    def is_model_interface(self, decl: TypeDecl) -> bool:
        """Interfaces worth mining for accessor-shaped properties."""
        if decl.kind is not DeclarationKind.INTERFACE:
            return False
        if self.in_infrastructure_namespace(decl):
            return False
        return has_tag(decl.tags, *self.heuristics.model_tags) or self.in_model_namespace(decl)

    def in_infrastructure_namespace(self, decl: TypeDecl) -> bool:
        return _namespace_contains(decl, self.heuristics.infrastructure_namespaces)

    def in_model_namespace(self, decl: TypeDecl) -> bool:
        return _namespace_contains(decl, self.heuristics.model_namespaces)


def _namespace_contains(decl: TypeDecl, keywords: tuple[str, ...]) -> bool:
    namespace = decl.namespace.lower()
    return any(keyword.lower() in namespace for keyword in keywords)
