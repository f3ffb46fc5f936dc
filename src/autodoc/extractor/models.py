"""ModelData extraction for classes, records, enumerations and interfaces."""

from autodoc.extractor.tags import TagHandlerRegistry
from autodoc.extractor.typeref import resolve
from autodoc.ir import FieldData, ModelData
from autodoc.parser.declarations import (
    DeclarationKind,
    DocComment,
    FieldDecl,
    MethodDecl,
    TypeDecl,
)


class ModelExtractor:
    """Builds ModelData records from declarations classified as models.

    Tag handlers run first; documentation text then overrides any
    tag-supplied description, so tags only act as a fallback.
    """

    def __init__(self, registry: TagHandlerRegistry | None = None):
        self.registry = registry or TagHandlerRegistry.with_defaults()

    def extract(self, decl: TypeDecl) -> ModelData:
        if decl.kind is DeclarationKind.ENUM:
            return self.extract_enum(decl)
        if decl.kind is DeclarationKind.INTERFACE:
            return self.extract_interface(decl)
        return self.extract_class(decl)

    def extract_class(self, decl: TypeDecl) -> ModelData:
        model = ModelData(name=decl.name)
        self.registry.apply_model_tags(decl.tags, model)
        if decl.superclass is not None:
            model.extends_list.append(decl.superclass.name)
        model.implements_list.extend(iface.name for iface in decl.interfaces)
        _apply_model_doc(decl.doc, model)

        for field in decl.fields:
            if field.is_static or field.is_final:
                continue
            model.fields.append(self.extract_field(field))
        return model

    def extract_enum(self, decl: TypeDecl) -> ModelData:
        model = ModelData(name=decl.name, is_enum=True)
        self.registry.apply_model_tags(decl.tags, model)
        model.implements_list.extend(iface.name for iface in decl.interfaces)
        _apply_model_doc(decl.doc, model)

        for constant in decl.enum_constants:
            model.fields.append(FieldData(name=constant.name, description=constant.doc.description))
        return model

    def extract_interface(self, decl: TypeDecl) -> ModelData:
        """Interface models expose one property per ``getX()``/``isX()`` accessor."""
        model = ModelData(name=decl.name, is_interface=True)
        self.registry.apply_model_tags(decl.tags, model)
        model.extends_list.extend(iface.name for iface in decl.interfaces)
        _apply_model_doc(decl.doc, model)

        seen = set()
        for method in decl.methods:
            name = accessor_property(method)
            if name is None or name in seen:
                continue
            seen.add(name)
            field = FieldData(name=name, type_ref=resolve(method.return_type))
            self.registry.apply_field_tags(method.tags, field)
            _apply_field_doc(method.doc, field)
            model.fields.append(field)
        return model

    def extract_field(self, decl: FieldDecl) -> FieldData:
        field = FieldData(name=decl.name, type_ref=resolve(decl.type))
        self.registry.apply_field_tags(decl.tags, field)
        _apply_field_doc(decl.doc, field)
        return field


def accessor_property(method: MethodDecl) -> str | None:
    """Property name of a bean accessor, or None when the method is not one."""
    if method.parameters or "static" in method.modifiers or method.return_type.name == "void":
        return None
    for prefix in ("get", "is"):
        rest = method.name[len(prefix):]
        if method.name.startswith(prefix) and rest and rest[0].isupper():
            # JavaBeans keeps names like "URL" as-is
            if len(rest) > 1 and rest[1].isupper():
                return rest
            return rest[0].lower() + rest[1:]
    return None


def _apply_model_doc(doc: DocComment, model: ModelData) -> None:
    if doc.description:
        model.description = doc.description
    if doc.deprecated:
        model.deprecation_notes = doc.deprecated
    if doc.since and not model.since:
        model.since = doc.since


def _apply_field_doc(doc: DocComment, field: FieldData) -> None:
    if doc.description:
        field.description = doc.description
    if doc.deprecated:
        field.deprecation_notes = doc.deprecated
