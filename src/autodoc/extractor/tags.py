"""Metadata tag handlers.

Two dispatch tables map a tag name to a function that writes into the
record under construction: one for declaration-level tags (ModelData) and
one for member-level tags (FieldData). Unknown tags are ignored.

A handler that cannot parse an attribute leaves the corresponding rule
unset; it never raises for bad attribute text.
"""

import logging
from collections.abc import Callable, Iterable, Mapping

from autodoc.ir import FieldData, ModelData
from autodoc.parser.declarations import Tag, unquote, split_array

logger = logging.getLogger(__name__)

ModelTagHandler = Callable[[Tag, ModelData], None]
FieldTagHandler = Callable[[Tag, FieldData], None]


class TagHandlerRegistry:
    """Name-keyed handlers for declaration-level and member-level tags."""

    def __init__(self):
        self._model_handlers: dict[str, ModelTagHandler] = {}
        self._field_handlers: dict[str, FieldTagHandler] = {}

    @classmethod
    def with_defaults(cls) -> "TagHandlerRegistry":
        registry = cls()
        for name, handler in DEFAULT_MODEL_HANDLERS.items():
            registry.register_model_handler(name, handler)
        for name, handler in DEFAULT_FIELD_HANDLERS.items():
            registry.register_field_handler(name, handler)
        return registry

    def register_model_handler(self, tag_name: str, handler: ModelTagHandler) -> None:
        self._model_handlers[tag_name] = handler

    def register_field_handler(self, tag_name: str, handler: FieldTagHandler) -> None:
        self._field_handlers[tag_name] = handler

    def model_tag(self, tag_name: str) -> Callable[[ModelTagHandler], ModelTagHandler]:
        """Decorator form of :meth:`register_model_handler`."""
        def decorator(handler: ModelTagHandler) -> ModelTagHandler:
            self.register_model_handler(tag_name, handler)
            return handler
        return decorator

    def field_tag(self, tag_name: str) -> Callable[[FieldTagHandler], FieldTagHandler]:
        """Decorator form of :meth:`register_field_handler`."""
        def decorator(handler: FieldTagHandler) -> FieldTagHandler:
            self.register_field_handler(tag_name, handler)
            return handler
        return decorator

    def apply_model_tags(self, tags: Iterable[Tag], model: ModelData) -> None:
        for tag in tags:
            handler = self._model_handlers.get(tag.name)
            if handler is not None:
                handler(tag, model)

    def apply_field_tags(self, tags: Iterable[Tag], field: FieldData) -> None:
        for tag in tags:
            handler = self._field_handlers.get(tag.name)
            if handler is not None:
                handler(tag, field)


# -- declaration-level handlers ------------------------------------------------


def _entity(tag: Tag, model: ModelData) -> None:
    model.extensions["isEntity"] = True


def _table(tag: Tag, model: ModelData) -> None:
    name = tag.get_string("name")
    if name:
        model.extensions["tableName"] = name


def _model_schema(tag: Tag, model: ModelData) -> None:
    description = tag.get_string("description")
    if description:
        model.description = description
    example = tag.get_string("example")
    if example is not None:
        model.example = example


def _model_deprecated(tag: Tag, model: ModelData) -> None:
    model.deprecated = True
    since = tag.get_string("since")
    if since:
        model.since = since
    notes = tag.get_string("message", "notes")
    if notes:
        model.deprecation_notes = notes


# -- member-level handlers -----------------------------------------------------


def _not_null(tag: Tag, field: FieldData) -> None:
    field.required = True
    field.validation_rules["required"] = True


def _size(tag: Tag, field: FieldData) -> None:
    for key, rule in (("min", "minLength"), ("max", "maxLength")):
        raw = tag.get(key)
        if raw is None:
            continue
        value = parse_int(raw)
        if value is None:
            logger.debug("Ignoring non-integer @%s(%s=%s) on %s", tag.name, key, raw, field.name)
            continue
        field.validation_rules[rule] = value


def _numeric_bound(rule: str) -> FieldTagHandler:
    def handler(tag: Tag, field: FieldData) -> None:
        raw = tag.get("value")
        if raw is None:
            return
        value = parse_number(raw)
        if value is None:
            logger.debug("Ignoring non-numeric @%s(%s) on %s", tag.name, raw, field.name)
            return
        field.validation_rules[rule] = value
    return handler


def _pattern(tag: Tag, field: FieldData) -> None:
    regexp = tag.get_string("regexp")
    if regexp is not None:
        field.validation_rules["pattern"] = regexp


def _email(tag: Tag, field: FieldData) -> None:
    field.validation_rules["format"] = "email"


def _field_deprecated(tag: Tag, field: FieldData) -> None:
    field.deprecated = True
    notes = tag.get_string("message", "notes")
    if notes:
        field.deprecation_notes = notes


def _property_description(tag: Tag, field: FieldData) -> None:
    description = tag.get_string("description", "value", "notes")
    if description:
        field.description = description
    example = tag.get_string("example")
    if example is not None:
        field.example = example
    # an explicit false never clears a requirement set by another constraint
    if tag.get_bool("required"):
        field.required = True
        field.validation_rules["required"] = True


DEFAULT_MODEL_HANDLERS: Mapping[str, ModelTagHandler] = {
    "Entity": _entity,
    "Table": _table,
    "ApiModel": _model_schema,
    "Schema": _model_schema,
    "Deprecated": _model_deprecated,
}

DEFAULT_FIELD_HANDLERS: Mapping[str, FieldTagHandler] = {
    "NotNull": _not_null,
    "NotBlank": _not_null,
    "NotEmpty": _not_null,
    "Size": _size,
    "Min": _numeric_bound("minimum"),
    "Max": _numeric_bound("maximum"),
    "DecimalMin": _numeric_bound("minimum"),
    "DecimalMax": _numeric_bound("maximum"),
    "Pattern": _pattern,
    "Email": _email,
    "Deprecated": _field_deprecated,
    "Schema": _property_description,
    "ApiModelProperty": _property_description,
}


def parse_int(raw: str) -> int | None:
    """Parse an integer literal such as ``10``, ``"10"`` or ``10L``."""
    text = _literal(raw).rstrip("lL").replace("_", "")
    try:
        return int(text)
    except ValueError:
        return None


def parse_number(raw: str) -> float | None:
    """Parse a numeric literal such as ``0``, ``"0.01"`` or ``1.5d``."""
    text = _literal(raw).rstrip("lLdDfF").replace("_", "")
    try:
        return float(text)
    except ValueError:
        return None


def _literal(raw: str) -> str:
    values = split_array(raw)
    return unquote(values[0]) if values else ""
