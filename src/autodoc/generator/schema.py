"""Component schemas from ModelData.

Field types map to JSON-schema primitives by base name only. Collections
and nested models are not turned into ``$ref``s here.
"""

from autodoc.ir import FieldData, ModelData

PRIMITIVE_TYPES = {
    "int": "integer",
    "long": "integer",
    "Integer": "integer",
    "Long": "integer",
    "double": "number",
    "float": "number",
    "Double": "number",
    "Float": "number",
    "boolean": "boolean",
    "Boolean": "boolean",
}


def json_type(type_name: str | None) -> str:
    """JSON-schema primitive for a source type name; anything unknown is a string."""
    return PRIMITIVE_TYPES.get(type_name or "", "string")


def build_schema(model: ModelData) -> dict:
    return {
        "type": "object",
        "properties": {f.name: {"type": json_type(_base(f))} for f in model.fields},
    }


def build_schemas(models: list[ModelData]) -> dict[str, dict]:
    """Named schemas in model order. A repeated name keeps the last model."""
    return {model.name: build_schema(model) for model in models}


def _base(field: FieldData) -> str | None:
    return field.type_ref.base if field.type_ref is not None else None
