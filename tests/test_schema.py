from autodoc.generator.schema import build_schema, build_schemas, json_type
from autodoc.ir import FieldData, ModelData, TypeRef


def _model(model_name: str, /, **fields: TypeRef | None) -> ModelData:
    return ModelData(name=model_name, fields=[FieldData(name=k, type_ref=v) for k, v in fields.items()])


class TestJsonType:
    def test_primitives(self):
        assert json_type("int") == "integer"
        assert json_type("Long") == "integer"
        assert json_type("double") == "number"
        assert json_type("Float") == "number"
        assert json_type("boolean") == "boolean"
        assert json_type("Boolean") == "boolean"

    def test_everything_else_is_string(self):
        for name in ("String", "BigDecimal", "User", "short", "Array", None):
            assert json_type(name) == "string"


class TestBuildSchema:
    def test_object_with_properties(self):
        model = _model(
            "User",
            id=TypeRef(base="Long"),
            age=TypeRef(base="int"),
            active=TypeRef(base="boolean"),
            name=TypeRef(base="String"),
        )
        assert build_schema(model) == {
            "type": "object",
            "properties": {
                "id": {"type": "integer"},
                "age": {"type": "integer"},
                "active": {"type": "boolean"},
                "name": {"type": "string"},
            },
        }

    def test_collections_are_not_resolved(self):
        model = _model(
            "User",
            roles=TypeRef(base="List", args=(TypeRef(base="String"),)),
            scores=TypeRef(base="Array", args=(TypeRef(base="int"),)),
            address=TypeRef(base="Address"),
        )
        properties = build_schema(model)["properties"]
        assert properties["roles"] == {"type": "string"}
        assert properties["scores"] == {"type": "string"}
        assert properties["address"] == {"type": "string"}

    def test_enum_constants(self):
        model = _model("Role", ADMIN=None, GUEST=None)
        assert build_schema(model)["properties"] == {"ADMIN": {"type": "string"}, "GUEST": {"type": "string"}}

    def test_no_fields(self):
        assert build_schema(ModelData(name="Empty")) == {"type": "object", "properties": {}}


class TestBuildSchemas:
    def test_keeps_model_order(self):
        schemas = build_schemas([_model("Zebra"), _model("Apple"), _model("Mango")])
        assert list(schemas) == ["Zebra", "Apple", "Mango"]
