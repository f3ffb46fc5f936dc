"""Intermediate representation of a parsed web service.

Extractors build these records from source declarations; generators turn
them into documents. Serialized field names are camelCase (``typeRef``,
``validationRules``, ``in`` ...), matching the raw IR document.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


class ParameterLocation(str, Enum):
    PATH = "path"
    QUERY = "query"


class InjectionType(str, Enum):
    FIELD = "field"
    CONSTRUCTOR = "constructor"


class RelationshipType(str, Enum):
    INJECTS = "INJECTS"
    EXTENDS = "EXTENDS"
    IMPLEMENTS = "IMPLEMENTS"


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TypeRef(BaseModel):
    """A possibly generic type: ``List<Page<User>>`` is List[Page[User]]."""

    model_config = ConfigDict(frozen=True)

    base: str = Field(min_length=1)
    args: tuple["TypeRef", ...] = ()

    def __str__(self) -> str:
        if not self.args:
            return self.base
        return f"{self.base}<{', '.join(str(a) for a in self.args)}>"


class FieldData(_Record):
    """A model property. Enumeration constants carry no type_ref."""

    name: str
    type_ref: TypeRef | None = None
    required: bool = False
    description: str = ""
    validation_rules: dict[str, Any] = {}
    example: str | None = None
    deprecated: bool = False
    deprecation_notes: str | None = None


class ModelData(_Record):
    name: str
    description: str = ""
    fields: list[FieldData] = []
    is_interface: bool = False
    is_enum: bool = False
    extends_list: list[str] = []
    implements_list: list[str] = []
    example: str | None = None
    deprecated: bool = False
    deprecation_notes: str | None = None
    since: str | None = None
    extensions: dict[str, Any] = {}


class ParameterData(_Record):
    name: str
    location: ParameterLocation = Field(alias="in")
    required: bool
    description: str = ""
    type: TypeRef


class DependencyData(_Record):
    """A collaborator injected into a controller."""

    name: str
    type: str
    injection_type: InjectionType


class EndpointData(_Record):
    path: str
    method: HttpMethod
    summary: str = ""
    description: str = ""
    tags: list[str] = []
    parameters: list[ParameterData] = []
    request_body_type: TypeRef | None = None
    response_type: TypeRef
    controller_name: str = ""
    controller_package: str = ""
    dependencies: list[DependencyData] = []
    deprecated: bool = False

    @property
    def controller_qualified_name(self) -> str:
        if not self.controller_package:
            return self.controller_name
        return f"{self.controller_package}.{self.controller_name}"


class Relationship(_Record):
    """A graph edge between two declarations, used only while extracting."""

    source_class: str
    target_class: str
    type: RelationshipType
    name: str | None = None
    injection_type: InjectionType | None = None
    source_method: str | None = None
    target_method: str | None = None


class ParsedProject:
    """Endpoints and models of one extraction run.

    Records are appended while extracting; readers always get copies.
    """

    def __init__(self):
        self._endpoints: list[EndpointData] = []
        self._models: list[ModelData] = []
        self._components: list[str] = []

    def add_endpoint(self, endpoint: EndpointData) -> None:
        self._endpoints.append(endpoint)

    def add_model(self, model: ModelData) -> None:
        self._models.append(model)

    def add_component(self, component: str) -> None:
        if component not in self._components:
            self._components.append(component)

    @property
    def endpoints(self) -> list[EndpointData]:
        return [e.model_copy(deep=True) for e in self._endpoints]

    @property
    def models(self) -> list[ModelData]:
        return [m.model_copy(deep=True) for m in self._models]

    @property
    def components(self) -> list[str]:
        return list(self._components)

    def to_dict(self) -> dict[str, Any]:
        """Raw IR document: ``{endpoints, models, components}``."""
        return {
            "endpoints": [e.model_dump(mode="json", by_alias=True) for e in self._endpoints],
            "models": [m.model_dump(mode="json", by_alias=True) for m in self._models],
            "components": list(self._components),
        }
