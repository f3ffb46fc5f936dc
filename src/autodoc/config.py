"""Settings for extraction heuristics and document metadata.

Heuristic lists are immutable configuration handed to the classifier and
extractors, so every run is deterministic for a given settings object.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from autodoc.errors import ConfigError


class HeuristicsConfig(BaseModel):
    """Tag names, namespace keywords and naming rules used during extraction."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    infrastructure_namespaces: tuple[str, ...] = (
        "service", "repository", "repo", "config", "controller", "util", "handler",
    )
    model_namespaces: tuple[str, ...] = (
        "model", "models", "dto", "dtos", "entity", "entities", "domain",
    )
    model_tags: tuple[str, ...] = (
        "Entity", "Data", "Table", "JsonProperty", "JsonInclude",
        "Schema", "ApiModel", "Document", "Embeddable", "Value",
    )
    controller_tags: tuple[str, ...] = ("RestController", "Controller")
    advice_tags: tuple[str, ...] = ("ControllerAdvice", "RestControllerAdvice")

    injection_tags: tuple[str, ...] = ("Autowired", "Inject", "Resource", "Value")
    service_suffixes: tuple[str, ...] = (
        "Service", "Manager", "Processor", "Handler", "Delegate", "Provider", "Helper",
    )
    service_keywords: tuple[str, ...] = ("service", "repository")

    verb_mapping_tags: dict[str, str] = Field(default_factory=lambda: {
        "GetMapping": "GET",
        "PostMapping": "POST",
        "PutMapping": "PUT",
        "DeleteMapping": "DELETE",
        "PatchMapping": "PATCH",
    })
    generic_mapping_tag: str = "RequestMapping"
    path_param_tags: tuple[str, ...] = ("PathVariable",)
    query_param_tags: tuple[str, ...] = ("RequestParam",)
    body_tags: tuple[str, ...] = ("RequestBody",)
    grouping_tags: tuple[str, ...] = ("Tag", "Api")
    operation_tags: tuple[str, ...] = ("Operation", "ApiOperation")
    deprecation_tag: str = "Deprecated"
    controller_suffix: str = "Controller"

    @property
    def mapping_tags(self) -> tuple[str, ...]:
        return (*self.verb_mapping_tags, self.generic_mapping_tag)


class ServerConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    url: str
    description: str = ""


def _default_servers() -> list[ServerConfig]:
    return [ServerConfig(url="https://api.example.com/v1", description="Production server")]


class DocumentConfig(BaseModel):
    """Metadata and type conventions for the synthesized document."""

    model_config = ConfigDict(extra="forbid")

    title: str = "Generated API Documentation"
    version: str = "1.0.0"
    servers: list[ServerConfig] = Field(default_factory=_default_servers)
    collection_types: tuple[str, ...] = ("List", "Set", "Array")
    placeholder_types: tuple[str, ...] = ("?", "Object")


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    heuristics: HeuristicsConfig = Field(default_factory=HeuristicsConfig)
    document: DocumentConfig = Field(default_factory=DocumentConfig)


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a YAML file, or return the defaults when no path is given."""
    if path is None:
        return Settings()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"cannot read settings file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"{path}: {e}") from e


def parse_info(info_flag: str) -> dict[str, str]:
    """Parse a flag value like ``title="My API",version="2.1.0"``."""
    return _parse_pairs(info_flag)


def parse_servers(servers_flag: str) -> list[ServerConfig]:
    """Parse ``url="https://a",description="Prod";url="https://b"`` into servers."""
    servers = []
    for spec in servers_flag.split(";"):
        spec = spec.strip()
        if not spec:
            continue
        pairs = _parse_pairs(spec)
        if "url" not in pairs:
            raise ConfigError(f"server entry without url: {spec!r}")
        try:
            servers.append(ServerConfig(**pairs))
        except ValidationError as e:
            raise ConfigError(f"invalid server entry {spec!r}: {e}") from e
    return servers


def _parse_pairs(text: str) -> dict[str, str]:
    pairs = {}
    for part in text.split(","):
        key, sep, value = part.partition("=")
        if not sep:
            continue
        pairs[key.strip()] = value.strip().strip('"')
    return pairs
