"""
Configuration models for treep operations.

Uses Pydantic for validation. Settings are frozen (immutable) after
construction and always passed explicitly - there is no process-wide
configuration.

Pipelines that keep their import contracts alongside other config can load
every section from one YAML document:

    normalize:
      type_conversions: true
      required_fields: [id, name]
    graph:
      id_field: id
      branch_field: friends
    schema:
      name: {type: string, required: true, minLength: 1}
      age: {type: number, min: 0}
    logging:
      level: info
      json_output: true
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from treep.contracts.schema import FieldRule


class NormalizeConfig(BaseModel):
    """Options for normalize().

    Attributes:
        type_conversions: Coerce "true"/"false" and numeric strings to
            native booleans and numbers
        required_fields: Names that must be keys of the top-level object
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    type_conversions: bool = Field(default=True, alias="typeConversions")
    required_fields: tuple[str, ...] = Field(default=(), alias="requiredFields")

    @field_validator("required_fields")
    @classmethod
    def validate_required_fields(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Required field names must be non-empty and listed once."""
        for i, name in enumerate(v):
            if not name:
                raise ValueError(f"required_fields[{i}] cannot be empty")
        if len(v) != len(set(v)):
            duplicates = sorted({n for n in v if v.count(n) > 1})
            raise ValueError(f"Duplicate names in required_fields: {', '.join(duplicates)}")
        return v


class GraphConfig(BaseModel):
    """Options for from_json().

    Attributes:
        id_field: Name of the identity field on each record
        branch_field: Name of the field holding a list of referenced ids
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    id_field: str = Field(default="id", min_length=1, alias="idField")
    branch_field: str = Field(default="children", min_length=1, alias="branchField")

    @model_validator(mode="after")
    def validate_distinct_fields(self) -> "GraphConfig":
        """The identity and reference fields must be different fields."""
        if self.id_field == self.branch_field:
            raise ValueError(f"id_field and branch_field must differ (both are '{self.id_field}')")
        return self


class LoggingConfig(BaseModel):
    """Options for configure_logging().

    Attributes:
        level: Threshold for the "treep" logger namespace
        json_output: Render events as JSON lines instead of console text
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    json_output: bool = Field(default=False, alias="jsonOutput")

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept level names in any case."""
        return v.upper() if isinstance(v, str) else v


class TreepSettings(BaseModel):
    """Top-level settings grouping every component's configuration.

    Example:
        settings = TreepSettings.from_yaml("import.yaml")
        configure_logging(settings.logging)
        records = normalize(raw, settings.normalize)
        graph = from_json(records, settings.graph)
        report = validate_graph(graph, settings.schema_)
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    normalize: NormalizeConfig = Field(default_factory=NormalizeConfig)
    graph: GraphConfig = Field(default_factory=GraphConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    # "schema" shadows a BaseModel attribute, so the field is stored as schema_
    schema_: dict[str, FieldRule] = Field(default_factory=dict, alias="schema")

    @classmethod
    def from_yaml(cls, path: str | Path) -> "TreepSettings":
        """Load settings from a YAML file.

        Raises:
            FileNotFoundError: If path does not exist
            ValueError: If the document is not a mapping
            pydantic.ValidationError: If any section is invalid
        """
        text = Path(path).read_text(encoding="utf-8")
        data = yaml.safe_load(text)
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ValueError(f"{path}: settings document must be a mapping, got {type(data).__name__}")
        return cls.model_validate(dict(data))


def load_settings(path: str | Path) -> TreepSettings:
    """Load TreepSettings from a YAML file."""
    return TreepSettings.from_yaml(path)


def _by_field_name(config_type: type[BaseModel], options: Mapping[str, Any]) -> dict[str, Any]:
    """Rewrite alias keys (e.g. "idField") to field names ("id_field")."""
    names = {field.alias: name for name, field in config_type.model_fields.items() if field.alias}
    return {names.get(key, key): value for key, value in options.items()}


def coerce_config[ConfigT: BaseModel](
    config_type: type[ConfigT],
    config: ConfigT | Mapping[str, Any] | None,
    overrides: Mapping[str, Any],
) -> ConfigT:
    """Build a config model from an instance, a mapping, or nothing.

    Keyword overrides win over values carried by ``config``, whichever
    spelling (field name or camelCase alias) either side uses.
    """
    if config is None:
        base: dict[str, Any] = {}
    elif isinstance(config, config_type):
        if not overrides:
            return config
        base = config.model_dump()
    elif isinstance(config, Mapping):
        base = _by_field_name(config_type, config)
    else:
        raise TypeError(f"Expected {config_type.__name__} or mapping, got {type(config).__name__}")
    return config_type.model_validate({**base, **_by_field_name(config_type, overrides)})
