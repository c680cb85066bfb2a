"""sboot configuration.

Typed configuration for module scaffolding and resource generation. All
settings use Pydantic v2 models so a hand-edited ``sboot.config.json`` is
validated on load. Field names are snake_case in Python and camelCase in the
JSON document.

The generators only ever read a ``Config``; creating, resetting and saving
the document is the job of the ``sboot config`` command.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from sboot.errors import ConfigError
from sboot.scanner.models import LayerName

DEFAULT_CONFIG_FILE = "sboot.config.json"


class IdType(str, Enum):
    """Identifier strategy for generated entities."""

    UUID = "UUID"
    SERIAL = "SERIAL"

    @property
    def java_type(self) -> str:
        return "UUID" if self is IdType.UUID else "Long"

    @property
    def generation_type(self) -> str:
        return "UUID" if self is IdType.UUID else "IDENTITY"


class _ConfigModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Module structure
# ---------------------------------------------------------------------------


class LayerConfig(_ConfigModel):
    """Whether a layer is scaffolded and which folders it gets."""

    enabled: bool = True
    folders: list[str] = Field(default_factory=list)


def _default_layers() -> dict[str, LayerConfig]:
    return {
        LayerName.APPLICATION.value: LayerConfig(folders=["mappers", "services"]),
        LayerName.DOMAIN.value: LayerConfig(folders=["entities", "enums"]),
        LayerName.INFRASTRUCTURE.value: LayerConfig(
            folders=["controllers", "repositories", "dtos"]
        ),
    }


class ModuleStructureConfig(_ConfigModel):
    """Layer skeleton created by ``sboot create module``."""

    layers: dict[str, LayerConfig] = Field(default_factory=_default_layers)

    @field_validator("layers")
    @classmethod
    def _known_layers_only(cls, value: dict[str, LayerConfig]) -> dict[str, LayerConfig]:
        allowed = {layer.value for layer in LayerName}
        unknown = sorted(set(value) - allowed)
        if unknown:
            raise ValueError(
                f"Unknown layer(s) {', '.join(unknown)}; "
                f"expected one of {', '.join(sorted(allowed))}"
            )
        return value

    def enabled_layers(self) -> list[tuple[LayerName, LayerConfig]]:
        """Return enabled layers in canonical layer order."""
        return [
            (layer, self.layers[layer.value])
            for layer in LayerName
            if layer.value in self.layers and self.layers[layer.value].enabled
        ]


# ---------------------------------------------------------------------------
# Per-resource preferences
# ---------------------------------------------------------------------------


class EntityPreferences(_ConfigModel):
    default_id_type: IdType = IdType.UUID


class MapperPreferences(_ConfigModel):
    type: Literal["mapstruct", "manual"] = "mapstruct"
    use_spring_model: bool = True
    bidirectional: bool = True


class DtoPreferences(_ConfigModel):
    default_location: Literal["infrastructure", "application"] = "infrastructure"
    types: list[Literal["Create", "Response", "Update"]] = Field(
        default_factory=lambda: ["Create"]
    )
    use_lombok: bool = True


class EnumPreferences(_ConfigModel):
    include_display_name: bool = True


class ServicePreferences(_ConfigModel):
    use_transactional: bool = True
    constructor_injection: bool = True


# ---------------------------------------------------------------------------
# Root document
# ---------------------------------------------------------------------------


class Config(_ConfigModel):
    """Global sboot configuration.

    Every section is optional; a missing section (or a missing file) falls
    back to the defaults declared on the models above.
    """

    module_structure: ModuleStructureConfig = Field(default_factory=ModuleStructureConfig)
    entity_preferences: EntityPreferences = Field(default_factory=EntityPreferences)
    mapper_preferences: MapperPreferences = Field(default_factory=MapperPreferences)
    dto_preferences: DtoPreferences = Field(default_factory=DtoPreferences)
    enum_preferences: EnumPreferences = Field(default_factory=EnumPreferences)
    service_preferences: ServicePreferences = Field(default_factory=ServicePreferences)

    def resolve_id_type(self, requested: IdType | str | None = None) -> IdType:
        """Pick the identifier type for a new entity.

        Resolution order is the explicit request, then
        ``entityPreferences.defaultIdType``, then ``UUID``.

        Raises:
            ConfigError: If *requested* is not a known identifier type.
        """
        if requested is None or requested == "":
            return self.entity_preferences.default_id_type or IdType.UUID
        if isinstance(requested, IdType):
            return requested
        try:
            return IdType(requested.upper())
        except ValueError as exc:
            choices = ", ".join(t.value for t in IdType)
            raise ConfigError(
                f"Invalid ID type '{requested}'. Valid types are: {choices}"
            ) from exc

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to ``sboot.config.json`` in the
                working directory.

        Returns:
            The resolved path where the file was written.
        """
        target = Path(path or DEFAULT_CONFIG_FILE)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(self.model_dump_json(indent=2, by_alias=True) + "\n", encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Error saving configuration: {exc}") from exc
        return target.resolve()

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """Load a configuration document, or the defaults if it does not exist.

        Raises:
            ConfigError: If the file cannot be read or fails validation.
        """
        source = Path(path or DEFAULT_CONFIG_FILE)
        if not source.exists():
            return cls()
        try:
            raw = source.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Error reading configuration: {exc}") from exc
        try:
            return cls.model_validate_json(raw)
        except ValidationError as exc:
            raise ConfigError(f"Error reading configuration {source}: {exc}") from exc

    @classmethod
    def from_env(cls) -> "Config":
        """Load the configuration named by ``SBOOT_CONFIG`` (or the default file)."""
        return cls.load(config_path_from_env())


def config_path_from_env() -> Path:
    """Return the configuration path, honouring the ``SBOOT_CONFIG`` variable."""
    return Path(os.environ.get("SBOOT_CONFIG") or DEFAULT_CONFIG_FILE)


__all__ = [
    "Config",
    "DEFAULT_CONFIG_FILE",
    "DtoPreferences",
    "EntityPreferences",
    "EnumPreferences",
    "IdType",
    "LayerConfig",
    "MapperPreferences",
    "ModuleStructureConfig",
    "ServicePreferences",
    "config_path_from_env",
]
