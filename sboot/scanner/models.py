"""Pydantic v2 models for a scanned project structure.

A ``ProjectStructure`` is the immutable snapshot produced by one scan: the
base package, the Java source root, and every module with its three layers
and the classified resources inside them.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class LayerName(str, Enum):
    """The three fixed architectural layers of a module."""
    APPLICATION = "application"
    DOMAIN = "domain"
    INFRASTRUCTURE = "infrastructure"


class ResourceType(str, Enum):
    """Role of a source file, as decided by the classifier."""
    ENTITY = "entity"
    REPOSITORY = "repository"
    SERVICE = "service"
    CONTROLLER = "controller"
    MAPPER = "mapper"
    DTO = "dto"
    ENUM = "enum"
    UNKNOWN = "unknown"


class MapperType(str, Enum):
    """Flavour of a MapStruct mapper. ``none`` for anything that is not one."""
    NONE = "none"
    MAPSTRUCT = "mapstruct"
    MAPSTRUCT_SPRING = "mapstruct-spring"


# ---------------------------------------------------------------------------
# Structure snapshot
# ---------------------------------------------------------------------------

def package_path(source_path: Path, package: str) -> Path:
    """Directory of dotted *package* under *source_path*; the root for the default package."""
    if not package:
        return source_path
    return source_path.joinpath(*package.split("."))


class _Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True)


class ResourceRecord(_Snapshot):
    """One logical resource: an interface and, optionally, its implementation."""
    name: str = Field(..., description="Logical name, with the 'Impl' suffix stripped")
    type: ResourceType = Field(..., description="Classified role")
    path: Path = Field(..., description="Representative source file")
    implementation: Optional[str] = Field(
        default=None, description="File stem of the implementation class, if one was found"
    )
    mapper_type: MapperType = Field(default=MapperType.NONE)


class LayerStructure(_Snapshot):
    """Contents of one existing layer directory."""
    path: Path
    directories: tuple[str, ...] = Field(default_factory=tuple)
    resources: tuple[ResourceRecord, ...] = Field(default_factory=tuple)

    def find(self, name: str) -> Optional[ResourceRecord]:
        """Return the resource with logical *name*, if present."""
        for resource in self.resources:
            if resource.name == name:
                return resource
        return None


class ModuleStructure(_Snapshot):
    """A module directory and its layers.

    A layer maps to ``None`` when its directory does not exist, which is
    different from an existing but empty layer.
    """
    name: str
    path: Path
    layers: dict[LayerName, Optional[LayerStructure]] = Field(default_factory=dict)

    def layer(self, name: LayerName) -> Optional[LayerStructure]:
        return self.layers.get(name)

    def resources(self) -> list[ResourceRecord]:
        """Every resource across all present layers, in layer order."""
        found: list[ResourceRecord] = []
        for layer_name in LayerName:
            layer = self.layers.get(layer_name)
            if layer is not None:
                found.extend(layer.resources)
        return found


class ProjectStructure(_Snapshot):
    """Result of a full project scan."""
    base_package: str = Field(..., description="Dotted base package; may be empty")
    source_path: Path = Field(..., description="Absolute Java source root")
    modules: tuple[ModuleStructure, ...] = Field(default_factory=tuple)
    timestamp: str = Field(..., description="ISO-8601 UTC time of the scan")

    @property
    def base_package_path(self) -> Path:
        """Directory of the base package under the source root."""
        return package_path(self.source_path, self.base_package)

    def module_names(self) -> list[str]:
        return [module.name for module in self.modules]

    def get_module(self, name: str) -> Optional[ModuleStructure]:
        for module in self.modules:
            if module.name == name:
                return module
        return None
