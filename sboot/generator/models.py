"""Request and result models for resource and module generation."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from sboot.config import IdType


class ResourceKind(str, Enum):
    """Resource kinds that ``sboot create resource`` can generate."""
    ENTITY = "entity"
    REPOSITORY = "repository"
    SERVICE = "service"
    CONTROLLER = "controller"
    DTO = "dto"
    MAPPER = "mapper"
    ENUM = "enum"


class GenerationOptions(BaseModel):
    id_type: Optional[IdType] = Field(
        default=None, description="Identifier type for entities; config default when omitted"
    )


class GenerationRequest(BaseModel):
    """A validated request to generate one resource (or a full entity stack)."""
    name: str = Field(..., description="Resource name, e.g. 'Order' or 'Order Item'")
    type: ResourceKind
    module: str = Field(..., description="Name of an existing module")
    entity_based: bool = Field(
        default=True,
        description="Service/controller only: generate against an existing entity",
    )
    full: bool = Field(
        default=False,
        description="Entity only: also generate repository, service and controller",
    )
    options: GenerationOptions = Field(default_factory=GenerationOptions)


class GenerationResult(BaseModel):
    created_files: list[Path] = Field(default_factory=list)


class ModuleGenerationResult(BaseModel):
    module_name: str
    base_path: Path
    created_paths: list[Path] = Field(default_factory=list)
