"""Resource generation with prerequisite checks.

``ResourceGenerator`` turns a ``GenerationRequest`` into Java source files
inside an existing module. Kinds that build on other artifacts check that
those artifacts exist on disk first:

* repository needs the entity;
* service (entity-based) needs the entity and the repository;
* controller (entity-based) needs the service and the entity;
* dto and mapper need the entity.

The identifier type of dependent artifacts is read back from the entity
source (``UUID`` if the text mentions it, ``Long`` otherwise).

Existing files are overwritten without confirmation. A ``full`` request runs
entity, repository, service and controller in that order and stops at the
first failure, leaving earlier files on disk.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import Any

from sboot.config import Config, IdType
from sboot.errors import (
    InvalidNameError,
    MissingPrerequisiteError,
    NoModulesFoundError,
    SbootError,
    UnknownModuleError,
)
from sboot.generator.models import (
    GenerationOptions,
    GenerationRequest,
    GenerationResult,
    ResourceKind,
)
from sboot.generator.templates import TemplateRenderer
from sboot.scanner.models import ProjectStructure
from sboot.utils import print_info, print_warning, write_text_file

RESOURCE_NAME_RE = re.compile(r"^[A-Z][a-zA-Z0-9 ]*$")
SOURCE_SUFFIX = ".java"
MAPPER_DTO_TYPE = "Response"


def validate_resource_name(name: str) -> str:
    """Return *name* stripped, or raise ``InvalidNameError``."""
    candidate = name.strip()
    if not RESOURCE_NAME_RE.match(candidate):
        raise InvalidNameError(
            "Resource name must start with uppercase letter and contain only "
            "letters, numbers and spaces"
        )
    return candidate


def to_pascal(name: str) -> str:
    """``"order item"`` -> ``"OrderItem"``; already-Pascal names pass through."""
    return "".join(word[:1].upper() + word[1:] for word in name.split())


def strip_suffix(name: str, suffix: str) -> str:
    if name.endswith(suffix) and name != suffix:
        return name[: -len(suffix)]
    return name


class ResourceGenerator:
    """Generates Java resources into the modules of a scanned project.

    Args:
        structure: Snapshot from ``ProjectScanner.scan``.
        config: Read-only generation preferences.
        renderer: Template renderer; the bundled templates by default.
        verbose: Print each step to the console.
    """

    def __init__(
        self,
        structure: ProjectStructure,
        config: Config,
        renderer: TemplateRenderer | None = None,
        verbose: bool = False,
    ) -> None:
        self.structure = structure
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.verbose = verbose

    # -- Public API --------------------------------------------------------

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Validate *request* and generate its files.

        Raises:
            InvalidNameError: If the name has the wrong shape.
            NoModulesFoundError: If the project has no modules.
            UnknownModuleError: If the requested module does not exist.
            MissingPrerequisiteError: If a required artifact is absent.
        """
        name = validate_resource_name(request.name)
        self._require_module(request.module)

        if self.verbose:
            print_info(f"Generating {request.type.value} resource: {name} in module {request.module}")

        if request.full:
            if request.type is not ResourceKind.ENTITY:
                raise SbootError("Full generation is only available for entity resources")
            return await self.generate_full(name, request.module, request.options)

        kind = request.type
        if kind is ResourceKind.ENTITY:
            return await self.generate_entity(name, request.module, request.options)
        if kind is ResourceKind.REPOSITORY:
            return await self.generate_repository(name, request.module)
        if kind is ResourceKind.SERVICE:
            if request.entity_based:
                return await self.generate_entity_based_service(name, request.module)
            return await self.generate_standalone_service(name, request.module)
        if kind is ResourceKind.CONTROLLER:
            if request.entity_based:
                return await self.generate_entity_based_controller(name, request.module)
            return await self.generate_standalone_controller(name, request.module)
        if kind is ResourceKind.ENUM:
            return await self.generate_enum(name, request.module)
        if kind is ResourceKind.DTO:
            return await self.generate_dto(name, request.module)
        if kind is ResourceKind.MAPPER:
            return await self.generate_mapper(name, request.module)
        raise SbootError(f"Resource type '{kind.value}' not implemented yet")

    async def generate_full(
        self, name: str, module: str, options: GenerationOptions
    ) -> GenerationResult:
        """Entity, repository, service and controller for one name, in order."""
        entity_name = to_pascal(name)
        created: list[Path] = []
        steps = (
            lambda: self.generate_entity(entity_name, module, options),
            lambda: self._generate_repository(entity_name, module),
            lambda: self._generate_entity_based_service(entity_name, module),
            lambda: self._generate_entity_based_controller(entity_name, module),
        )
        for step in steps:
            result = await step()
            created.extend(result.created_files)
        return GenerationResult(created_files=created)

    # -- Entity ------------------------------------------------------------

    async def generate_entity(
        self, name: str, module: str, options: GenerationOptions
    ) -> GenerationResult:
        id_type = self.config.resolve_id_type(options.id_type)
        entity_name = to_pascal(name)
        if self.verbose:
            print_info(f"Using ID type: {id_type.value}")

        context = {
            **self._base_context(module),
            "name": name,
            "entity_name": entity_name,
            **_id_context(id_type),
        }
        path = await self.renderer.render_to_file(
            "entity", self.entity_path(module, entity_name), context
        )
        return GenerationResult(created_files=[path])

    # -- Repository --------------------------------------------------------

    async def generate_repository(self, name: str, module: str) -> GenerationResult:
        return await self._generate_repository(strip_suffix(to_pascal(name), "Repository"), module)

    async def _generate_repository(self, entity_name: str, module: str) -> GenerationResult:
        id_type = await self._entity_id_type(module, entity_name)
        if self.verbose:
            print_info(f"Creating repository for entity: {entity_name}")
            print_info(f"Using ID type: {id_type.java_type}")

        context = {
            **self._base_context(module),
            "entity_name": entity_name,
            **_id_context(id_type),
        }
        path = await self.renderer.render_to_file(
            "repository", self.repository_path(module, entity_name), context
        )
        return GenerationResult(created_files=[path])

    # -- Service -----------------------------------------------------------

    async def generate_entity_based_service(self, name: str, module: str) -> GenerationResult:
        return await self._generate_entity_based_service(
            strip_suffix(to_pascal(name), "Service"), module
        )

    async def _generate_entity_based_service(self, entity_name: str, module: str) -> GenerationResult:
        self._require(self.entity_path(module, entity_name), "entity", entity_name, module)
        self._require(
            self.repository_path(module, entity_name), "repository", entity_name, module
        )
        id_type = await self._entity_id_type(module, entity_name)

        context = {
            **self._base_context(module),
            **self._service_preferences(),
            "entity_name": entity_name,
            **_id_context(id_type),
        }
        return await self._render_pair(
            ("service", self.service_path(module, entity_name)),
            ("service-impl", self.service_impl_path(module, entity_name)),
            context,
        )

    async def generate_standalone_service(self, name: str, module: str) -> GenerationResult:
        service_name = _require_suffix(to_pascal(name), "Service")
        context = {
            **self._base_context(module),
            **self._service_preferences(),
            "service_name": service_name,
        }
        return await self._render_pair(
            ("standalone-service", self.service_path(module, service_name)),
            ("standalone-service-impl", self.service_impl_path(module, service_name)),
            context,
        )

    # -- Controller --------------------------------------------------------

    async def generate_entity_based_controller(self, name: str, module: str) -> GenerationResult:
        return await self._generate_entity_based_controller(
            strip_suffix(to_pascal(name), "Controller"), module
        )

    async def _generate_entity_based_controller(self, entity_name: str, module: str) -> GenerationResult:
        self._require(self.service_path(module, entity_name), "service", entity_name, module)
        id_type = await self._entity_id_type(module, entity_name)

        context = {
            **self._base_context(module),
            "entity_name": entity_name,
            **_id_context(id_type),
        }
        path = await self.renderer.render_to_file(
            "controller", self.controller_path(module, entity_name), context
        )
        return GenerationResult(created_files=[path])

    async def generate_standalone_controller(self, name: str, module: str) -> GenerationResult:
        controller_name = _require_suffix(to_pascal(name), "Controller")
        context = {**self._base_context(module), "controller_name": controller_name}
        path = await self.renderer.render_to_file(
            "standalone-controller", self.controller_path(module, controller_name), context
        )
        return GenerationResult(created_files=[path])

    # -- Enum, DTO, mapper -------------------------------------------------

    async def generate_enum(self, name: str, module: str) -> GenerationResult:
        enum_name = to_pascal(name)
        context = {
            **self._base_context(module),
            "enum_name": enum_name,
            "include_display_name": self.config.enum_preferences.include_display_name,
        }
        path = await self.renderer.render_to_file(
            "enum", self.enum_path(module, enum_name), context
        )
        return GenerationResult(created_files=[path])

    async def generate_dto(self, name: str, module: str) -> GenerationResult:
        entity_name = strip_suffix(strip_suffix(to_pascal(name), "DTO"), "Dto")
        id_type = await self._entity_id_type(module, entity_name)
        prefs = self.config.dto_preferences
        if not prefs.types:
            print_warning("No DTO types configured; nothing to generate.")
            return GenerationResult()

        created: list[Path] = []
        for dto_type in prefs.types:
            dto_name = f"{entity_name}{dto_type}DTO"
            context = {
                **self._base_context(module),
                "entity_name": entity_name,
                "dto_name": dto_name,
                "dto_type": dto_type,
                "dto_location": prefs.default_location,
                "use_lombok": prefs.use_lombok,
                **_id_context(id_type),
            }
            created.append(
                await self.renderer.render_to_file(
                    "dto", self.dto_path(module, dto_name), context
                )
            )
        return GenerationResult(created_files=created)

    async def generate_mapper(self, name: str, module: str) -> GenerationResult:
        entity_name = strip_suffix(to_pascal(name), "Mapper")
        self._require(self.entity_path(module, entity_name), "entity", entity_name, module)
        prefs = self.config.mapper_preferences
        is_mapstruct = prefs.type == "mapstruct"
        dto_type = self._mapper_dto_type()
        context = {
            **self._base_context(module),
            "entity_name": entity_name,
            "dto_name": f"{entity_name}{dto_type}DTO",
            "dto_has_id": dto_type == MAPPER_DTO_TYPE,
            "dto_location": self.config.dto_preferences.default_location,
            "is_mapstruct": is_mapstruct,
            "use_spring_model": prefs.use_spring_model,
            "bidirectional": prefs.bidirectional,
        }
        if is_mapstruct:
            path = await self.renderer.render_to_file(
                "mapper", self.mapper_path(module, entity_name), context
            )
            return GenerationResult(created_files=[path])
        return await self._render_pair(
            ("mapper", self.mapper_path(module, entity_name)),
            ("mapper-impl", self.mapper_impl_path(module, entity_name)),
            context,
        )

    def _mapper_dto_type(self) -> str:
        """DTO type the mapper converts to: ``Response`` if configured, else the first one."""
        types = self.config.dto_preferences.types
        if MAPPER_DTO_TYPE in types:
            return MAPPER_DTO_TYPE
        if types:
            return types[0]
        print_warning(
            f"No DTO types configured; the mapper refers to {MAPPER_DTO_TYPE} DTOs "
            "that sboot will not generate."
        )
        return MAPPER_DTO_TYPE

    # -- Conventional paths ------------------------------------------------

    def module_path(self, module: str) -> Path:
        return self.structure.base_package_path / module

    def entity_path(self, module: str, entity_name: str) -> Path:
        return self.module_path(module) / "domain" / "entities" / f"{entity_name}{SOURCE_SUFFIX}"

    def enum_path(self, module: str, enum_name: str) -> Path:
        return self.module_path(module) / "domain" / "enums" / f"{enum_name}{SOURCE_SUFFIX}"

    def repository_path(self, module: str, entity_name: str) -> Path:
        return (
            self.module_path(module)
            / "infrastructure"
            / "repositories"
            / f"{entity_name}Repository{SOURCE_SUFFIX}"
        )

    def service_path(self, module: str, base_name: str) -> Path:
        return (
            self.module_path(module) / "application" / "services" / f"{base_name}Service{SOURCE_SUFFIX}"
        )

    def service_impl_path(self, module: str, base_name: str) -> Path:
        return (
            self.module_path(module)
            / "application"
            / "services"
            / "implementations"
            / f"{base_name}ServiceImpl{SOURCE_SUFFIX}"
        )

    def controller_path(self, module: str, base_name: str) -> Path:
        return (
            self.module_path(module)
            / "infrastructure"
            / "controllers"
            / f"{base_name}Controller{SOURCE_SUFFIX}"
        )

    def dto_path(self, module: str, dto_name: str) -> Path:
        location = self.config.dto_preferences.default_location
        return self.module_path(module) / location / "dtos" / f"{dto_name}{SOURCE_SUFFIX}"

    def mapper_path(self, module: str, entity_name: str) -> Path:
        return (
            self.module_path(module) / "application" / "mappers" / f"{entity_name}Mapper{SOURCE_SUFFIX}"
        )

    def mapper_impl_path(self, module: str, entity_name: str) -> Path:
        return (
            self.module_path(module)
            / "application"
            / "mappers"
            / "implementations"
            / f"{entity_name}MapperImpl{SOURCE_SUFFIX}"
        )

    # -- Internal helpers --------------------------------------------------

    def _require_module(self, module: str) -> None:
        if not self.structure.modules:
            raise NoModulesFoundError("No modules found in project. Create a module first.")
        if self.structure.get_module(module) is None:
            raise UnknownModuleError(module)

    @staticmethod
    def _require(path: Path, artifact: str, name: str, module: str) -> None:
        if not path.is_file():
            raise MissingPrerequisiteError(artifact, name, module)

    async def _entity_id_type(self, module: str, entity_name: str) -> IdType:
        """Infer the identifier type from the entity source, which must exist."""
        path = self.entity_path(module, entity_name)
        self._require(path, "entity", entity_name, module)
        content = await asyncio.to_thread(path.read_text, encoding="utf-8", errors="replace")
        return IdType.UUID if "UUID" in content else IdType.SERIAL

    def _base_context(self, module: str) -> dict[str, Any]:
        base_package = self.structure.base_package
        return {
            "base_package": base_package,
            "module": module,
            "module_package": f"{base_package}.{module}" if base_package else module,
        }

    def _service_preferences(self) -> dict[str, Any]:
        prefs = self.config.service_preferences
        return {
            "use_transactional": prefs.use_transactional,
            "constructor_injection": prefs.constructor_injection,
        }

    async def _render_pair(
        self,
        interface: tuple[str, Path],
        implementation: tuple[str, Path],
        context: dict[str, Any],
    ) -> GenerationResult:
        # Both sources are rendered before anything is written.
        interface_source = self.renderer.render(interface[0], context)
        implementation_source = self.renderer.render(implementation[0], context)
        created: list[Path] = []
        for path, source in ((interface[1], interface_source), (implementation[1], implementation_source)):
            await asyncio.to_thread(write_text_file, path, source)
            created.append(path)
        return GenerationResult(created_files=created)


def _id_context(id_type: IdType) -> dict[str, Any]:
    return {
        "id_type": id_type.java_type,
        "id_generation_type": id_type.generation_type,
        "is_uuid": id_type is IdType.UUID,
    }


def _require_suffix(name: str, suffix: str) -> str:
    """Base name of a standalone resource whose name must end with *suffix*."""
    if not name.endswith(suffix) or name == suffix:
        raise InvalidNameError(f"Standalone {suffix.lower()} name must end with '{suffix}'")
    return name[: -len(suffix)]
