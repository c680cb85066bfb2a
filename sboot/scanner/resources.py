"""Java source classification for a single module layer.

The classifier works on plain text signals (annotations, keywords and file
name suffixes) rather than a Java parser. ``classify_source`` is the only
place those signals are interpreted; everything else works with the
resulting ``ResourceType``.
"""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass
from pathlib import Path

from sboot.scanner.models import MapperType, ResourceRecord, ResourceType

SOURCE_SUFFIX = ".java"
IMPLEMENTATION_SUFFIX = "Impl"
DTO_SUFFIXES: tuple[str, ...] = ("DTO", "Dto")

ENUM_MARKER = "public enum"
ENTITY_MARKERS: tuple[str, ...] = ("@Entity", "@Table")
SERVICE_MARKERS: tuple[str, ...] = ("@Service",)
CONTROLLER_MARKERS: tuple[str, ...] = ("@Controller", "@RestController")
REPOSITORY_MARKERS: tuple[str, ...] = ("@Repository",)
MAPPER_MARKER = "@Mapper"

_SPRING_MAPPER_RE = re.compile(r'@Mapper\s*\([^)]*componentModel\s*=\s*"spring"')
_INTERFACE_RE = re.compile(r"\binterface\s+\w+")


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def classify_mapper(content: str) -> MapperType:
    """Return the MapStruct flavour declared in *content*."""
    if MAPPER_MARKER not in content:
        return MapperType.NONE
    if _SPRING_MAPPER_RE.search(content):
        return MapperType.MAPSTRUCT_SPRING
    return MapperType.MAPSTRUCT


def classify_source(content: str, file_name: str) -> ResourceType:
    """Decide the role of a Java file from its text and file stem.

    Checks run in priority order and the first match wins, so a file that is
    both ``@Entity`` and ``@Table`` annotated and happens to mention
    ``@Service`` in a comment is still an entity.
    """
    if ENUM_MARKER in content:
        return ResourceType.ENUM
    if _contains_any(content, ENTITY_MARKERS):
        return ResourceType.ENTITY
    if _contains_any(content, SERVICE_MARKERS):
        return ResourceType.SERVICE
    if _contains_any(content, CONTROLLER_MARKERS):
        return ResourceType.CONTROLLER
    if _contains_any(content, REPOSITORY_MARKERS):
        return ResourceType.REPOSITORY
    if file_name.endswith(DTO_SUFFIXES):
        return ResourceType.DTO
    if classify_mapper(content) is not MapperType.NONE:
        return ResourceType.MAPPER
    if _INTERFACE_RE.search(content):
        if "Repository" in content:
            return ResourceType.REPOSITORY
        if "Service" in content:
            return ResourceType.SERVICE
        if "Mapper" in file_name:
            return ResourceType.MAPPER
    return ResourceType.UNKNOWN


def logical_name(file_name: str) -> tuple[str, bool]:
    """Split a file stem into ``(logical name, is_implementation)``."""
    if file_name.endswith(IMPLEMENTATION_SUFFIX) and len(file_name) > len(IMPLEMENTATION_SUFFIX):
        return file_name[: -len(IMPLEMENTATION_SUFFIX)], True
    return file_name, False


def _contains_any(content: str, markers: tuple[str, ...]) -> bool:
    return any(marker in content for marker in markers)


# ---------------------------------------------------------------------------
# Per-file analysis and merge
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ClassifiedFile:
    """Classification of one source file, before interface/impl merging."""

    name: str
    path: Path
    type: ResourceType
    mapper_type: MapperType
    logical_name: str
    is_implementation: bool


def classify_file(path: Path) -> ClassifiedFile:
    """Read and classify a single source file."""
    content = path.read_text(encoding="utf-8", errors="replace")
    name = path.name[: -len(SOURCE_SUFFIX)] if path.name.endswith(SOURCE_SUFFIX) else path.stem
    base_name, is_impl = logical_name(name)
    return ClassifiedFile(
        name=name,
        path=path,
        type=classify_source(content, name),
        mapper_type=classify_mapper(content),
        logical_name=base_name,
        is_implementation=is_impl,
    )


def merge_resources(files: list[ClassifiedFile]) -> list[ResourceRecord]:
    """Fold classified files into one record per logical name.

    An implementation attaches to the record of its interface. When the
    implementation is seen first it opens the record with its own type, and
    the interface replaces type, path and mapper flavour when it arrives, so
    the result does not depend on the order of *files*.
    """
    records: dict[str, dict] = {}
    opened_by_impl: set[str] = set()

    for item in files:
        key = item.logical_name
        existing = records.get(key)
        if item.is_implementation:
            if existing is None:
                records[key] = _record_fields(item, implementation=item.name)
                opened_by_impl.add(key)
            else:
                existing["implementation"] = item.name
            continue

        if existing is None:
            records[key] = _record_fields(item, implementation=None)
        elif key in opened_by_impl:
            existing.update(_record_fields(item, implementation=existing["implementation"]))
            opened_by_impl.discard(key)

    return [ResourceRecord(**fields) for fields in records.values()]


def _record_fields(item: ClassifiedFile, implementation: str | None) -> dict:
    return {
        "name": item.logical_name,
        "type": item.type,
        "path": item.path,
        "implementation": implementation,
        "mapper_type": item.mapper_type,
    }


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------


def collect_source_files(directory: Path) -> list[Path]:
    """Every ``.java`` file below *directory*, at any depth, sorted by path."""
    return sorted(
        path for path in directory.rglob(f"*{SOURCE_SUFFIX}") if path.is_file()
    )


class ResourceScanner:
    """Classifies every source file in a layer directory.

    Files are read and classified concurrently in worker threads; the merge
    into records happens afterwards on the calling task, over files sorted
    by path.
    """

    async def scan(self, directory: Path) -> tuple[ResourceRecord, ...]:
        files = await asyncio.to_thread(collect_source_files, directory)
        if not files:
            return ()
        classified = await asyncio.gather(
            *(asyncio.to_thread(classify_file, path) for path in files)
        )
        return tuple(merge_resources(list(classified)))
