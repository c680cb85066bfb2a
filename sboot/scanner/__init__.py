"""sboot project scanner.

Discovers the layout of a Spring Boot project (source root, base package and
modules) and classifies the Java sources inside each module layer.

Quick usage::

    from sboot.scanner import ProjectScanner

    structure = await ProjectScanner().scan()
    for module in structure.modules:
        print(module.name, [r.name for r in module.resources()])
"""

from sboot.scanner.models import (
    LayerName,
    LayerStructure,
    MapperType,
    ModuleStructure,
    ProjectStructure,
    ResourceRecord,
    ResourceType,
)
from sboot.scanner.paths import PathResolver
from sboot.scanner.project import ProjectScanner
from sboot.scanner.resources import classify_source

__all__ = [
    "LayerName",
    "LayerStructure",
    "MapperType",
    "ModuleStructure",
    "PathResolver",
    "ProjectScanner",
    "ProjectStructure",
    "ResourceRecord",
    "ResourceType",
    "classify_source",
]
