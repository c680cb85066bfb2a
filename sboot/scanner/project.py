"""Whole-project scan: base package, modules and their resources.

Usage::

    from sboot.scanner import ProjectScanner

    structure = await ProjectScanner().scan()
    print(structure.base_package, structure.module_names())
"""

from __future__ import annotations

import asyncio
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from sboot.errors import EntryPointNotFoundError
from sboot.scanner.models import LayerName, ProjectStructure, package_path
from sboot.scanner.module import ModuleScanner
from sboot.scanner.paths import PathResolver
from sboot.utils import print_debug

ENTRY_POINT_SUFFIX = "Application.java"
ENTRY_POINT_MARKER = "@SpringBootApplication"

_LAYER_NAMES = frozenset(layer.value for layer in LayerName)


class ProjectScanner:
    """Scans a Spring Boot project into an immutable ``ProjectStructure``.

    Nothing is cached between calls; every ``scan`` reads the tree afresh.

    Args:
        path_resolver: Resolver for the project root and source tree.
            Defaults to one rooted at the process working directory.
        module_scanner: Per-module scanner.
    """

    def __init__(
        self,
        path_resolver: PathResolver | None = None,
        module_scanner: ModuleScanner | None = None,
    ) -> None:
        self.path_resolver = path_resolver or PathResolver()
        self.module_scanner = module_scanner or ModuleScanner()

    async def scan(self) -> ProjectStructure:
        """Run the full scan.

        Raises:
            ProjectNotFoundError: If no Java source directory exists.
            EntryPointNotFoundError: If no ``@SpringBootApplication`` class exists.
        """
        source_path = self.path_resolver.find_source_path()
        print_debug(f"Found source path: {source_path}")

        base_package = await self.find_base_package(source_path)
        print_debug(f"Base package: {base_package or '(default package)'}")

        base_package_path = package_path(source_path, base_package)
        module_paths = await asyncio.to_thread(self.find_modules, base_package_path)
        print_debug(f"Found modules: {[p.name for p in module_paths]}")

        modules = await asyncio.gather(
            *(self.module_scanner.scan(path) for path in module_paths)
        )

        return ProjectStructure(
            base_package=base_package,
            source_path=source_path,
            modules=tuple(modules),
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    # -- Base package ------------------------------------------------------

    async def find_base_package(self, source_path: Path) -> str:
        """Derive the base package from the location of the main class."""
        main_class = await asyncio.to_thread(self.find_main_class, source_path)
        if main_class is None:
            raise EntryPointNotFoundError(
                f"Could not find Spring Boot main class under {source_path}"
            )
        return extract_base_package(main_class, source_path)

    def find_main_class(self, start_path: Path) -> Optional[Path]:
        """Depth-first search for ``*Application.java`` carrying the boot annotation."""
        for entry in sorted(start_path.iterdir(), key=lambda p: p.name):
            if entry.is_dir():
                found = self.find_main_class(entry)
                if found is not None:
                    return found
            elif entry.name.endswith(ENTRY_POINT_SUFFIX):
                content = entry.read_text(encoding="utf-8", errors="replace")
                if ENTRY_POINT_MARKER in content:
                    return entry
        return None

    # -- Modules -----------------------------------------------------------

    def find_modules(self, base_path: Path) -> list[Path]:
        """Immediate subdirectories of *base_path* that look like modules."""
        return [
            entry
            for entry in sorted(base_path.iterdir(), key=lambda p: p.name)
            if entry.is_dir() and is_valid_module(entry)
        ]


def is_valid_module(module_path: Path) -> bool:
    """A module has at least one layer directory name among its children."""
    return any(child.name.lower() in _LAYER_NAMES for child in module_path.iterdir())


def extract_base_package(main_class_path: Path, source_path: Path) -> str:
    """Turn the main class directory, relative to *source_path*, into a package."""
    relative = os.path.relpath(main_class_path.parent, source_path)
    if relative == os.curdir:
        return ""
    return ".".join(Path(relative).parts)

