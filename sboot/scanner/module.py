"""Layer-by-layer scanning of a single module."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

from sboot.scanner.models import LayerName, LayerStructure, ModuleStructure
from sboot.scanner.resources import ResourceScanner
from sboot.utils import print_debug


class ModuleScanner:
    """Builds a ``ModuleStructure`` from a module directory."""

    def __init__(self, resource_scanner: ResourceScanner | None = None) -> None:
        self.resource_scanner = resource_scanner or ResourceScanner()

    async def scan(self, module_path: Path) -> ModuleStructure:
        layers = await asyncio.gather(
            *(self.scan_layer(module_path / layer.value) for layer in LayerName)
        )
        return ModuleStructure(
            name=module_path.name,
            path=module_path,
            layers=dict(zip(LayerName, layers)),
        )

    async def scan_layer(self, layer_path: Path) -> Optional[LayerStructure]:
        """Scan one layer directory, or return ``None`` if it does not exist."""
        if not layer_path.is_dir():
            print_debug(f"Layer not present: {layer_path}")
            return None

        directories = await asyncio.to_thread(_list_subdirectories, layer_path)
        resources = await self.resource_scanner.scan(layer_path)
        print_debug(
            f"Scanned {layer_path}: {len(directories)} folder(s), {len(resources)} resource(s)"
        )
        return LayerStructure(
            path=layer_path,
            directories=directories,
            resources=resources,
        )


def _list_subdirectories(path: Path) -> tuple[str, ...]:
    return tuple(sorted(entry.name for entry in path.iterdir() if entry.is_dir()))
