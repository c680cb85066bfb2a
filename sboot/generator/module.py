"""Module skeleton scaffolding.

Creates ``<base package>/<module>/<layer>/<folder>`` for every enabled layer
in the configuration. Folders named ``services`` or ``mappers`` also get an
``implementations`` child. Running it again on an existing module is a no-op.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path

from sboot.config import Config
from sboot.errors import InvalidNameError
from sboot.generator.models import ModuleGenerationResult
from sboot.scanner.models import ProjectStructure
from sboot.utils import ensure_dir, print_info

MODULE_NAME_RE = re.compile(r"^[a-z][a-z0-9]*$")
IMPLEMENTATION_FOLDERS = frozenset({"services", "mappers"})


def validate_module_name(name: str) -> str:
    """Return *name* stripped, or raise ``InvalidNameError``."""
    candidate = name.strip()
    if not MODULE_NAME_RE.match(candidate):
        raise InvalidNameError(
            "Module name must start with lowercase letter and contain only "
            "letters and numbers"
        )
    return candidate


class ModuleGenerator:
    """Scaffolds the layer/folder skeleton of a new module."""

    def __init__(
        self,
        structure: ProjectStructure,
        config: Config,
        verbose: bool = False,
    ) -> None:
        self.structure = structure
        self.config = config
        self.verbose = verbose

    async def generate(self, module_name: str) -> ModuleGenerationResult:
        """Create the module directory tree.

        Returns:
            The module name, its base path, and every directory touched in
            creation order (whether or not it already existed).
        """
        module_name = validate_module_name(module_name)
        base_path = self.structure.base_package_path / module_name
        if self.verbose:
            print_info(f"Creating module at: {base_path}")

        created: list[Path] = []
        await self._mkdir(base_path, created)

        for layer, layer_config in self.config.module_structure.enabled_layers():
            layer_path = base_path / layer.value
            if self.verbose:
                print_info(f"Creating {layer.value} layer")
            await self._mkdir(layer_path, created)

            for folder in layer_config.folders:
                folder_path = layer_path / folder
                if self.verbose:
                    print_info(f"Creating folder: {folder}")
                await self._mkdir(folder_path, created)
                if folder in IMPLEMENTATION_FOLDERS:
                    await self._mkdir(folder_path / "implementations", created)

        return ModuleGenerationResult(
            module_name=module_name,
            base_path=base_path,
            created_paths=created,
        )

    @staticmethod
    async def _mkdir(path: Path, created: list[Path]) -> None:
        await asyncio.to_thread(ensure_dir, path)
        created.append(path)
