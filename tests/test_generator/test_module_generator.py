"""Tests for module scaffolding (sboot.generator.module)."""

from __future__ import annotations

from pathlib import Path

import pytest

from sboot.config import Config
from sboot.errors import InvalidNameError
from sboot.generator import ModuleGenerator
from sboot.generator.module import validate_module_name


class TestValidateModuleName:
    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["billing", "sales2", " orders "])
    def test_valid(self, name: str):
        assert validate_module_name(name) == name.strip()

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["Billing", "2sales", "order-items", "order_items", "order items", ""])
    def test_invalid(self, name: str):
        with pytest.raises(InvalidNameError, match="must start with lowercase letter"):
            validate_module_name(name)


class TestModuleGenerator:
    @pytest.mark.asyncio
    async def test_default_layout(self, spring_project: Path, base_package_dir: Path, scan):
        result = await ModuleGenerator(await scan(spring_project), Config()).generate("billing")
        module = base_package_dir / "billing"
        assert result.module_name == "billing"
        assert result.base_path == module
        assert result.created_paths == [
            module,
            module / "application",
            module / "application/mappers",
            module / "application/mappers/implementations",
            module / "application/services",
            module / "application/services/implementations",
            module / "domain",
            module / "domain/entities",
            module / "domain/enums",
            module / "infrastructure",
            module / "infrastructure/controllers",
            module / "infrastructure/repositories",
            module / "infrastructure/dtos",
        ]
        assert all(path.is_dir() for path in result.created_paths)

    @pytest.mark.asyncio
    async def test_disabled_layer_skipped(self, spring_project: Path, base_package_dir: Path, scan):
        config = Config.model_validate(
            {"moduleStructure": {"layers": {"domain": {"enabled": False}, "application": {"folders": []}}}}
        )
        result = await ModuleGenerator(await scan(spring_project), config).generate("billing")
        module = base_package_dir / "billing"
        assert result.created_paths == [module, module / "application"]
        assert not (module / "domain").exists()

    @pytest.mark.asyncio
    async def test_idempotent(self, spring_project: Path, scan):
        structure = await scan(spring_project)
        first = await ModuleGenerator(structure, Config()).generate("billing")
        marker = first.base_path / "domain" / "entities" / "Invoice.java"
        marker.write_text("@Entity class Invoice {}", encoding="utf-8")
        second = await ModuleGenerator(structure, Config()).generate("billing")
        assert second.created_paths == first.created_paths
        assert marker.read_text(encoding="utf-8") == "@Entity class Invoice {}"

    @pytest.mark.asyncio
    async def test_new_module_is_discovered(self, spring_project: Path, scan):
        await ModuleGenerator(await scan(spring_project), Config()).generate("billing")
        assert (await scan(spring_project)).module_names() == ["billing"]

    @pytest.mark.asyncio
    async def test_invalid_name_creates_nothing(self, spring_project: Path, base_package_dir: Path, scan):
        with pytest.raises(InvalidNameError):
            await ModuleGenerator(await scan(spring_project), Config()).generate("Billing")
        assert not (base_package_dir / "Billing").exists()
