"""End-to-end scenarios: scan a project, scaffold modules, generate resources.

These tests drive the real scanner and generators (and the CLI entry point)
against a throwaway Maven project on disk. Nothing outside ``tmp_path`` is
touched.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from sboot.cli import main
from sboot.config import Config
from sboot.errors import MissingPrerequisiteError, NoModulesFoundError
from sboot.generator import GenerationRequest, ModuleGenerator, ResourceGenerator, ResourceKind
from sboot.scanner import LayerName, ResourceType


INVOICE_ENTITY = """\
package com.example.demo.billing.domain.entities;

import jakarta.persistence.Entity;
import jakarta.persistence.Id;

import java.util.UUID;

@Entity
public class Invoice {
    @Id
    private UUID id;
}
"""


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

@pytest.mark.integration
class TestEmptyProject:
    """Only a build file and the entry point: no modules anywhere."""

    async def test_scan_has_no_modules(self, spring_project: Path, scan):
        structure = await scan(spring_project)
        assert structure.modules == ()

    @pytest.mark.parametrize("kind", list(ResourceKind))
    async def test_every_kind_needs_a_module(self, spring_project: Path, scan, kind: ResourceKind):
        generator = ResourceGenerator(await scan(spring_project), Config())
        with pytest.raises(NoModulesFoundError, match="No modules found"):
            await generator.generate(GenerationRequest(name="Order", type=kind, module="sales"))

    def test_cli_reports_no_modules(self, spring_project: Path, capsys):
        assert main(["create", "resource", "entity", "Order", "--module", "sales"]) == 1
        assert "No modules found" in capsys.readouterr().out


@pytest.mark.integration
class TestRepositoryPrerequisite:
    """Module ``billing`` holding only ``domain/entities/Invoice.java``."""

    @pytest.fixture
    def billing_project(self, spring_project: Path, base_package_dir: Path, write_source) -> Path:
        write_source(base_package_dir / "billing/domain/entities/Invoice.java", INVOICE_ENTITY)
        return spring_project

    async def test_scan_sees_the_entity(self, billing_project: Path, scan):
        module = (await scan(billing_project)).get_module("billing")
        assert module is not None
        assert module.layer(LayerName.DOMAIN).find("Invoice").type is ResourceType.ENTITY
        assert module.layer(LayerName.INFRASTRUCTURE) is None

    async def test_repository_for_existing_entity(
        self, billing_project: Path, base_package_dir: Path, scan
    ):
        generator = ResourceGenerator(await scan(billing_project), Config())
        result = await generator.generate(
            GenerationRequest(name="Invoice", type=ResourceKind.REPOSITORY, module="billing")
        )
        repository = base_package_dir / "billing/infrastructure/repositories/InvoiceRepository.java"
        assert result.created_files == [repository]
        assert "JpaRepository<Invoice, UUID>" in repository.read_text(encoding="utf-8")

    async def test_repository_for_missing_entity(
        self, billing_project: Path, base_package_dir: Path, scan
    ):
        generator = ResourceGenerator(await scan(billing_project), Config())
        with pytest.raises(MissingPrerequisiteError, match="Payment") as info:
            await generator.generate(
                GenerationRequest(name="Payment", type=ResourceKind.REPOSITORY, module="billing")
            )
        assert info.value.name == "Payment"
        assert not (base_package_dir / "billing/infrastructure").exists()


@pytest.mark.integration
class TestFullEntityStack:
    """Composite generation of ``Order`` in a freshly scaffolded ``sales`` module."""

    async def test_full_generation_then_rescan(self, spring_project: Path, base_package_dir: Path, scan):
        await ModuleGenerator(await scan(spring_project), Config()).generate("sales")
        generator = ResourceGenerator(await scan(spring_project), Config())
        result = await generator.generate(
            GenerationRequest(name="Order", type=ResourceKind.ENTITY, module="sales", full=True)
        )

        sales = base_package_dir / "sales"
        assert result.created_files == [
            sales / "domain/entities/Order.java",
            sales / "infrastructure/repositories/OrderRepository.java",
            sales / "application/services/OrderService.java",
            sales / "application/services/implementations/OrderServiceImpl.java",
            sales / "infrastructure/controllers/OrderController.java",
        ]

        module = (await scan(spring_project)).get_module("sales")
        records = {r.name: r for r in module.resources()}
        assert records["Order"].type is ResourceType.ENTITY
        assert records["OrderRepository"].type is ResourceType.REPOSITORY
        assert records["OrderController"].type is ResourceType.CONTROLLER
        service = records["OrderService"]
        assert service.type is ResourceType.SERVICE
        assert service.implementation == "OrderServiceImpl"
        assert service.path == sales / "application/services/OrderService.java"

    def test_cli_round_trip(self, spring_project: Path, base_package_dir: Path, capsys):
        assert main(["create", "module", "sales"]) == 0
        assert main(["create", "resource", "entity", "Order", "--module", "sales", "--full"]) == 0
        assert main(["scan", "-v"]) == 0
        out = capsys.readouterr().out
        assert "OrderService (service)" in out
        assert "implemented by OrderServiceImpl" in out
