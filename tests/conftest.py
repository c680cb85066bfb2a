"""Shared pytest fixtures for the sboot test suite.

Provides reusable fixtures for:
- A minimal Maven Spring Boot project in a temp directory
- Module and Java source builders
- Scanning a project into a ProjectStructure
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Awaitable, Callable, Iterator

import pytest

from sboot import utils
from sboot.config import Config
from sboot.scanner import PathResolver, ProjectScanner, ProjectStructure


MAIN_CLASS = """\
package com.example.demo;

import org.springframework.boot.SpringApplication;
import org.springframework.boot.autoconfigure.SpringBootApplication;

@SpringBootApplication
public class DemoApplication {
    public static void main(String[] args) {
        SpringApplication.run(DemoApplication.class, args);
    }
}
"""


def write_java(path: Path, content: str) -> Path:
    """Write a Java source file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


async def scan_project(root: Path) -> ProjectStructure:
    return await ProjectScanner(PathResolver(root)).scan()


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep Rich from wrapping long paths in captured output."""
    monkeypatch.setattr(utils.console, "width", 200)


# ---------------------------------------------------------------------------
# Project tree
# ---------------------------------------------------------------------------

@pytest.fixture
def spring_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Maven project with ``com.example.demo.DemoApplication``; cwd is its root."""
    root = tmp_path.resolve() / "demo"
    root.mkdir()
    (root / "pom.xml").write_text("<project/>\n", encoding="utf-8")
    write_java(root / "src/main/java/com/example/demo/DemoApplication.java", MAIN_CLASS)
    monkeypatch.chdir(root)
    monkeypatch.delenv("SBOOT_CONFIG", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)
    yield root


@pytest.fixture
def base_package_dir(spring_project: Path) -> Path:
    """``src/main/java/com/example/demo`` of the sample project."""
    return spring_project / "src/main/java/com/example/demo"


@pytest.fixture
def make_module(base_package_dir: Path) -> Callable[..., Path]:
    """Factory creating a module with the given layer directories."""

    def _make(name: str, layers: tuple[str, ...] = ("application", "domain", "infrastructure")) -> Path:
        module_dir = base_package_dir / name
        for layer in layers:
            (module_dir / layer).mkdir(parents=True, exist_ok=True)
        return module_dir

    return _make


@pytest.fixture
def default_config() -> Config:
    return Config()


@pytest.fixture
def write_source() -> Callable[[Path, str], Path]:
    return write_java


@pytest.fixture
def scan() -> Callable[[Path], Awaitable[ProjectStructure]]:
    """Scanner for a project root, e.g. ``structure = await scan(root)``."""
    return scan_project
