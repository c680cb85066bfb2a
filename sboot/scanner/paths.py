"""Project root and Java source directory resolution."""

from __future__ import annotations

from pathlib import Path

from sboot.errors import ProjectNotFoundError

MAVEN_MARKERS: tuple[str, ...] = ("pom.xml",)
GRADLE_MARKERS: tuple[str, ...] = ("build.gradle", "build.gradle.kts")
PROJECT_MARKERS: tuple[str, ...] = MAVEN_MARKERS + GRADLE_MARKERS

# Checked in order; the first one that exists wins.
SOURCE_CANDIDATES: tuple[str, ...] = (
    "src/main/java",
    "app/src/main/java",
)


class PathResolver:
    """Locates the project root and Java source tree from a working directory.

    Args:
        cwd: Starting directory. Defaults to the process working directory.
    """

    def __init__(self, cwd: str | Path | None = None) -> None:
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()

    def find_project_root(self) -> Path:
        """Walk upwards to the nearest directory holding a build descriptor.

        Falls back to the starting directory when no marker exists anywhere
        up to the filesystem root.
        """
        current = self.cwd.resolve()
        while True:
            if _has_any(current, PROJECT_MARKERS):
                return current
            if current.parent == current:
                return self.cwd.resolve()
            current = current.parent

    def find_source_path(self) -> Path:
        """Return the first existing Java source directory under the project root.

        Raises:
            ProjectNotFoundError: If none of the candidate paths exist.
        """
        root = self.find_project_root()
        for candidate in SOURCE_CANDIDATES:
            full_path = root / candidate
            if full_path.is_dir():
                return full_path
        raise ProjectNotFoundError(
            "Could not find Java source directory. "
            "Make sure you are in a Spring Boot project root directory."
        )

    def is_maven_project(self) -> bool:
        return _has_any(self.find_project_root(), MAVEN_MARKERS)

    def is_gradle_project(self) -> bool:
        return _has_any(self.find_project_root(), GRADLE_MARKERS)

    def build_tool(self) -> str:
        """Name the build tool of the project, or ``"unknown"``."""
        if self.is_maven_project():
            return "maven"
        if self.is_gradle_project():
            return "gradle"
        return "unknown"


def _has_any(directory: Path, names: tuple[str, ...]) -> bool:
    return any((directory / name).exists() for name in names)
