"""Error hierarchy for sboot.

Every failure the tool reports to the user derives from ``SbootError`` so the
CLI can surface the message and exit non-zero without a traceback.
"""

from __future__ import annotations


class SbootError(Exception):
    """Base class for all user-facing sboot errors."""


class ProjectNotFoundError(SbootError):
    """Raised when no Java source tree exists at any candidate path."""


class EntryPointNotFoundError(SbootError):
    """Raised when no ``@SpringBootApplication`` class exists under the source tree."""


class NoModulesFoundError(SbootError):
    """Raised when an operation needs at least one module and none was discovered."""


class UnknownModuleError(SbootError):
    """Raised when a request names a module that the scan did not discover."""

    def __init__(self, module: str) -> None:
        self.module = module
        super().__init__(f"Module '{module}' not found")


class MissingPrerequisiteError(SbootError):
    """Raised when a resource depends on an artifact that does not exist yet."""

    def __init__(self, artifact: str, name: str, module: str) -> None:
        self.artifact = artifact
        self.name = name
        self.module = module
        if artifact == "entity":
            subject = f"Entity {name}"
        else:
            subject = f"{artifact.capitalize()} for {name}"
        super().__init__(
            f"{subject} not found in module {module}. Create the {artifact} first."
        )


class InvalidNameError(SbootError):
    """Raised when a module or resource name does not have the required shape."""


class TemplateMissingError(SbootError):
    """Raised when a bundled template cannot be found (a packaging defect)."""


class ConfigError(SbootError):
    """Raised when the configuration document cannot be read or validated."""
