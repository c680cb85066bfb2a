"""Jinja2 template rendering for Java source generation.

Provides the TemplateRenderer class which loads the ``.java.j2`` templates
bundled in ``sboot/generator/templates/`` and renders them with a flat data
record. A template is addressed by its short name (``"entity"``,
``"service-impl"``, ...), never by file path.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from sboot.errors import TemplateMissingError
from sboot.utils import write_text_file


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_SUFFIX = ".java.j2"

TEMPLATE_NAMES: tuple[str, ...] = (
    "entity",
    "repository",
    "service",
    "service-impl",
    "standalone-service",
    "standalone-service-impl",
    "controller",
    "standalone-controller",
    "enum",
    "dto",
    "mapper",
    "mapper-impl",
)


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for Java resources.

    Rendering is a pure function of the template name and the context; the
    only side effect lives in :meth:`render_to_file`.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["snake_case"] = _snake_case_filter
        self.env.filters["lower_first"] = _lower_first_filter
        self.env.filters["kebab_plural"] = _kebab_plural_filter

    # -- Single template rendering -----------------------------------------

    def render(self, template_name: str, context: dict[str, Any]) -> str:
        """Render the template called *template_name* with *context*.

        Raises:
            TemplateMissingError: If no such template is bundled.
        """
        try:
            template = self.env.get_template(f"{template_name}{TEMPLATE_SUFFIX}")
        except TemplateNotFound as exc:
            raise TemplateMissingError(
                f"Template '{template_name}' not found in {self.template_dir}"
            ) from exc
        return template.render(**context)

    # -- File-based rendering (async) --------------------------------------

    async def render_to_file(
        self,
        template_name: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically and an existing file is
        overwritten. Returns the output path.
        """
        content = self.render(template_name, context)
        out = Path(output_path)
        await asyncio.to_thread(write_text_file, out, content)
        return out

    # -- Utility -----------------------------------------------------------

    def list_templates(self) -> list[str]:
        """Return the sorted short names of every bundled template."""
        if not self.template_dir.is_dir():
            return []
        return sorted(
            p.name[: -len(TEMPLATE_SUFFIX)]
            for p in self.template_dir.glob(f"*{TEMPLATE_SUFFIX}")
        )


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _snake_case_filter(value: str) -> str:
    """Convert ``OrderItem`` or ``order item`` to ``order_item``."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", value.strip())
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return re.sub(r"[-\s]+", "_", s2).lower()


def _lower_first_filter(value: str) -> str:
    """``OrderItem`` -> ``orderItem``."""
    return value[:1].lower() + value[1:]


def _kebab_plural_filter(value: str) -> str:
    """Naive REST collection path segment: ``OrderItem`` -> ``order-items``."""
    kebab = _snake_case_filter(value).replace("_", "-")
    if kebab.endswith("y") and not kebab.endswith(("ay", "ey", "oy", "uy")):
        return kebab[:-1] + "ies"
    if kebab.endswith(("s", "sh", "ch", "x", "z")):
        return kebab + "es"
    return kebab + "s"
