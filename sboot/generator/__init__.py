"""sboot generators -- module skeletons and Jinja2-rendered Java resources.

Quick usage::

    from sboot.config import Config
    from sboot.generator import GenerationRequest, ResourceGenerator, ResourceKind

    generator = ResourceGenerator(structure, Config.load())
    result = await generator.generate(
        GenerationRequest(name="Order", type=ResourceKind.ENTITY, module="sales", full=True)
    )
"""

from sboot.generator.models import (
    GenerationOptions,
    GenerationRequest,
    GenerationResult,
    ModuleGenerationResult,
    ResourceKind,
)
from sboot.generator.module import ModuleGenerator
from sboot.generator.resource import ResourceGenerator
from sboot.generator.templates import TemplateRenderer

__all__ = [
    "GenerationOptions",
    "GenerationRequest",
    "GenerationResult",
    "ModuleGenerationResult",
    "ModuleGenerator",
    "ResourceGenerator",
    "ResourceKind",
    "TemplateRenderer",
]
