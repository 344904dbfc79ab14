"""Reference index generators."""

from pipeline.registry import GeneratorRegistry

from .api import ApiIndexGenerator
from .frontmatter import FrontMatterError, parse_front_matter, scan_front_matter
from .instructions import InstructionGenerator, InstructionSet, Opcode


def register_reference_generators(registry: GeneratorRegistry) -> GeneratorRegistry:
    """Register every reference generator shipped with the tools."""
    InstructionGenerator().register(registry)
    ApiIndexGenerator().register(registry)
    return registry


__all__ = [
    "ApiIndexGenerator",
    "FrontMatterError",
    "InstructionGenerator",
    "InstructionSet",
    "Opcode",
    "parse_front_matter",
    "register_reference_generators",
    "scan_front_matter",
]
