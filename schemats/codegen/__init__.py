"""
schemats code generation.

Turns catalog facts into TypeScript interface modules.
"""

from .core.config import Options, load_options
from .core.generator import CodeGenerator, GeneratorError
from .languages.typescript import TypeScriptGenerator, normalize_name

__all__ = [
    "CodeGenerator",
    "GeneratorError",
    "Options",
    "TypeScriptGenerator",
    "load_options",
    "normalize_name",
]
