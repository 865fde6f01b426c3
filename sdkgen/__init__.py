"""
sdkgen - client library generator.

Turns an API intermediate representation into a Python client package.
"""

from .core.config import GeneratorConfig, ConfigManager, load_config
from .core.errors import GeneratorError
from .ir import IntermediateRepresentation, load_ir, load_ir_from_url, parse_ir
from .orchestrator import GeneratedPackage, GenerationState, SdkGenerator, generate_sdk
from .packaging import PackageWriter

# Version info
__version__ = "0.1.0"

__all__ = [
    "ConfigManager",
    "GeneratedPackage",
    "GenerationState",
    "GeneratorConfig",
    "GeneratorError",
    "IntermediateRepresentation",
    "PackageWriter",
    "SdkGenerator",
    "generate_sdk",
    "load_config",
    "load_ir",
    "load_ir_from_url",
    "parse_ir",
]
