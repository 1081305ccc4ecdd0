"""vpp-api-gen: Rust client bindings from VPP API definitions."""

__version__ = "0.1.0"

# codegen first: the assembler pulls in the loader
from .codegen import GeneratorConfig, ParseType, assemble, generate_module
from .loader import ApiLoaderError, load_api_file, load_tree

__all__ = [
    "ApiLoaderError",
    "GeneratorConfig",
    "ParseType",
    "assemble",
    "generate_module",
    "load_api_file",
    "load_tree",
]
