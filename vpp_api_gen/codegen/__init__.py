"""
VPP API Code Generation Module

Generates Rust client bindings from VPP ``*.api.json`` definitions.
"""

from .core.generator import CodeGenerator, GeneratedUnit, GeneratorError
from .core.schema import ApiFile, Field, Message, SchemaError, parse_api_file
from .core.config import GeneratorConfig, ConfigManager, ParseType, load_config
from .languages.rust import EnumWidthRegistry, RustGenerator, create_rust_generator
from .resolver import ImportsFile, order_type_files, select_type_files
from .assembler import AssemblyError, AssemblyResult, PackageAssembler, assemble


def generate_module(api_file, config=None, registry=None):
    """
    Generate the Rust module for a single API file.

    Args:
        api_file: Parsed API file
        config: Generator configuration, defaults when omitted
        registry: Enum width registry, built from ``api_file`` alone when omitted

    Returns:
        Generated Rust source text
    """
    if registry is None:
        registry = EnumWidthRegistry.from_files([api_file])
    generator = create_rust_generator(config)
    units = generator.emit_file(api_file, registry)
    return units[0].text


__all__ = [
    "CodeGenerator",
    "GeneratedUnit",
    "GeneratorError",
    "ApiFile",
    "Field",
    "Message",
    "SchemaError",
    "parse_api_file",
    "GeneratorConfig",
    "ConfigManager",
    "ParseType",
    "load_config",
    "EnumWidthRegistry",
    "RustGenerator",
    "create_rust_generator",
    "ImportsFile",
    "order_type_files",
    "select_type_files",
    "AssemblyError",
    "AssemblyResult",
    "PackageAssembler",
    "assemble",
    "generate_module",
]
