"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .generator import CodeGenerator, GeneratedUnit, GeneratorError
from .schema import (
    Alias,
    ApiFile,
    ApiType,
    Enum,
    EnumMember,
    Field,
    FieldSize,
    Message,
    SchemaError,
    Service,
    SizeKind,
    Union,
    api_file_from_dict,
    parse_api_file,
    parse_message,
    parse_type,
)
from .naming import NamingCase, camelize, camelize_ident, convert_case, module_name_for
from .config import ConfigError, ConfigManager, GeneratorConfig, ParseType, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratedUnit",
    "GeneratorError",
    # Schema system - core data structures
    "Alias",
    "ApiFile",
    "ApiType",
    "Enum",
    "EnumMember",
    "Field",
    "FieldSize",
    "Message",
    "SchemaError",
    "Service",
    "SizeKind",
    "Union",
    "api_file_from_dict",
    "parse_api_file",
    "parse_message",
    "parse_type",
    # Naming utilities - language-agnostic
    "NamingCase",
    "camelize",
    "camelize_ident",
    "convert_case",
    "module_name_for",
    # Configuration system
    "ConfigError",
    "ConfigManager",
    "GeneratorConfig",
    "ParseType",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
