"""
Rust code generator module.

Generates Rust bindings for the vpp-api transport crates from VPP API
definitions.
"""

from .generator import RustGenerator, create_rust_generator
from .naming import (
    RUST_RESERVED_WORDS,
    map_field_identifier,
    map_type_identifier,
    type_name_for,
)
from .types import EnumWidthRegistry, RustType, RustTypeMapper, map_field_type

__all__ = [
    "RustGenerator",
    "create_rust_generator",
    # Naming
    "RUST_RESERVED_WORDS",
    "map_field_identifier",
    "map_type_identifier",
    "type_name_for",
    # Type system
    "EnumWidthRegistry",
    "RustType",
    "RustTypeMapper",
    "map_field_type",
]
