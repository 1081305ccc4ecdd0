"""
Rust-specific naming utilities.

Maps VPP wire-level type and field names to Rust identifiers.
"""

from ...core.naming import camelize_ident

# Custom types are spelled vl_api_<name>_t on the wire.
TYPE_PREFIX = "vl_api_"
TYPE_SUFFIX = "_t"

STRING_CTYPE = "string"
STRING_TYPE = "String"

# Field names that collide with Rust keywords used by the wire format.
FIELD_RENAMES = {
    "type": "typ",
    "match": "mach",
}

# Rust keywords (strict and reserved)
RUST_RESERVED_WORDS = {
    "abstract", "as", "async", "await", "become", "box", "break", "const",
    "continue", "crate", "do", "dyn", "else", "enum", "extern", "false",
    "final", "fn", "for", "gen", "if", "impl", "in", "let", "loop", "macro",
    "match", "mod", "move", "mut", "override", "priv", "pub", "ref",
    "return", "self", "Self", "static", "struct", "super", "trait", "true",
    "try", "type", "typeof", "unsafe", "unsized", "use", "virtual", "where",
    "while", "yield",
}


def map_type_identifier(wire_type: str) -> str:
    """
    Map a wire type name to a Rust type name.

    ``vl_api_sw_interface_t`` -> ``SwInterface``, ``string`` -> ``String``,
    primitives such as ``u32`` pass through.
    """
    if wire_type.startswith(TYPE_PREFIX):
        name = wire_type[len(TYPE_PREFIX):]
        if name.endswith(TYPE_SUFFIX):
            name = name[: -len(TYPE_SUFFIX)]
        return camelize_ident(name)
    if wire_type == STRING_CTYPE:
        return STRING_TYPE
    return wire_type


def map_field_identifier(wire_field_name: str) -> str:
    """Map a wire field name to a Rust field name."""
    if wire_field_name in FIELD_RENAMES:
        return FIELD_RENAMES[wire_field_name]
    if wire_field_name.startswith("_"):
        return wire_field_name[1:]
    return wire_field_name


def type_name_for(definition_name: str) -> str:
    """Rust name of a type, enum, union, alias or message definition."""
    return map_type_identifier(f"{TYPE_PREFIX}{definition_name}{TYPE_SUFFIX}")


def is_reserved(identifier: str) -> bool:
    """Check whether an identifier is a Rust keyword."""
    return identifier in RUST_RESERVED_WORDS
