"""
Naming utilities for safe code generation.

Case conversions shared by every generator, plus the derivation of module
names from API file paths.
"""

import re
from enum import Enum
from pathlib import PurePath


class NamingCase(Enum):
    """Different naming case styles."""
    SNAKE_CASE = "snake"      # sw_interface
    CAMEL_CASE = "camel"      # swInterface
    PASCAL_CASE = "pascal"    # SwInterface
    SCREAMING_SNAKE = "screaming_snake"  # SW_INTERFACE


# Suffixes stripped from file and import names, longest first.
API_FILE_SUFFIXES = (".api.json", ".api", ".json")


def to_snake_case(name: str) -> str:
    """Convert to snake_case."""
    name = re.sub(r"[-.\s]+", "_", name)
    name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
    name = name.lower()
    name = re.sub(r"_+", "_", name)
    return name.strip("_")


def to_pascal_case(name: str) -> str:
    """Convert to PascalCase."""
    parts = to_snake_case(name).split("_")
    return "".join(part.capitalize() for part in parts if part)


def to_camel_case(name: str) -> str:
    """Convert to camelCase."""
    pascal = to_pascal_case(name)
    return pascal[:1].lower() + pascal[1:]


def convert_case(name: str, target_case: NamingCase) -> str:
    """Convert name to target case style."""
    if target_case == NamingCase.SNAKE_CASE:
        return to_snake_case(name)
    elif target_case == NamingCase.CAMEL_CASE:
        return to_camel_case(name)
    elif target_case == NamingCase.PASCAL_CASE:
        return to_pascal_case(name)
    elif target_case == NamingCase.SCREAMING_SNAKE:
        return to_snake_case(name).upper()
    return name


def camelize_ident(ident: str) -> str:
    """
    Upper-camel-case an identifier by splitting on underscores.

    Only the first character of each segment is touched, the rest of the
    segment is kept as is: ``sw_interface`` -> ``SwInterface``.
    """
    return "".join(segment[:1].upper() + segment[1:] for segment in ident.split("_"))


def camelize(ident: str) -> str:
    """Upper-camel-case an identifier with the general case converter.

    Gives the same result as :func:`camelize_ident` for lower-case
    underscore-delimited ASCII names.
    """
    return convert_case(ident, NamingCase.PASCAL_CASE)


def module_name_for(path: str) -> str:
    """
    Derive the generated module name of an API file or import reference.

    ``/usr/share/vpp/api/core/interface_types.api.json`` and
    ``vnet/interface_types.api`` both give ``interface_types``.
    """
    name = PurePath(path).name
    for suffix in API_FILE_SUFFIXES:
        if name.endswith(suffix):
            name = name[: -len(suffix)]
            break
    return to_snake_case(name)
