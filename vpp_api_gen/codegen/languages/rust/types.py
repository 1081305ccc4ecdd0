"""
Rust type system for code generation.

Maps VPP field descriptors onto the container types of the
``vpp-api-encoding`` crate, and keeps the enum width registry those
mappings depend on.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from ...core.schema import ApiFile, Field
from .naming import map_type_identifier, type_name_for


class EnumWidthRegistry:
    """
    Backing integer width of every enum in the corpus.

    Keyed by the generated Rust enum name (``AddressFamily``), valued by the
    wire container type (``u8``). Build it with :meth:`from_files` over the
    whole corpus before mapping any field.
    """

    def __init__(self, widths: Optional[Dict[str, str]] = None):
        self._widths: Dict[str, str] = dict(widths or {})

    @classmethod
    def from_files(cls, api_files: Iterable[ApiFile]) -> "EnumWidthRegistry":
        """Scan every enum of every file."""
        registry = cls()
        for api_file in api_files:
            registry.register_file(api_file)
        return registry

    def register_file(self, api_file: ApiFile):
        for enum in api_file.enums:
            self.register(type_name_for(enum.name), enum.enumtype)

    def register(self, type_name: str, container: str):
        self._widths[type_name] = container

    def width_of(self, type_name: str) -> Optional[str]:
        return self._widths.get(type_name)

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._widths

    def __iter__(self) -> Iterator[str]:
        return iter(self._widths)

    def __len__(self) -> int:
        return len(self._widths)


@dataclass(frozen=True)
class RustType:
    """A mapped Rust type plus the documentation it carries."""

    name: str
    base_name: str = ""
    doc: Optional[str] = None
    is_sized_enum: bool = False

    def __post_init__(self):
        if not self.base_name:
            object.__setattr__(self, "base_name", self.name)


class RustTypeMapper:
    """Maps schema fields to Rust types using an enum width registry."""

    def __init__(self, registry: Optional[EnumWidthRegistry] = None):
        self.registry = registry if registry is not None else EnumWidthRegistry()

    def map_field(self, fld: Field) -> RustType:
        """
        Map a field to its Rust type.

        Sized fields become one of the four array/string containers. Unsized
        fields whose type is a registered enum become ``SizedEnum``. Field
        options are carried as documentation and never alter the type.
        """
        base = map_type_identifier(fld.ctype)
        doc = format_options(fld.options)

        if fld.size is not None:
            return RustType(
                name=_sized_container(base, fld),
                base_name=base,
                doc=doc,
            )

        width = self.registry.width_of(base)
        if width is not None:
            return RustType(
                name=f"SizedEnum<{base}, {width}>",
                base_name=base,
                doc=doc,
                is_sized_enum=True,
            )

        return RustType(name=base, doc=doc)


def _sized_container(base: str, fld: Field) -> str:
    if fld.size.is_fixed:
        if fld.is_string:
            return f"FixedSizeString<typenum::U{fld.size.length}>"
        return f"FixedSizeArray<{base}, typenum::U{fld.size.length}>"
    if fld.is_string:
        return "VariableSizeString"
    return f"VariableSizeArray<{base}>"


def format_options(options: Optional[dict]) -> Optional[str]:
    """Render field options as a stable one-line annotation."""
    if not options:
        return None
    parts = [f"{key}: {_format_option_value(options[key])}" for key in sorted(options)]
    return ", ".join(parts)


def _format_option_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)


def map_field_type(fld: Field, registry: EnumWidthRegistry) -> str:
    """Map a field to the name of its Rust type."""
    return RustTypeMapper(registry).map_field(fld).name
