"""
Core schema representation for code generation.

Converts the VPP ``*.api.json`` document layout into a normalized internal
format that generators can work with consistently.
"""

import json
from dataclasses import dataclass, field
from enum import Enum as PyEnum
from typing import Any, Dict, List, Optional


# Header field every VPP message starts with; the transport writes it.
MESSAGE_ID_FIELD = "_vl_msg_id"

DEFAULT_ENUM_TYPE = "u32"


class SchemaError(Exception):
    """Exception raised when an API definition is structurally invalid."""

    pass


class SizeKind(PyEnum):
    """How the length of an array or string field is determined."""

    FIXED = "fixed"
    VARIABLE = "variable"


@dataclass(frozen=True)
class FieldSize:
    """Size descriptor of a field.

    ``length`` is only meaningful for fixed sizes. ``bound`` names the field
    carrying the element count of a variable size, when the API declares one.
    """

    kind: SizeKind
    length: int = 0
    bound: Optional[str] = None

    @classmethod
    def fixed(cls, length: int) -> "FieldSize":
        return cls(SizeKind.FIXED, length=length)

    @classmethod
    def variable(cls, bound: Optional[str] = None) -> "FieldSize":
        return cls(SizeKind.VARIABLE, bound=bound)

    @property
    def is_fixed(self) -> bool:
        return self.kind == SizeKind.FIXED


@dataclass
class Field:
    """Represents a single field of a type, message or union."""

    name: str
    ctype: str
    size: Optional[FieldSize] = None
    options: Optional[Dict[str, Any]] = None

    @property
    def is_string(self) -> bool:
        return self.ctype == "string"


@dataclass
class ApiType:
    """A plain structure from the ``types`` section."""

    name: str
    fields: List[Field] = field(default_factory=list)

    def get_field(self, name: str) -> Optional[Field]:
        """Get field by name."""
        for fld in self.fields:
            if fld.name == name:
                return fld
        return None


@dataclass
class Message(ApiType):
    """A request, reply or event message."""

    crc: str = ""
    comment: Optional[str] = None

    @property
    def name_and_crc(self) -> str:
        """Stable wire identifier, e.g. ``control_ping_51077d14``."""
        crc = self.crc[2:] if self.crc.startswith("0x") else self.crc
        return f"{self.name}_{crc}"


@dataclass
class EnumMember:
    name: str
    value: int


@dataclass
class Enum:
    """An enumeration with its backing integer width."""

    name: str
    members: List[EnumMember] = field(default_factory=list)
    enumtype: str = DEFAULT_ENUM_TYPE
    is_flags: bool = False


@dataclass
class Union:
    """A tagged union; members share the field descriptor layout."""

    name: str
    members: List[Field] = field(default_factory=list)


@dataclass
class Alias:
    """A type synonym, optionally sized like a field."""

    name: str
    ctype: str
    size: Optional[FieldSize] = None

    def as_field(self) -> Field:
        """View the alias as a field so it maps through the field rules."""
        return Field(name=self.name, ctype=self.ctype, size=self.size)


@dataclass
class Service:
    """Pairing of a request message with its reply."""

    request: str
    reply: str
    stream: bool = False
    stream_msg: Optional[str] = None
    events: List[str] = field(default_factory=list)


@dataclass
class ApiFile:
    """One parsed ``*.api.json`` file."""

    path: str = ""
    vl_api_version: str = ""
    options: Dict[str, Any] = field(default_factory=dict)
    types: List[ApiType] = field(default_factory=list)
    messages: List[Message] = field(default_factory=list)
    unions: List[Union] = field(default_factory=list)
    enums: List[Enum] = field(default_factory=list)
    aliases: List[Alias] = field(default_factory=list)
    services: List[Service] = field(default_factory=list)
    imports: List[str] = field(default_factory=list)

    @property
    def version(self) -> str:
        return str(self.options.get("version", ""))

    def reply_for(self, request: str) -> Optional[str]:
        """Return the reply message name declared for ``request``."""
        for service in self.services:
            if service.request == request:
                return service.reply
        return None

    def summary(self) -> Dict[str, Any]:
        """Counts reported when a single file is loaded."""
        return {
            "version": self.vl_api_version,
            "services": len(self.services),
            "types": len(self.types),
            "messages": len(self.messages),
            "aliases": len(self.aliases),
            "imports": len(self.imports),
            "enums": len(self.enums),
            "unions": len(self.unions),
        }


# Parsing

def parse_field(raw: Any) -> Field:
    """
    Parse a field descriptor.

    Accepted shapes::

        [ctype, name]
        [ctype, name, N]              N > 0 fixed, N == 0 variable
        [ctype, name, 0, "count"]     variable, bounded by field ``count``
        [..., {"default": ...}]       trailing options

    Raises:
        SchemaError: If the descriptor is not a list starting with two strings.
    """
    if not isinstance(raw, list) or len(raw) < 2:
        raise SchemaError(f"Invalid field descriptor: {raw!r}")
    ctype, name = raw[0], raw[1]
    if not isinstance(ctype, str) or not isinstance(name, str):
        raise SchemaError(f"Field type and name must be strings: {raw!r}")

    size = None
    options = None
    rest = raw[2:]
    for index, item in enumerate(rest):
        if isinstance(item, dict):
            options = item
        elif isinstance(item, bool):
            raise SchemaError(f"Invalid size in field {name!r}: {item!r}")
        elif isinstance(item, int):
            if item > 0:
                size = FieldSize.fixed(item)
            else:
                bound = rest[index + 1] if index + 1 < len(rest) else None
                size = FieldSize.variable(bound if isinstance(bound, str) else None)
        elif isinstance(item, str):
            # Length field name, consumed together with the preceding 0.
            if size is None:
                size = FieldSize.variable(item)
        else:
            raise SchemaError(f"Unexpected element in field {name!r}: {item!r}")

    return Field(name=name, ctype=ctype, size=size, options=options)


def _split_definition(raw: Any, section: str) -> tuple[str, list, Dict[str, Any]]:
    """Split ``[name, item..., {info}]`` into its parts."""
    if not isinstance(raw, list) or not raw or not isinstance(raw[0], str):
        raise SchemaError(f"Invalid entry in '{section}': {raw!r}")
    items = list(raw[1:])
    info: Dict[str, Any] = {}
    if items and isinstance(items[-1], dict):
        info = items.pop()
    return raw[0], items, info


def parse_type(raw: Any) -> ApiType:
    """Parse one entry of the ``types`` section."""
    name, items, _info = _split_definition(raw, "types")
    return ApiType(name=name, fields=[parse_field(item) for item in items])


def parse_message(raw: Any) -> Message:
    """Parse one entry of the ``messages`` section."""
    name, items, info = _split_definition(raw, "messages")
    crc = info.get("crc")
    if not isinstance(crc, str):
        raise SchemaError(f"Message {name!r} has no crc")
    fields = [parse_field(item) for item in items]
    fields = [fld for fld in fields if fld.name != MESSAGE_ID_FIELD]
    return Message(name=name, fields=fields, crc=crc, comment=info.get("comment"))


def parse_union(raw: Any) -> Union:
    """Parse one entry of the ``unions`` section."""
    name, items, _info = _split_definition(raw, "unions")
    return Union(name=name, members=[parse_field(item) for item in items])


def parse_enum(raw: Any, is_flags: bool = False) -> Enum:
    """Parse one entry of the ``enums`` or ``enumflags`` section."""
    section = "enumflags" if is_flags else "enums"
    name, items, info = _split_definition(raw, section)
    members = []
    for item in items:
        if (
            not isinstance(item, list)
            or len(item) != 2
            or not isinstance(item[0], str)
            or not isinstance(item[1], int)
        ):
            raise SchemaError(f"Invalid member in enum {name!r}: {item!r}")
        members.append(EnumMember(name=item[0], value=item[1]))
    enumtype = info.get("enumtype", DEFAULT_ENUM_TYPE)
    return Enum(name=name, members=members, enumtype=enumtype, is_flags=is_flags)


def parse_alias(name: str, raw: Any) -> Alias:
    """Parse one entry of the ``aliases`` section."""
    if not isinstance(raw, dict) or not isinstance(raw.get("type"), str):
        raise SchemaError(f"Invalid alias {name!r}: {raw!r}")
    size = None
    if "length" in raw:
        length = raw["length"]
        if isinstance(length, bool) or not isinstance(length, int):
            raise SchemaError(f"Invalid length for alias {name!r}: {length!r}")
        size = FieldSize.fixed(length) if length > 0 else FieldSize.variable()
    return Alias(name=name, ctype=raw["type"], size=size)


def parse_service(request: str, raw: Any) -> Service:
    """Parse one entry of the ``services`` section."""
    if not isinstance(raw, dict) or not isinstance(raw.get("reply"), str):
        raise SchemaError(f"Invalid service {request!r}: {raw!r}")
    return Service(
        request=request,
        reply=raw["reply"],
        stream=bool(raw.get("stream", False)),
        stream_msg=raw.get("stream_msg"),
        events=list(raw.get("events", [])),
    )


def _section(data: Dict[str, Any], key: str, kind: type) -> Any:
    value = data.get(key, kind())
    if not isinstance(value, kind):
        raise SchemaError(f"Section '{key}' must be a {kind.__name__}")
    return value


def api_file_from_dict(data: Any, path: str = "") -> ApiFile:
    """
    Convert a decoded ``*.api.json`` document into an ApiFile.

    Args:
        data: Decoded JSON document
        path: Source path recorded on the result

    Returns:
        ApiFile with every section parsed

    Raises:
        SchemaError: If the document does not have the expected structure
    """
    if not isinstance(data, dict):
        raise SchemaError("API definition must be a JSON object")

    imports = _section(data, "imports", list)
    if not all(isinstance(name, str) for name in imports):
        raise SchemaError("Section 'imports' must contain strings")

    enums = [parse_enum(raw) for raw in _section(data, "enums", list)]
    enums.extend(parse_enum(raw, is_flags=True) for raw in _section(data, "enumflags", list))

    return ApiFile(
        path=path,
        vl_api_version=str(data.get("vl_api_version", "")),
        options=_section(data, "options", dict),
        types=[parse_type(raw) for raw in _section(data, "types", list)],
        messages=[parse_message(raw) for raw in _section(data, "messages", list)],
        unions=[parse_union(raw) for raw in _section(data, "unions", list)],
        enums=enums,
        aliases=[
            parse_alias(name, raw)
            for name, raw in _section(data, "aliases", dict).items()
        ],
        services=[
            parse_service(name, raw)
            for name, raw in _section(data, "services", dict).items()
        ],
        imports=list(imports),
    )


def parse_api_file(text: str, path: str = "") -> ApiFile:
    """Parse the text of an ``*.api.json`` file.

    Raises:
        SchemaError: On invalid JSON or invalid structure.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SchemaError(f"Invalid JSON: {e}") from e
    return api_file_from_dict(data, path)
