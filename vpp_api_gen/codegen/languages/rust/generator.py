"""
Rust code generator implementation.

Generates one Rust module per VPP API file: type aliases, enums, unions,
structs and messages implementing the ``VppApiMessage`` trait.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator, GeneratedUnit, GeneratorError
from ...core.naming import camelize, module_name_for
from ...core.schema import Alias, ApiFile, ApiType, Enum, Field, Message, Union
from ...core.templates import TemplateError
from ....logging_config import get_logger
from .naming import is_reserved, map_field_identifier, type_name_for
from .types import EnumWidthRegistry, RustTypeMapper

logger = get_logger(__name__)

CONTEXT_FIELD = "context"
CLIENT_INDEX_FIELD = "client_index"


class RustGenerator(CodeGenerator):
    """Code generator for Rust bindings on top of vpp-api-encoding."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Rust generator with configuration."""
        super().__init__(config)
        self.add_comments = self.config.add_comments

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "rust"

    @property
    def file_extension(self) -> str:
        """Return Rust file extension."""
        return ".rs"

    def get_template_directory(self) -> Optional[Path]:
        """Return the Rust templates directory."""
        return Path(__file__).parent / "templates"

    def module_path(self, api_file: ApiFile) -> str:
        """Path of the generated module, relative to the package root."""
        return f"src/{module_name_for(api_file.path)}{self.file_extension}"

    def emit_file(self, api_file: ApiFile, registry: EnumWidthRegistry) -> List[GeneratedUnit]:
        """
        Generate the Rust module for one API file.

        Raises:
            GeneratorError: If a template fails to render
        """
        mapper = RustTypeMapper(registry)
        path = self.module_path(api_file)
        logger.debug("Emitting %s from %s", path, api_file.path)

        try:
            blocks = []
            blocks.extend(self._render_alias(alias, mapper) for alias in api_file.aliases)
            blocks.extend(self._render_enum(enum) for enum in api_file.enums)
            blocks.extend(self._render_union(union, mapper) for union in api_file.unions)
            blocks.extend(self._render_struct(api_type, mapper) for api_type in api_file.types)
            blocks.extend(
                self._render_message(message, mapper, api_file.reply_for(message.name))
                for message in api_file.messages
            )

            context = {
                "source": Path(api_file.path).name if api_file.path else "<memory>",
                "version": api_file.version if self.add_comments else "",
                "vl_api_version": api_file.vl_api_version if self.add_comments else "",
                "imports": self._import_modules(api_file),
                "blocks": blocks,
            }
            text = self.format_code(self.render_template("module.rs.j2", context))
        except TemplateError as e:
            raise GeneratorError(f"Error generating {path}: {e}") from e
        return [GeneratedUnit(path=path, text=text)]

    def emit_type(self, api_type: ApiType, registry: EnumWidthRegistry) -> str:
        """Generate a single struct definition."""
        try:
            return self.format_code(self._render_struct(api_type, RustTypeMapper(registry)))
        except TemplateError as e:
            raise GeneratorError(f"Error generating type {api_type.name}: {e}") from e

    def emit_message(self, message: Message, registry: EnumWidthRegistry,
                     reply: Optional[str] = None) -> str:
        """Generate a single message with its VppApiMessage implementation."""
        try:
            return self.format_code(
                self._render_message(message, RustTypeMapper(registry), reply)
            )
        except TemplateError as e:
            raise GeneratorError(f"Error generating message {message.name}: {e}") from e

    def _import_modules(self, api_file: ApiFile) -> List[str]:
        own = module_name_for(api_file.path) if api_file.path else None
        modules = []
        for name in api_file.imports:
            module = module_name_for(name)
            if module != own and module not in modules:
                modules.append(module)
        return modules

    # Blocks

    def _render_alias(self, alias: Alias, mapper: RustTypeMapper) -> str:
        rust_type = mapper.map_field(alias.as_field())
        return self.render_template(
            "alias.rs.j2", {"name": type_name_for(alias.name), "type": rust_type.name}
        )

    def _render_enum(self, enum: Enum) -> str:
        return self.render_template(
            "enum.rs.j2",
            {
                "name": type_name_for(enum.name),
                "container": enum.enumtype,
                "members": enum.members,
                "is_flags": enum.is_flags and self.add_comments,
            },
        )

    def _render_union(self, union: Union, mapper: RustTypeMapper) -> str:
        variants = []
        for member in union.members:
            rust_type = mapper.map_field(member)
            variants.append(
                {
                    "name": camelize(member.name),
                    "type": rust_type.name,
                    "doc": rust_type.doc if self.add_comments else None,
                }
            )
        return self.render_template(
            "union.rs.j2", {"name": type_name_for(union.name), "variants": variants}
        )

    def _render_struct(self, api_type: ApiType, mapper: RustTypeMapper,
                       doc_lines: Optional[List[str]] = None) -> str:
        return self.render_template(
            "struct.rs.j2", self._struct_context(api_type, mapper, doc_lines)
        )

    def _render_message(self, message: Message, mapper: RustTypeMapper,
                        reply: Optional[str]) -> str:
        doc_lines = []
        if self.add_comments:
            if message.comment:
                doc_lines.extend(message.comment.strip().splitlines())
            if reply and reply != "null":
                doc_lines.append(f"Reply: `{type_name_for(reply)}`")

        context = self._struct_context(message, mapper, doc_lines)
        field_names = [fld["name"] for fld in context["fields"]]
        has_context = CONTEXT_FIELD in field_names
        has_client_index = CLIENT_INDEX_FIELD in field_names
        context.update(
            {
                "name_and_crc": message.name_and_crc,
                "context_field": CONTEXT_FIELD if has_context else None,
                "context_arg": "context" if has_context else "_context",
                "client_index_field": CLIENT_INDEX_FIELD if has_client_index else None,
                "client_index_arg": "client_index" if has_client_index else "_client_index",
            }
        )
        return self.render_template("message.rs.j2", context)

    def _struct_context(self, api_type: ApiType, mapper: RustTypeMapper,
                        doc_lines: Optional[List[str]]) -> Dict[str, Any]:
        fields = []
        for fld in api_type.fields:
            rust_type = mapper.map_field(fld)
            fields.append(
                {
                    "name": map_field_identifier(fld.name),
                    "type": rust_type.name,
                    "doc": rust_type.doc if self.add_comments else None,
                }
            )
        return {
            "name": type_name_for(api_type.name),
            "fields": fields,
            "doc_lines": doc_lines or [],
        }

    def validate_schemas(self, api_files: Dict[str, ApiFile]) -> List[str]:
        """Validate API files for Rust generation."""
        warnings = super().validate_schemas(api_files)

        for path, api_file in api_files.items():
            for api_type in [*api_file.types, *api_file.messages]:
                for fld in api_type.fields:
                    warnings.extend(self._field_name_warnings(path, api_type.name, fld))
            for enum in api_file.enums:
                if not enum.members:
                    warnings.append(
                        f"Enum {enum.name} in {path} has no members and is emitted without #[repr]"
                    )
            for union in api_file.unions:
                for member in union.members:
                    if is_reserved(camelize(member.name)):
                        warnings.append(
                            f"Union member {union.name}.{member.name} in {path} "
                            f"is a Rust keyword"
                        )

        return warnings

    def _field_name_warnings(self, path: str, owner: str, fld: Field) -> List[str]:
        rust_name = map_field_identifier(fld.name)
        if is_reserved(rust_name):
            return [f"Field {owner}.{fld.name} in {path} is a Rust keyword"]
        return []


def create_rust_generator(config: Optional[GeneratorConfig] = None) -> RustGenerator:
    """Create a Rust generator with default configuration."""
    return RustGenerator(config)
