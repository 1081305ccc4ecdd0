"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import GeneratorConfig
from .schema import ApiFile
from .templates import TemplateEngine, create_template_engine


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


@dataclass(frozen=True)
class GeneratedUnit:
    """Generated source text and the path it is written to.

    ``path`` is relative to the generated package root.
    """

    path: str
    text: str


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'rust')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.rs')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def emit_file(self, api_file: ApiFile, registry: Any) -> List[GeneratedUnit]:
        """
        Generate the units for one API file.

        Args:
            api_file: Parsed API definition
            registry: Enum width registry covering the whole corpus

        Returns:
            Generated units, in write order
        """
        pass

    def validate_schemas(self, api_files: Dict[str, ApiFile]) -> List[str]:
        """
        Validate API files for structural issues that do not stop generation.

        Args:
            api_files: Loaded files keyed by path

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []
        seen: Dict[str, str] = {}

        for path, api_file in api_files.items():
            for message in api_file.messages:
                identifier = message.name_and_crc
                if identifier in seen and seen[identifier] != path:
                    warnings.append(
                        f"Message {identifier} defined in both {seen[identifier]} and {path}"
                    )
                seen.setdefault(identifier, path)

            for api_type in api_file.types:
                if not api_type.fields:
                    warnings.append(f"Type '{api_type.name}' in {path} has no fields")

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Strips trailing whitespace, collapses runs of blank lines and makes
        sure the text ends with exactly one newline.
        """
        formatted_lines = []
        blank_count = 0

        for line in code.split("\n"):
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)
