"""
Package assembly.

Drives one generator run: loads the input, builds the enum width registry,
orders the corpus, emits the Rust modules and optionally lays out a complete
Cargo package around them.
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from rich.console import Console

from ..loader import load_api_file, load_single_message, load_single_type, load_tree
from ..logging_config import get_logger
from .core.config import GeneratorConfig, ParseType
from .core.generator import GeneratedUnit
from .core.naming import module_name_for
from .core.schema import ApiFile
from .core.templates import TemplateEngine, TemplateError
from .languages.rust.generator import RustGenerator
from .languages.rust.types import EnumWidthRegistry
from .resolver import order_type_files, select_type_files

logger = get_logger(__name__)

PACKAGE_DIRS = ("src", "tests", "examples")

# Template name -> path inside the package
PACKAGE_TEMPLATES = {
    "lib.rs.j2": "src/lib.rs",
    "Cargo.toml.j2": "Cargo.toml",
    "interface_test.rs.j2": "tests/interface_test.rs",
    "progressive_vpp.rs.j2": "examples/progressive_vpp.rs",
}


class AssemblyError(Exception):
    """Exception raised when the package cannot be written to disk."""

    pass


@dataclass
class AssemblyResult:
    """Outcome of one generator run."""

    api_files: Dict[str, ApiFile] = field(default_factory=dict)
    units: List[GeneratedUnit] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    message_names: List[str] = field(default_factory=list)

    @property
    def loaded(self) -> int:
        return len(self.api_files)


class PackageAssembler:
    """Runs the generator according to a :class:`GeneratorConfig`."""

    def __init__(self, config: GeneratorConfig, console: Optional[Console] = None,
                 generator: Optional[RustGenerator] = None):
        self.config = config
        self.console = console or Console(stderr=True)
        self.generator = generator or RustGenerator(config)
        self._package_templates: Optional[TemplateEngine] = None

    @property
    def package_templates(self) -> TemplateEngine:
        if self._package_templates is None:
            template_dir = self.generator.get_template_directory() / "package"
            self._package_templates = TemplateEngine(template_dir)
        return self._package_templates

    def assemble(self) -> AssemblyResult:
        """
        Run the configured parse mode.

        Returns:
            AssemblyResult describing what was loaded and written

        Raises:
            ApiLoaderError: Input of a single-file mode could not be loaded
            AssemblyError: A directory or file could not be written
        """
        result = AssemblyResult()
        parse_type = self.config.parse_type
        logger.info("Parse mode %s on %s", parse_type.value, self.config.in_file)

        if parse_type == ParseType.FILE:
            self._assemble_file(result)
        elif parse_type == ParseType.TREE:
            self._assemble_tree(result)
        elif parse_type == ParseType.API_TYPE:
            api_type = load_single_type(self.config.in_file)
            self._write_single(result, self.generator.emit_type(api_type, EnumWidthRegistry()))
        elif parse_type == ParseType.API_MESSAGE:
            message = load_single_message(self.config.in_file)
            self._write_single(
                result, self.generator.emit_message(message, EnumWidthRegistry())
            )

        return result

    # Parse modes

    def _assemble_file(self, result: AssemblyResult):
        api_file = load_api_file(self.config.in_file)
        result.api_files[api_file.path] = api_file

        summary = api_file.summary()
        counts = " ".join(f"{key}: {value}" for key, value in summary.items())
        self.console.print(
            f"File: {api_file.path} {counts}", markup=False, highlight=False, soft_wrap=True
        )
        if self.config.verbose > 1:
            self.console.print(api_file)

        registry = EnumWidthRegistry.from_files([api_file])
        result.warnings.extend(self.generator.validate_schemas(result.api_files))

        if self.config.generate_code:
            result.units.extend(self.generator.emit_file(api_file, registry))
            dest = Path(self.config.package_path)
            for unit in result.units:
                # Single files are written flat into the package path
                result.written.append(self._write(dest / Path(unit.path).name, unit.text))

    def _assemble_tree(self, result: AssemblyResult):
        config = self.config
        result.api_files.update(load_tree(config.in_file))
        self.console.print(f"// Loaded {result.loaded} API definition files", soft_wrap=True)

        if config.print_message_names:
            for name, api_file in result.api_files.items():
                result.message_names.append(name)
                result.message_names.extend(m.name_and_crc for m in api_file.messages)
            for line in result.message_names:
                self.console.print(line, markup=False, highlight=False, soft_wrap=True)

        registry = EnumWidthRegistry.from_files(result.api_files.values())
        logger.debug("Enum width registry holds %d enums", len(registry))

        result.warnings.extend(self.unmatched_imports(result.api_files))
        result.warnings.extend(self.generator.validate_schemas(result.api_files))

        if config.create_package:
            result.written.extend(self.create_package(result.api_files))

        # A binding, and the package around it, always carries its modules
        if config.create_binding or config.create_package:
            ordered = self.binding_order(result.api_files)
        elif config.generate_code:
            ordered = list(result.api_files.values())
        else:
            return

        for api_file in ordered:
            result.units.extend(self.generator.emit_file(api_file, registry))
        result.written.extend(self.write_units(result.units))

    def _write_single(self, result: AssemblyResult, text: str):
        result.units.append(GeneratedUnit(path=self.config.out_file, text=text))
        if self.config.out_file == "-":
            sys.stdout.write(text)
        else:
            result.written.append(self._write(Path(self.config.out_file), text))

    # Ordering and diagnostics

    def binding_order(self, api_files: Dict[str, ApiFile]) -> List[ApiFile]:
        """Types files by ascending import count, then the rest in load order."""
        suffix = self.config.types_suffix
        type_files = order_type_files(select_type_files(api_files, suffix))
        for entry in type_files:
            logger.info("%s-%d", entry.name, entry.import_count)

        ordered = [entry.file for entry in type_files]
        ordered.extend(f for name, f in api_files.items() if not name.endswith(suffix))
        return ordered

    def unmatched_imports(self, api_files: Dict[str, ApiFile]) -> List[str]:
        """Report imports that name no loaded file."""
        known = {module_name_for(name) for name in api_files}
        warnings = []
        for name, api_file in api_files.items():
            for imported in api_file.imports:
                if module_name_for(imported) not in known:
                    message = f"{name}: import {imported} does not match any loaded file"
                    logger.warning("%s", message)
                    warnings.append(message)
        return warnings

    # Filesystem

    def create_package(self, api_files: Dict[str, ApiFile]) -> List[Path]:
        """
        Lay out the Cargo package skeleton.

        Args:
            api_files: Loaded corpus, in load order

        Returns:
            Paths of the files written

        Raises:
            AssemblyError: If a directory or file cannot be created
        """
        root = self.config.package_root
        logger.info("Creating package %s in %s", self.config.package_name, root)
        self._mkdir(root)
        for name in PACKAGE_DIRS:
            self._mkdir(root / name)

        modules = []
        for name in api_files:
            module = module_name_for(name)
            if module not in modules:
                modules.append(module)

        context = {
            "package_name": self.config.package_name,
            "crate_name": self.config.package_name.replace("-", "_"),
            "vppapi_opts": self.config.vppapi_opts,
            "modules": modules,
        }
        written = []
        for template_name, target in PACKAGE_TEMPLATES.items():
            try:
                text = self.package_templates.render_template(template_name, context)
            except TemplateError as e:
                raise AssemblyError(f"Error rendering {target}: {e}") from e
            written.append(self._write(root / target, text))
        return written

    def write_units(self, units: List[GeneratedUnit]) -> List[Path]:
        """Write generated modules under the package root."""
        root = self.config.package_root
        return [self._write(root / unit.path, unit.text) for unit in units]

    def _mkdir(self, path: Path):
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise AssemblyError(f"Error creating directory {path}: {e}") from e

    def _write(self, path: Path, text: str) -> Path:
        self._mkdir(path.parent)
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise AssemblyError(f"Error writing {path}: {e}") from e
        logger.debug("Wrote %s", path)
        return path


def assemble(config: GeneratorConfig, console: Optional[Console] = None) -> AssemblyResult:
    """Run the generator once for ``config``."""
    return PackageAssembler(config, console=console).assemble()
