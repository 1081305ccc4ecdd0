"""
Command-line interface for vpp-api-gen.

Usage:
  vpp-api-gen -i api/core/interface.api.json
  vpp-api-gen -i api -p Tree --generate-code --create-package --package-name vpp-api
"""

import argparse
from typing import List, Optional

from rich.console import Console

from . import __version__
from .codegen.assembler import AssemblyError, AssemblyResult, PackageAssembler
from .codegen.core.config import ConfigError, GeneratorConfig, ParseType, get_config_manager
from .codegen.core.generator import GeneratorError
from .codegen.core.templates import TemplateError
from .loader import ApiLoaderError
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Diagnostics go to stderr, generated code may go to stdout
console = Console(stderr=True)

# CLI option -> GeneratorConfig field
CONFIG_OPTIONS = (
    "in_file",
    "out_file",
    "parse_type",
    "package_name",
    "vppapi_opts",
    "package_path",
    "print_message_names",
    "generate_code",
    "create_binding",
    "create_package",
)


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="vpp-api-gen",
        description="Generate Rust bindings from VPP API definition files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  vpp-api-gen -i interface.api.json
  vpp-api-gen -i interface.api.json --generate-code --package-path out/
  vpp-api-gen -i vpp/api -p Tree --print-message-names
  vpp-api-gen -i vpp/api -p Tree --generate-code --create-package --package-name vpp-api
  vpp-api-gen -i ip4_address.json -p ApiType -o -
        """.strip(),
    )

    parser.add_argument(
        "-i", "--in-file", metavar="PATH", help="Input file, or directory for Tree parsing"
    )
    parser.add_argument(
        "-o",
        "--out-file",
        metavar="FILE",
        help="Output file for ApiType/ApiMessage parsing, '-' for stdout (default: dummy.rs)",
    )
    parser.add_argument(
        "-p",
        "--parse-type",
        choices=[p.value for p in ParseType],
        help="Parse type for the operation (default: File)",
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")

    package_group = parser.add_argument_group("package options")
    package_group.add_argument(
        "--package-name", metavar="NAME", help="Name of the generated package (default: someVPP)"
    )
    package_group.add_argument(
        "--vppapi-opts",
        metavar="SPEC",
        help="Cargo dependency spec for the vpp-api crates",
    )
    package_group.add_argument(
        "--package-path",
        metavar="DIR",
        help="Directory the package is created in (default: ../)",
    )

    action_group = parser.add_argument_group("actions")
    action_group.add_argument(
        "--print-message-names",
        action="store_true",
        default=None,
        help="Print message names with their CRC",
    )
    action_group.add_argument(
        "--generate-code", action="store_true", default=None, help="Generate Rust code"
    )
    action_group.add_argument(
        "--create-binding",
        action="store_true",
        default=None,
        help="Emit every module, shared types files first, ordered by import count",
    )
    action_group.add_argument(
        "--create-package",
        action="store_true",
        default=None,
        help="Create a Cargo package around the generated code",
    )

    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Increase verbosity (-v, -vv)"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def build_config(args: argparse.Namespace) -> GeneratorConfig:
    """
    Build configuration from CLI arguments.

    Values given on the command line override the configuration file.
    """
    config_dict = {
        option: getattr(args, option)
        for option in CONFIG_OPTIONS
        if getattr(args, option, None) is not None
    }
    if args.verbose:
        config_dict["verbose"] = args.verbose

    try:
        config = get_config_manager().get_config(config_dict, args.config)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e

    if not config.in_file:
        raise CLIError("An input path is required (-i/--in-file)")
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the generator from the command line.

    Args:
        argv: Arguments, defaults to ``sys.argv[1:]``

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, console=console)

    try:
        config = build_config(args)
        setup_logging(config.verbose, console=console)

        for warning in get_config_manager().validate_config(config):
            logger.warning("%s", warning)

        result = PackageAssembler(config, console=console).assemble()
        _report(result, config)
        return 0

    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1
    except (ApiLoaderError, ConfigError) as e:
        console.print(f"[red]✗ Failed to load input:[/red] {e}")
        return 1
    except (AssemblyError, GeneratorError, TemplateError) as e:
        console.print(f"[red]✗ Code generation failed:[/red] {e}")
        return 1


def _report(result: AssemblyResult, config: GeneratorConfig):
    if result.warnings:
        console.print(f"[yellow]⚠️  {len(result.warnings)} warnings[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {warning}", markup=True, highlight=False)

    if result.written:
        console.print(
            f"[green]✓[/green] Wrote {len(result.written)} files for "
            f"[cyan]{config.package_name}[/cyan]"
        )
        for path in result.written:
            logger.info("Wrote %s", path)
