"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files and command line
overrides, providing defaults and validation for generator settings.
"""

import json
import re
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


class ParseType(Enum):
    """Traversal strategy for the input path."""

    FILE = "File"
    TREE = "Tree"
    API_TYPE = "ApiType"
    API_MESSAGE = "ApiMessage"

    @classmethod
    def from_value(cls, value: Union[str, "ParseType"]) -> "ParseType":
        """Accept either the enum, its value (``Tree``) or its name (``TREE``)."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if value in (member.value, member.name) or str(value).lower() == member.value.lower():
                return member
        valid = ", ".join(member.value for member in cls)
        raise ConfigError(f"Invalid parse type: {value!r} (expected one of {valid})")


DEFAULT_VPPAPI_OPTS = '{ git="https://github.com/ayourtch/vpp-api", branch="main" }'


@dataclass
class GeneratorConfig:
    """Options driving one generator run."""

    # Input
    in_file: str = ""
    parse_type: ParseType = ParseType.FILE

    # Output
    out_file: str = "dummy.rs"
    package_name: str = "someVPP"
    package_path: str = "../"

    # Opaque dependency specification for the vpp-api crates in Cargo.toml
    vppapi_opts: str = DEFAULT_VPPAPI_OPTS

    # Actions
    print_message_names: bool = False
    generate_code: bool = False
    create_binding: bool = False
    create_package: bool = False

    # Files whose name ends with this suffix only hold shared types
    types_suffix: str = "_types.api.json"

    # Code style
    add_comments: bool = True

    verbose: int = 0

    # Unrecognized settings from config files
    custom: Dict[str, Any] = field(default_factory=dict)

    @property
    def package_root(self) -> Path:
        """Directory the generated package lives in."""
        return Path(self.package_path) / self.package_name


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = {
            f.name: f.default for f in fields(GeneratorConfig) if f.name != "custom"
        }

    def get_config(self, custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """
        Get the complete configuration.

        Precedence, lowest first: defaults, config file, custom overrides.

        Args:
            custom_config: Configuration overrides (typically from the CLI)
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = dict(self._defaults)

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if path.suffix.lower() != ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get("custom") or {})
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        config_args["parse_type"] = ParseType.from_value(
            config_args.get("parse_type", ParseType.FILE)
        )
        try:
            config_args["verbose"] = int(config_args.get("verbose", 0))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid verbosity: {config_args.get('verbose')!r}") from e

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = {
            f.name: getattr(config, f.name) for f in fields(GeneratorConfig) if f.name != "custom"
        }
        config_dict["parse_type"] = config.parse_type.value
        config_dict.update(config.custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate a configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if not config.in_file:
            warnings.append("No input file given")
        elif not Path(config.in_file).exists():
            warnings.append(f"Input path does not exist: {config.in_file}")

        if config.parse_type == ParseType.TREE and config.in_file and Path(config.in_file).is_file():
            warnings.append(f"Tree parsing expects a directory: {config.in_file}")

        if not config.package_name:
            warnings.append("Package name is empty")
        elif not re.fullmatch(r"[A-Za-z0-9_-]+", config.package_name):
            warnings.append(f"Invalid package name: {config.package_name}")

        if (config.create_binding or config.create_package) and config.parse_type != ParseType.TREE:
            warnings.append("Binding and package creation only apply to Tree parsing")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(custom_config, config_file)
