"""
Loading of the optional ``.lrg.yaml`` file.

The file only supplies defaults for the lrg command: which depths to search,
whether links are followed, how many entries to print and at what level to
log. An explicit path is used as given; otherwise the first known file name
found in the working directory, the home directory or ``~/.config/lrg`` wins.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List, Tuple, Union
import logging
from dataclasses import dataclass

from ..models.config import LrgConfig, validate_config_dict


logger = logging.getLogger(__name__)

TEMPLATE_SECTIONS = [
    ("search", "Traversal defaults (max_depth: null means unbounded)"),
    ("output", "How many entries to print, and in which order (descending or ascending)"),
    ("logging", "Logging level: DEBUG, INFO, WARNING or ERROR"),
]


@dataclass
class ConfigParseResult:
    """
    Outcome of loading lrg defaults.

    Attributes:
        config: Validated defaults
        warnings: Settings that are legal but probably not what was meant
        config_path: File the defaults came from, None when none was found
        is_default: True when no file was found and built-in defaults apply
    """
    config: LrgConfig
    warnings: List[str]
    config_path: Optional[Path]
    is_default: bool


class ConfigurationError(Exception):
    """The configuration file is missing, unreadable or invalid."""
    pass


class ConfigParser:
    """Finds, reads and validates the lrg configuration file."""

    DEFAULT_CONFIG_NAMES = [
        '.lrg.yaml',
        '.lrg.yml',
        'lrg.yaml',
        'lrg.yml'
    ]

    def __init__(self, strict_mode: bool = False):
        """
        Args:
            strict_mode: Reject a file that only produces warnings
        """
        self.strict_mode = strict_mode
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def get_search_paths(self) -> List[Path]:
        """Directories searched for a configuration file, in order."""
        return [
            Path.cwd(),
            Path.home(),
            Path.home() / '.config' / 'lrg',
        ]

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> ConfigParseResult:
        """
        Load lrg defaults from ``config_path`` or from the first discovered file.

        Raises:
            ConfigurationError: If the file is missing, unreadable, not a
                mapping, has unknown keys or bad values, or (in strict mode)
                produces warnings
        """
        try:
            if config_path:
                config_path = Path(config_path).expanduser()
                if not config_path.exists():
                    raise ConfigurationError(f"Configuration file not found: {config_path}")
                data = self._load_yaml_file(config_path)
            else:
                config_path, data = self._find_and_load_config()

            is_default = config_path is None
            config = LrgConfig.from_dict(self._validate_config_data(data or {}))
            warnings = config.validate_configuration()

            if self.strict_mode and warnings:
                raise ConfigurationError(f"Configuration warnings in strict mode: {'; '.join(warnings)}")

            self.logger.info(f"Using {'built-in defaults' if is_default else config_path}")
            return ConfigParseResult(
                config=config,
                warnings=warnings,
                config_path=config_path,
                is_default=is_default
            )

        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Failed to load configuration: {e}") from e

    def _find_and_load_config(self) -> Tuple[Optional[Path], Optional[Dict[str, Any]]]:
        """Return the first existing configuration file and its data, or (None, None)."""
        for directory in self.get_search_paths():
            for name in self.DEFAULT_CONFIG_NAMES:
                candidate = directory / name
                if candidate.is_file():
                    self.logger.info(f"Found configuration file: {candidate}")
                    return candidate, self._load_yaml_file(candidate)

        self.logger.debug("No configuration file found")
        return None, None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Read a YAML mapping; an empty or comment-only file reads as {}."""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {file_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {file_path}: {e}") from e

        if data is None:
            self.logger.warning(f"Configuration file has no settings: {file_path}")
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a YAML object, got {type(data).__name__}"
            )
        return data

    def _validate_config_data(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return validate_config_dict(config_data)
        except ValueError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

    def save_config(self, config: LrgConfig, output_path: Union[str, Path]) -> None:
        """Write ``config`` as commented YAML, creating parent directories."""
        _write_text(Path(output_path), self._generate_yaml_with_comments(config.to_dict()))
        self.logger.info(f"Configuration saved to {output_path}")

    def _generate_yaml_with_comments(self, config_dict: Dict[str, Any]) -> str:
        lines = [
            "# lrg configuration",
            "# Command-line flags override the values below",
            "",
        ]

        for section, comment in TEMPLATE_SECTIONS:
            if section not in config_dict:
                continue
            lines.append(f"# {comment}")
            lines.append(yaml.dump({section: config_dict[section]},
                                   default_flow_style=False,
                                   sort_keys=False).rstrip())
            lines.append("")

        return "\n".join(lines)

    def validate_config_file(self, config_path: Union[str, Path]) -> List[str]:
        """Check a file without building an LrgConfig; returns error messages."""
        config_path = Path(config_path)
        if not config_path.exists():
            return [f"Configuration file not found: {config_path}"]

        try:
            self._validate_config_data(self._load_yaml_file(config_path))
        except ConfigurationError as e:
            return [str(e)]
        return []

    def get_config_template(self) -> str:
        """Commented YAML holding every setting at its default."""
        return self._generate_yaml_with_comments(LrgConfig().to_dict())


def _write_text(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
    except OSError as e:
        raise ConfigurationError(f"Cannot write configuration file {path}: {e}") from e


def load_config(config_path: Optional[Union[str, Path]] = None, strict_mode: bool = False) -> ConfigParseResult:
    """Load lrg defaults; see ConfigParser.load_config."""
    return ConfigParser(strict_mode=strict_mode).load_config(config_path)


def validate_config_file(config_path: Union[str, Path]) -> List[str]:
    """Return the problems found in a configuration file (empty when valid)."""
    return ConfigParser().validate_config_file(config_path)


def create_config_template(output_path: Union[str, Path]) -> None:
    """
    Write the default configuration, with comments, to ``output_path``.

    Raises:
        ConfigurationError: If the file cannot be written
    """
    _write_text(Path(output_path), ConfigParser().get_config_template())
