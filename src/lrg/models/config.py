"""
Configuration data models for lrg.

This module defines the structures backing the optional YAML configuration
file: default traversal settings, output settings and logging verbosity.
Command-line flags are layered on top of these values.
"""

from typing import Dict, List, Optional, Any
from enum import Enum
from pydantic import BaseModel, Field, field_validator, model_validator

from .entry import SortBy
from .options import LrgOptions


class LogLevel(Enum):
    """Supported logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class SearchConfig(BaseModel):
    """
    Default traversal settings.

    Attributes:
        max_depth: Maximum recursion depth (None for unbounded)
        min_depth: Minimum depth of reported entries
        no_recursion: Only visit the root's direct children
        follow_links: Follow symbolic links
        include_dirs: Include directories in the results
    """

    max_depth: Optional[int] = Field(None, ge=0, description="Maximum recursion depth")
    min_depth: int = Field(0, ge=0, description="Minimum depth of reported entries")
    no_recursion: bool = Field(False, description="Restrict the walk to direct children")
    follow_links: bool = Field(False, description="Follow symbolic links")
    include_dirs: bool = Field(False, description="Include directories in the results")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class OutputConfig(BaseModel):
    """
    Output settings.

    Attributes:
        number: Number of entries to print
        order: Sort direction by size
    """

    number: int = Field(5, ge=0, description="Number of entries to print")
    order: SortBy = Field(SortBy.DESCENDING, description="Sort direction by size")

    @field_validator('order', mode='before')
    @classmethod
    def validate_order(cls, v) -> SortBy:
        """Validate and convert order to enum."""
        if isinstance(v, str):
            try:
                return SortBy(v.lower())
            except ValueError:
                raise ValueError(f"Invalid sort order: {v}")
        return v

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data = self.model_dump()
        data['order'] = self.order.value
        return data


class LoggingConfig(BaseModel):
    """
    Logging settings.

    Attributes:
        level: Minimum level of messages written to stderr
    """

    level: LogLevel = Field(LogLevel.WARNING, description="Logging level")

    @field_validator('level', mode='before')
    @classmethod
    def validate_level(cls, v) -> LogLevel:
        """Validate and convert level to enum."""
        if isinstance(v, str):
            try:
                return LogLevel(v.upper())
            except ValueError:
                raise ValueError(f"Invalid logging level: {v}")
        return v

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {'level': self.level.value}


class LrgConfig(BaseModel):
    """
    Main configuration class for lrg.

    Attributes:
        search: Default traversal settings
        output: Output settings
        logging: Logging settings
    """

    search: SearchConfig = Field(default_factory=SearchConfig, description="Traversal settings")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging settings")

    @model_validator(mode='after')
    def validate_depths(self):
        """Reject depth bounds that can never match anything."""
        search = self.search
        if not search.no_recursion and search.max_depth is not None and search.min_depth > search.max_depth:
            raise ValueError(
                f"min_depth ({search.min_depth}) cannot exceed max_depth ({search.max_depth})"
            )
        return self

    def to_options(self, root: Optional[str] = None) -> LrgOptions:
        """
        Build traversal options from the search settings.

        Args:
            root: Root path; the options default (current directory) is used if None
        """
        data = self.search.model_dump()
        if root is not None:
            data['root'] = root
        return LrgOptions(**data)

    def validate_configuration(self) -> List[str]:
        """Validate the complete configuration and return any warnings."""
        warnings = []
        search = self.search

        if search.no_recursion and search.max_depth is not None:
            warnings.append("no_recursion is set, max_depth is ignored")

        if search.no_recursion and search.min_depth > 0:
            warnings.append("no_recursion with min_depth above 0 never reports any entry")

        if self.output.number == 0:
            warnings.append("output.number is 0, nothing will be printed")

        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary representation."""
        return {
            'search': self.search.to_dict(),
            'output': self.output.to_dict(),
            'logging': self.logging.to_dict()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LrgConfig':
        """Create configuration from dictionary representation."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the configuration."""
        depth = self.search.max_depth if self.search.max_depth is not None else "unbounded"
        parts = [f"Max depth: {depth}"]
        parts.append(f"Recursion: {'off' if self.search.no_recursion else 'on'}")
        parts.append(f"Follow links: {self.search.follow_links}")
        parts.append(f"Directories: {self.search.include_dirs}")
        parts.append(f"Show: {self.output.number} ({self.output.order.value})")

        return " | ".join(parts)


KNOWN_SECTIONS = {
    'search': set(SearchConfig.model_fields),
    'output': set(OutputConfig.model_fields),
    'logging': set(LoggingConfig.model_fields)
}


def validate_config_dict(config_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a configuration dictionary using Pydantic.

    Args:
        config_data: Dictionary containing configuration data

    Returns:
        Validated and normalized configuration dictionary

    Raises:
        ValueError: If configuration is invalid
    """
    for section, value in config_data.items():
        if section not in KNOWN_SECTIONS:
            raise ValueError(f"Unknown configuration section: {section}")
        if value is None:
            continue
        if not isinstance(value, dict):
            raise ValueError(f"Section '{section}' must be a mapping, got {type(value).__name__}")
        unknown = set(value) - KNOWN_SECTIONS[section]
        if unknown:
            raise ValueError(f"Unknown keys in section '{section}': {', '.join(sorted(unknown))}")

    cleaned = {section: value for section, value in config_data.items() if value is not None}

    try:
        return LrgConfig.model_validate(cleaned).to_dict()
    except Exception as e:
        raise ValueError(f"Invalid configuration: {e}") from e
