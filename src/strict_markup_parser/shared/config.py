"""Configuration for strict markup parsing.

:class:`ParserConfig` is an immutable dataclass shared by the parser core,
the API layer and the CLI. Instances validate themselves on construction and
can be derived from one another with :meth:`ParserConfig.override`.
"""

import json
import sys
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from strict_markup_parser.shared.logging import LOG_LEVELS

# Each nesting level uses three interpreter frames.
FRAMES_PER_LEVEL = 3
RECURSION_HEADROOM = 150
DEFAULT_MAX_DEPTH = 200


def max_supported_depth() -> int:
    """Deepest nesting the current interpreter recursion limit can parse."""
    return (sys.getrecursionlimit() - RECURSION_HEADROOM) // FRAMES_PER_LEVEL


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ParserConfig:
    """Settings for one parser instance.

    Attributes:
        max_depth: Deepest element nesting accepted before the parse fails
            with ``NestingDepthError``
        max_input_length: Longest input (in characters) the API layer will
            hand to the parser, or None for no limit
        collapse_whitespace_text: Treat whitespace-only runs between child
            tags as separators instead of keeping them as Text nodes
        logging_level: Level used when the CLI configures logging
        enable_diagnostics: Attach diagnostics to API results
        correlation_id: Default correlation ID for log records
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    max_input_length: Optional[int] = None
    collapse_whitespace_text: bool = False
    logging_level: str = "WARNING"
    enable_diagnostics: bool = True
    correlation_id: Optional[str] = None

    # Metadata
    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not isinstance(self.max_depth, int) or self.max_depth <= 0:
            raise ConfigValidationError(
                "max_depth must be a positive integer",
                field_name="max_depth",
                suggestions=[f"Use the default of {DEFAULT_MAX_DEPTH}"],
            )
        depth_cap = max_supported_depth()
        if self.max_depth > depth_cap:
            raise ConfigValidationError(
                f"max_depth {self.max_depth} exceeds {depth_cap}, the deepest nesting "
                "the interpreter recursion limit allows",
                field_name="max_depth",
                suggestions=[
                    f"Use a max_depth of at most {depth_cap}",
                    "Raise the limit with sys.setrecursionlimit() before configuring",
                ],
            )
        if self.max_input_length is not None and self.max_input_length <= 0:
            raise ConfigValidationError(
                "max_input_length must be > 0 or None",
                field_name="max_input_length",
            )
        if self.logging_level not in LOG_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {list(LOG_LEVELS)}",
                field_name="logging_level",
            )

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = ParserConfig().override(max_depth=16)
            >>> config.max_depth
            16
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=sorted(known),
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        base: Optional["ParserConfig"] = None
    ) -> "ParserConfig":
        """Create configuration from dictionary, ignoring unknown keys.

        Keys missing from ``data`` come from ``base`` when one is given,
        otherwise from the field defaults.
        """
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        if base is not None:
            return base.override(**values)
        return cls(**values)

    @classmethod
    def from_json(
        cls,
        json_str: str,
        base: Optional["ParserConfig"] = None
    ) -> "ParserConfig":
        """Create configuration from JSON string."""
        data = json.loads(json_str)
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data, base)

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        base: Optional["ParserConfig"] = None
    ) -> "ParserConfig":
        """Load configuration from a JSON file, layered over ``base`` if given."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read configuration file {path}: {e}") from e
        try:
            return cls.from_json(text, base)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON in {path}: {e}") from e

    # Preset factory methods
    @classmethod
    def default(cls) -> "ParserConfig":
        """Create the default configuration."""
        return cls(name="default")

    @classmethod
    def strict(cls) -> "ParserConfig":
        """Create a preset with shallow nesting and a 1 MiB input cap."""
        return cls(
            max_depth=64,
            max_input_length=1024 * 1024,
            name="strict",
            description="Shallow nesting limit and bounded input size",
        )

    @classmethod
    def untrusted_input(cls) -> "ParserConfig":
        """Create a preset for markup from untrusted sources."""
        return cls(
            max_depth=32,
            max_input_length=64 * 1024,
            name="untrusted_input",
            description="Tight depth and size limits for untrusted markup",
        )

    @classmethod
    def preset(cls, name: str) -> "ParserConfig":
        """Look up a preset by name."""
        presets = {
            "default": cls.default,
            "strict": cls.strict,
            "untrusted_input": cls.untrusted_input,
        }
        if name not in presets:
            raise ConfigValidationError(
                f"Unknown preset: {name}",
                suggestions=sorted(presets),
            )
        return presets[name]()


PRESET_NAMES = ("default", "strict", "untrusted_input")
