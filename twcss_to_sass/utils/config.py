"""
Defines configuration and settings for the conversion process.
"""
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any


class ConfigError(ValueError):
    """Raised when conversion options contain names the converter doesn't know."""


@dataclass(frozen=True)
class FormatterOptions:
    """Settings handed over to the CSS beautifier."""
    indent_size: int = 4
    indent_char: str = ' '
    max_preserve_newlines: int = 5
    preserve_newlines: bool = True
    end_with_newline: bool = False
    wrap_line_length: int = 0   # 0 disables wrapping
    indent_empty_lines: bool = False


@dataclass(frozen=True)
class ClassNameOptions:
    """How comment labels are turned into class names."""
    lowercase: bool = True
    replace_with: str = '-'
    prefix: str = ''
    suffix: str = ''


@dataclass(frozen=True)
class ConversionConfig:
    """
    A container for all settings related to a conversion.
    Immutable: every convert() call derives its own value with merge_config().
    """
    format_output: bool = True
    use_comment_blocks_as_class_name: bool = False
    max_class_name_length: int = 50
    print_comments: bool = True
    formatter_options: FormatterOptions = field(default_factory=FormatterOptions)
    class_name_options: ClassNameOptions = field(default_factory=ClassNameOptions)


@dataclass(frozen=True)
class BatchConfig:
    """Settings for converting a set of files (used by the CLI)."""
    output_path: Path | None = None
    num_threads: int = 0    # 0 means os.cpu_count()
    conversion: ConversionConfig = field(default_factory=ConversionConfig)


DEFAULT_CONFIG = ConversionConfig()

# Nested option groups may be given as plain mappings
_NESTED_OPTIONS = {
    'formatter_options': FormatterOptions,
    'class_name_options': ClassNameOptions,
}


def _build_nested(cls, value: Any):
    if isinstance(value, cls):
        return value
    if not isinstance(value, Mapping):
        raise ConfigError(f"Expected {cls.__name__} or a mapping, got {type(value).__name__}")
    known = {f.name for f in fields(cls)}
    unknown = set(value) - known
    if unknown:
        raise ConfigError(f"Unknown {cls.__name__} keys: {', '.join(sorted(unknown))}")
    return cls(**value)


def merge_config(base: ConversionConfig,
                 overrides: Mapping[str, Any] | None = None) -> ConversionConfig:
    """
    Returns a new config with `overrides` shallowly merged over `base`.
    A nested group given as a mapping replaces the whole group;
    keys it leaves out take the group's defaults, not the values in `base`.
    """
    if not overrides:
        return base

    known = {f.name for f in fields(ConversionConfig)}
    unknown = set(overrides) - known
    if unknown:
        raise ConfigError(f"Unknown conversion options: {', '.join(sorted(unknown))}")

    changes = {
        key: _build_nested(_NESTED_OPTIONS[key], value) if key in _NESTED_OPTIONS else value
        for key, value in overrides.items()
    }
    return replace(base, **changes)


def resolve_config(options: ConversionConfig | Mapping[str, Any] | None) -> ConversionConfig:
    """Accepts None, a ready config or a mapping of overrides for DEFAULT_CONFIG."""
    if options is None:
        return DEFAULT_CONFIG
    if isinstance(options, ConversionConfig):
        return options
    return merge_config(DEFAULT_CONFIG, options)
