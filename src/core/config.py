"""Runtime configuration model for flatquery.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_DATA_PATH,
    DEFAULT_DELIMITER,
    DEFAULT_EXTENSION,
    DEFAULT_MODE,
    FALSE_WORDS,
    TRUE_WORDS,
)
from core.errors import ConfigurationError


@dataclass(frozen=True)
class FlatQueryConfig:
    """Validated runtime configuration.

    Attributes:
        data_path: Directory holding one file per table.
        extension: Table file extension without the leading dot.
        mode: File access mode, ``r`` or ``a+``.
        delimiter: Single-character field delimiter.
        skip_blank_lines: Whether empty lines are ignored while reading.
    """

    data_path: Path
    extension: str = DEFAULT_EXTENSION
    mode: str = DEFAULT_MODE
    delimiter: str = DEFAULT_DELIMITER
    skip_blank_lines: bool = True

    @classmethod
    def from_env(cls) -> "FlatQueryConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            ConfigurationError: If environment values are invalid.
        """
        data_path_value = os.getenv("FLATQUERY_DATA_PATH", str(DEFAULT_DATA_PATH))
        extension = normalize_extension(os.getenv("FLATQUERY_EXTENSION", DEFAULT_EXTENSION))
        mode = os.getenv("FLATQUERY_MODE", DEFAULT_MODE)
        delimiter = validate_delimiter(os.getenv("FLATQUERY_DELIMITER", DEFAULT_DELIMITER))
        skip_blank_lines = _parse_bool(
            "FLATQUERY_SKIP_BLANK_LINES", os.getenv("FLATQUERY_SKIP_BLANK_LINES", "true")
        )
        return cls(
            data_path=Path(data_path_value).expanduser().resolve(),
            extension=extension,
            mode=mode,
            delimiter=delimiter,
            skip_blank_lines=skip_blank_lines,
        )


def normalize_extension(raw_value: str) -> str:
    """Strip a leading dot and reject empty extensions.

    Raises:
        ConfigurationError: If the extension is empty.
    """
    extension = raw_value.strip().lstrip(".")
    if not extension:
        raise ConfigurationError(
            "Invalid table file extension: expected a non-empty value such as 'csv'."
        )
    return extension


def validate_delimiter(raw_value: str) -> str:
    """Validate a single-character delimiter.

    Raises:
        ConfigurationError: If the delimiter is not exactly one character.
    """
    if len(raw_value) != 1:
        raise ConfigurationError(
            f"Invalid delimiter '{raw_value}': expected exactly one character."
        )
    return raw_value


def _parse_bool(name: str, raw_value: str) -> bool:
    """Parse a boolean environment value.

    Args:
        name: Variable name for error context.
        raw_value: Raw string from environment.

    Returns:
        Parsed boolean.

    Raises:
        ConfigurationError: If value is not a recognized boolean word.
    """
    normalized = raw_value.strip().lower()
    if normalized in TRUE_WORDS:
        return True
    if normalized in FALSE_WORDS:
        return False
    raise ConfigurationError(
        f"Invalid {name} value: expected one of {TRUE_WORDS + FALSE_WORDS}, got '{raw_value}'."
    )
