"""Core constants used across flatquery modules.

This module centralizes defaults and supported values.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_PATH = Path("data")
DEFAULT_EXTENSION = "csv"
DEFAULT_DELIMITER = ","
DEFAULT_MODE = "r"
READ_MODE = "r"
APPEND_MODE = "a+"
SUPPORTED_MODES = (READ_MODE, APPEND_MODE)
DEFAULT_PAGE = 1
FILE_ENCODING = "utf-8"
LINE_TERMINATORS = "\r\n"
QUERY_FILE_VERSION = 1
TRUE_WORDS = ("1", "true", "yes", "on")
FALSE_WORDS = ("0", "false", "no", "off")
