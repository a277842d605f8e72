"""File-backed data source.

This module treats a directory of delimited text files as tables.
It validates the directory against the access mode, lists and counts
tables, and scopes one open file handle to each query.
"""

from __future__ import annotations

from contextlib import contextmanager
import os
from pathlib import Path
from typing import Iterator, Mapping, Sequence

from core.config import FlatQueryConfig
from core.constants import APPEND_MODE, FILE_ENCODING, READ_MODE
from core.errors import ConfigurationError, EmptySchemaError, SourceNotFoundError
from core.logging_config import get_logger
from core.types import Query, ResultSet, Schema
from query.executor import Executor, LoggingQueryExecutor, QueryExecutor
from query.record_parser import is_blank_line

_LOGGER = get_logger(__name__)


class FileDataSource:
    """Directory of ``{source}.{extension}`` table files.

    Schemas are declared by the caller per table; nothing is inferred
    from file contents.
    """

    def __init__(
        self,
        config: FlatQueryConfig,
        schemas: Mapping[str, Sequence[str] | Schema] | None = None,
        executor: Executor | None = None,
    ) -> None:
        """Create a data source.

        Args:
            config: Runtime configuration.
            schemas: Declared field names per table name.
            executor: Optional query executor; defaults to one built from config.
        """
        self._config = config
        self._schemas = dict(schemas or {})
        self._executor = executor or QueryExecutor(
            delimiter=config.delimiter,
            skip_blank_lines=config.skip_blank_lines,
        )
        self._is_connected = False

    @property
    def is_connected(self) -> bool:
        """Return whether the storage directory passed validation."""
        return self._is_connected

    def connect(self) -> bool:
        """Validate the storage directory against the configured mode.

        Returns:
            True once connected.

        Raises:
            ConfigurationError: If the path is unusable or the mode unsupported.
        """
        self._is_connected = False
        path = self._config.data_path
        mode = self._config.mode
        if not path.is_dir():
            raise ConfigurationError(
                f"The path `{path}` is not a directory. Set FLATQUERY_DATA_PATH to a directory."
            )
        if mode == READ_MODE:
            if not os.access(path, os.R_OK):
                raise ConfigurationError(f"The path `{path}` is not readable")
        elif mode == APPEND_MODE:
            if not os.access(path, os.W_OK):
                raise ConfigurationError(f"The path `{path}` is not writable")
        else:
            raise ConfigurationError(f"The mode `{mode}` is not yet supported")
        self._is_connected = True
        _LOGGER.debug("source_connected", path=str(path), mode=mode)
        return self._is_connected

    def disconnect(self) -> bool:
        """Mark the source disconnected."""
        if self._is_connected:
            self._is_connected = False
            _LOGGER.debug("source_disconnected", path=str(self._config.data_path))
        return True

    def sources(self) -> tuple[str, ...]:
        """List table names available in the storage directory.

        Returns:
            Sorted base names of files carrying the configured extension.
        """
        self._ensure_connected()
        suffix = f".{self._config.extension}"
        names = [
            entry.name[: -len(suffix)]
            for entry in self._config.data_path.iterdir()
            if entry.is_file() and entry.name.endswith(suffix) and len(entry.name) > len(suffix)
        ]
        return tuple(sorted(names))

    def describe(self, source: str) -> Schema:
        """Return the declared schema of a table.

        Raises:
            EmptySchemaError: If no fields are declared for the table.
        """
        declared = self._schemas.get(source)
        if not declared:
            raise EmptySchemaError(
                f"The schema must be defined for source `{source}`. "
                "Declare its field names before querying it."
            )
        return Schema.of(declared)

    def count(self, source: str) -> int:
        """Count lines in a table file.

        Blank lines are excluded when the config skips them.
        """
        with self.open_lines(source) as lines:
            if self._config.skip_blank_lines:
                return sum(1 for line in lines if not is_blank_line(line))
            return sum(1 for _ in lines)

    @contextmanager
    def open_lines(self, source: str) -> Iterator[Iterator[str]]:
        """Open a table file and yield its line iterator.

        The handle is closed when the block exits, on success or error.

        Raises:
            SourceNotFoundError: If the table file does not exist.
        """
        self._ensure_connected()
        file_path = self.table_path(source)
        if not file_path.is_file():
            raise SourceNotFoundError(
                f"Table `{source}` not found at {file_path}. "
                f"Available tables: {', '.join(self.sources()) or '-'}."
            )
        with file_path.open(self._config.mode, encoding=FILE_ENCODING, newline="") as handle:
            if self._config.mode == APPEND_MODE:
                handle.seek(0)
            yield iter(handle)

    def read(self, source: str, query: Query) -> ResultSet:
        """Run a query against one table.

        Args:
            source: Table name.
            query: Query descriptor.

        Returns:
            Ordered result set.

        Raises:
            EmptySchemaError: If the table has no declared schema.
            SourceNotFoundError: If the table file is missing.
            QueryError: If validation or parsing fails.
        """
        schema = self.describe(source)
        executor = LoggingQueryExecutor(self._executor, source=source)
        with self.open_lines(source) as lines:
            return executor.execute(schema, lines, query)

    def table_path(self, source: str) -> Path:
        """Return the file path backing a table."""
        return self._config.data_path / f"{source}.{self._config.extension}"

    def _ensure_connected(self) -> None:
        if not self._is_connected:
            self.connect()
