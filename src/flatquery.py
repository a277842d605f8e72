"""Public SDK surface for flatquery.

This module provides a stable import path for library users.
It re-exports the data source, executor, and typed query models.
"""

from __future__ import annotations

from core.config import FlatQueryConfig
from core.errors import (
    ConfigurationError,
    EmptySchemaError,
    FlatQueryError,
    InvalidQueryError,
    MalformedRecordError,
    QueryError,
    QueryFileError,
    SchemaError,
    SourceNotFoundError,
    UnknownFieldError,
)
from core.query_file import QueryFile, load_query_file
from core.types import OrderBy, Query, Record, ResultSet, Schema, SortDirection
from query.executor import LoggingQueryExecutor, QueryExecutor
from store.file_source import FileDataSource

__all__ = [
    "ConfigurationError",
    "EmptySchemaError",
    "FileDataSource",
    "FlatQueryConfig",
    "FlatQueryError",
    "InvalidQueryError",
    "LoggingQueryExecutor",
    "MalformedRecordError",
    "OrderBy",
    "Query",
    "QueryError",
    "QueryExecutor",
    "QueryFile",
    "QueryFileError",
    "Record",
    "ResultSet",
    "Schema",
    "SchemaError",
    "SourceNotFoundError",
    "SortDirection",
    "UnknownFieldError",
    "load_query_file",
]
