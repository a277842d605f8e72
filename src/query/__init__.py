"""Query execution pipeline.

This module turns a schema, raw delimited lines, and a query descriptor
into an ordered result set through validation, parsing, filtering,
sorting, and pagination.
"""
