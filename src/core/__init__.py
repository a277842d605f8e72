"""Shared building blocks.

This module holds typed models, configuration, errors, and logging
used by the query pipeline, storage collaborators, and the CLI.
"""
