"""Storage collaborators.

This module exposes delimited text files in a directory as tables.
It owns path validation, table enumeration, and file handle scoping.
"""
