"""Command line interface for flatquery."""
