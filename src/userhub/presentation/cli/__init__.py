"""Command line interface for userhub."""
