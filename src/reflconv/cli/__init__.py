"""
Command-line interface for refln-converter.

Provides commands for converting SF-mmCIF reflection data
and inspecting the conversion spec.
"""

from .main import app, main

__all__ = ["main", "app"]
