"""Command-line interface module for Markup Tag Context.

This module provides the ``markup-tag-context`` tool for resolving cursor
contexts in markup files and inspecting their token streams.
"""

from .main import main

__all__ = ["main"]
