"""Presentation layer."""

from smartnote.presentation.cli import App, create_parser, dispatch

__all__ = ["App", "create_parser", "dispatch"]
