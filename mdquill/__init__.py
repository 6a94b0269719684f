"""Markdown editing engine: documents, cursors, editing actions and a background writer."""

__version__ = "0.1.0"