"""Shipnote - release automation with conventional-commit changelogs."""

__version__ = "0.1.0"
