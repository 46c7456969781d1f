"""Bubblemon macOS build and release tooling."""

__version__ = "0.1.0"
