# src/kubemetrics/cli/__init__.py
"""
kubemetrics CLI Package

This package exposes the top-level Typer `app` used by the console
entrypoint and by the tests.
"""

from .main import app

__all__ = ["app"]
