"""Command-line interface for Whistle Trainer."""

from .main import main

__all__ = ["main"]
