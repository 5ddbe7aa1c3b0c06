"""
CLI module for rwsdk-tools.

Provides the ``rwsdk-tools`` console script entry point.
"""

from .commands import main

__all__ = ["main"]
