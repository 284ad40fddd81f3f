"""
setup-skaffold CLI module.

This module provides the command-line interface for setup-skaffold.
"""

from .parser import CLI, main

__all__ = ["CLI", "main"]
