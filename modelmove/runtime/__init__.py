"""
Runtime module for modelmove.

This module contains the business logic for each CLI subcommand,
exposed as both CLI commands and Python SDK functions.
"""

from .move_runtime import MoveRuntime
from .probe_runtime import ProbeRuntime

__all__ = ["MoveRuntime", "ProbeRuntime"]
