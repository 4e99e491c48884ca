"""Adapters — bindings to external compiler toolchains.

Public re-exports for convenient access.
"""

from inception.adapters.base import Toolchain, ToolResult
from inception.adapters.go import GoToolchain
from inception.adapters.mock import MockToolchain

__all__ = [
    "GoToolchain",
    "MockToolchain",
    "ToolResult",
    "Toolchain",
]
