"""
Toolchain base — the contract between the orchestrator and the compiler.

The orchestrator never spawns processes itself: it asks a Toolchain to
query a package identity, format generated source, or compile and run
the launcher.  Tests swap in MockToolchain; production uses GoToolchain.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field


class ToolResult(BaseModel):
    """Outcome of one toolchain invocation.

    Toolchains NEVER raise for tool failures — a nonzero exit or a
    missing executable is captured here with ok=False.
    """

    ok: bool
    command: list[str] = Field(default_factory=list)
    returncode: int | None = None
    stdout: str = ""
    stderr: str = ""
    error: str | None = None
    duration_ms: int = 0

    @property
    def failed(self) -> bool:
        return not self.ok

    @property
    def diagnostics(self) -> str:
        """Best human-readable explanation of a failure."""
        return self.stderr.strip() or self.error or f"exit code {self.returncode}"

    @classmethod
    def success(cls, stdout: str = "", **kwargs) -> ToolResult:
        kwargs.setdefault("returncode", 0)
        return cls(ok=True, stdout=stdout, **kwargs)

    @classmethod
    def failure(cls, stderr: str = "", returncode: int | None = 1, **kwargs) -> ToolResult:
        return cls(ok=False, returncode=returncode, stderr=stderr, **kwargs)


class Toolchain(ABC):
    """Abstract compiler toolchain.

    To add a toolchain:
        1. Subclass Toolchain
        2. Implement name, is_available, query, format_source, compile_and_run
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Toolchain identifier (e.g., 'go', 'mock')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the underlying executable can be found. Never raises."""

    @abstractmethod
    def query(self, directory: str) -> ToolResult:
        """Ask the toolchain for the import identity of a package directory.

        On success stdout holds the identity, usually newline-terminated.
        """

    @abstractmethod
    def format_source(self, source: str) -> ToolResult:
        """Canonicalize generated source; on success stdout holds the result."""

    @abstractmethod
    def compile_and_run(self, path: str) -> ToolResult:
        """Compile and execute a standalone program, bypassing build caches.

        Blocks until the program exits.  stdout and stderr are captured
        in full and kept separate.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
