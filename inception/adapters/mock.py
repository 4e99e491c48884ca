"""
Mock toolchain — test double for every toolchain operation.

Returns configurable results without touching the Go tools.  By
default the identity query fails (so resolution falls back to the
search roots), formatting passes the source through unchanged and
the build succeeds.
"""

from __future__ import annotations

from collections.abc import Callable

from inception.adapters.base import Toolchain, ToolResult


class MockToolchain(Toolchain):
    """Configurable fake toolchain with a call log.

    Args:
        identity: Import identity returned by query(); None makes query fail.
        available: Value reported by is_available().
        on_run: Optional hook called with the launcher path before
            compile_and_run() returns, e.g. to write the output file the
            real launcher would produce.
    """

    def __init__(
        self,
        identity: str | None = None,
        available: bool = True,
        on_run: Callable[[str], None] | None = None,
    ):
        self._identity = identity
        self._available = available
        self._on_run = on_run
        self._format_failure: str | None = None
        self._run_result: ToolResult | None = None
        self._call_log: list[tuple[str, str]] = []
        self.launcher_sources: list[str] = []

    @property
    def name(self) -> str:
        return "mock"

    @property
    def call_log(self) -> list[tuple[str, str]]:
        """(operation, argument) pairs in call order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def calls(self, operation: str) -> list[str]:
        """Arguments of every call to one operation."""
        return [arg for op, arg in self._call_log if op == operation]

    def is_available(self) -> bool:
        return self._available

    def set_format_failure(self, diagnostics: str = "expected declaration") -> None:
        """Make format_source() fail with the given diagnostics."""
        self._format_failure = diagnostics

    def set_run_failure(self, stderr: str, stdout: str = "", returncode: int = 2) -> None:
        """Make compile_and_run() exit nonzero."""
        self._run_result = ToolResult.failure(
            command=["mock", "run"],
            stdout=stdout,
            stderr=stderr,
            returncode=returncode,
        )

    def query(self, directory: str) -> ToolResult:
        self._call_log.append(("query", directory))
        if self._identity is None:
            return ToolResult.failure(
                command=["mock", "list", directory],
                stderr=f"no Go files in {directory}",
            )
        return ToolResult.success(command=["mock", "list", directory], stdout=self._identity + "\n")

    def format_source(self, source: str) -> ToolResult:
        self._call_log.append(("format", source))
        if self._format_failure is not None:
            return ToolResult.failure(command=["mock", "fmt"], stderr=self._format_failure)
        return ToolResult.success(command=["mock", "fmt"], stdout=source)

    def compile_and_run(self, path: str) -> ToolResult:
        self._call_log.append(("run", path))
        with open(path, encoding="utf-8") as f:
            self.launcher_sources.append(f.read())
        if self._on_run is not None:
            self._on_run(path)
        if self._run_result is not None:
            return self._run_result
        return ToolResult.success(command=["mock", "run", "-a", path])

    def reset(self) -> None:
        """Clear the call log and any configured failures."""
        self._call_log.clear()
        self.launcher_sources.clear()
        self._format_failure = None
        self._run_result = None
