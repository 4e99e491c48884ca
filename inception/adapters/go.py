"""
Go toolchain adapter — ``go list``, ``gofmt`` and ``go run -a``.

Runs the real Go tools through subprocess and captures their output
into ToolResults.  ``go run`` has no timeout: once the launcher
starts it runs to completion.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from pathlib import Path

from inception.adapters.base import Toolchain, ToolResult

logger = logging.getLogger(__name__)


class GoToolchain(Toolchain):
    """The Go command-line toolchain.

    Args:
        go_command: Go executable (name on PATH or absolute path).
        gofmt_command: gofmt executable used to canonicalize generated source.
    """

    def __init__(self, go_command: str = "go", gofmt_command: str = "gofmt"):
        self.go_command = go_command
        self.gofmt_command = gofmt_command

    @property
    def name(self) -> str:
        return "go"

    def is_available(self) -> bool:
        return shutil.which(self.go_command) is not None

    def query(self, directory: str) -> ToolResult:
        # Run inside the directory so module mode finds the target's go.mod
        return self._run([self.go_command, "list", directory], cwd=directory)

    def format_source(self, source: str) -> ToolResult:
        return self._run([self.gofmt_command], stdin=source)

    def compile_and_run(self, path: str) -> ToolResult:
        # Run from the launcher's directory so the target's go.mod is found
        cwd = str(Path(path).parent)
        return self._run([self.go_command, "run", "-a", path], cwd=cwd)

    def _run(
        self,
        cmd: list[str],
        stdin: str | None = None,
        cwd: str | None = None,
    ) -> ToolResult:
        logger.debug("Executing: %s (cwd=%s)", " ".join(cmd), cwd)
        start = time.monotonic()

        try:
            result = subprocess.run(
                cmd,
                input=stdin,
                cwd=cwd,
                capture_output=True,
                text=True,
            )
        except (FileNotFoundError, PermissionError) as e:
            return ToolResult.failure(
                command=cmd,
                returncode=None,
                error=f"Cannot execute {cmd[0]!r}: {e}",
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        if result.returncode == 0:
            return ToolResult.success(
                command=cmd,
                stdout=result.stdout,
                stderr=result.stderr,
                duration_ms=elapsed_ms,
            )

        logger.debug("%s exited with code %d", cmd[0], result.returncode)
        return ToolResult.failure(
            command=cmd,
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
            duration_ms=elapsed_ms,
        )
