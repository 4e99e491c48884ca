"""
Error taxonomy for an inception cycle.

Every error raised by ``InceptionSession.generate()`` / ``run()`` is an
``InceptionError``.  The subclass tells the caller which stage broke:

    ResolutionError  — import path of the target package not discoverable
    RenderError      — template substitution failed (malformed context)
    FormatError      — generated source rejected by the formatter
    FileError        — bridge / launcher / temp dir could not be written
    BuildError       — ``go run`` of the launcher exited nonzero
"""

from __future__ import annotations

from collections.abc import Sequence


class InceptionError(Exception):
    """Base class for all inception failures."""


class ResolutionError(InceptionError):
    """Raised when no import identity can be found for the target directory."""

    def __init__(self, target_dir: str, search_roots: Sequence[str]):
        self.target_dir = target_dir
        self.search_roots = list(search_roots)
        super().__init__(
            f"Could not find source directory: search roots={self.search_roots!r} "
            f"target={target_dir!r}"
        )


class RenderError(InceptionError):
    """Raised when a template cannot be rendered against its context."""

    def __init__(self, template_name: str, reason: str):
        self.template_name = template_name
        super().__init__(f"Failed to render {template_name}: {reason}")


class FormatError(InceptionError):
    """Raised when the rendered source does not survive formatting."""

    def __init__(self, template_name: str, diagnostics: str):
        self.template_name = template_name
        self.diagnostics = diagnostics
        super().__init__(
            f"Generated {template_name} source failed to format:\n{diagnostics}"
        )


class FileError(InceptionError):
    """Raised when a generated file or the temp directory cannot be written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"{reason}: {path}")


class BuildError(InceptionError):
    """Raised when compiling and running the launcher fails.

    The message carries the compiler output verbatim so the caller sees
    the real diagnostics, not a summary of them.
    """

    def __init__(
        self,
        launcher_path: str,
        stdout: str,
        stderr: str,
        returncode: int | None = None,
    ):
        self.launcher_path = launcher_path
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(
            f"Go run failed for: {launcher_path}\n"
            f"STDOUT:\n{stdout}\n"
            f"STDERR:\n{stderr}\n"
        )
