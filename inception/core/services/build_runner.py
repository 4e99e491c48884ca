"""
Build runner — compile and execute the launcher program.

The contract is strictly pass/fail on the exit code.  What the launcher
actually produces (the generated output file) is its own side effect.
"""

from __future__ import annotations

import logging

from inception.adapters.base import Toolchain, ToolResult
from inception.core.errors import BuildError

logger = logging.getLogger(__name__)


def run_build(toolchain: Toolchain, launcher_path: str) -> ToolResult:
    """Compile-and-run ``launcher_path`` with the build cache bypassed.

    Raises:
        BuildError: The launcher failed to build or exited nonzero.  The
            error carries stdout and stderr exactly as captured.
    """
    logger.info("Running launcher %s", launcher_path)
    result = toolchain.compile_and_run(launcher_path)

    if result.failed:
        # a missing executable leaves stderr empty; surface the spawn error
        stderr = result.stderr if result.stderr or not result.error else result.error
        raise BuildError(launcher_path, result.stdout, stderr, result.returncode)

    if result.stdout:
        logger.debug("Launcher output:\n%s", result.stdout)
    logger.info("Launcher finished in %d ms", result.duration_ms)
    return result
