"""
Generate use case — one complete inception cycle from a manifest.

Loads inception.yml, builds the toolchain from the environment plus
manifest overrides, then runs generate() and run() on a fresh session.
Failures come back on the result instead of being raised, so callers
(the CLI) can report them uniformly.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path

from inception.adapters.base import Toolchain
from inception.core.config.loader import Manifest, load_manifest
from inception.core.config.settings import ToolchainSettings
from inception.core.engine.session import InceptionSession
from inception.core.errors import InceptionError

logger = logging.getLogger(__name__)


@dataclass
class InceptionResult:
    """Outcome of one inception cycle."""

    manifest: Manifest | None = None
    input_path: str = ""
    output_path: str = ""
    bridge_path: str = ""
    import_identity: str = ""
    type_count: int = 0
    duration_ms: int = 0
    clean: bool = True
    error: str | None = None
    error_kind: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        result: dict = {"ok": self.ok}
        if self.error:
            result["error"] = self.error
            result["error_kind"] = self.error_kind
        result["input"] = self.input_path
        result["output"] = self.output_path
        result["bridge"] = self.bridge_path
        result["import_identity"] = self.import_identity
        result["types"] = self.type_count
        result["duration_ms"] = self.duration_ms
        result["clean"] = self.clean
        return result


def run_inception(
    manifest_path: Path | None = None,
    settings: ToolchainSettings | None = None,
    toolchain: Toolchain | None = None,
) -> InceptionResult:
    """Run a full generate + run cycle for one manifest.

    Args:
        manifest_path: Explicit inception.yml; searched upward when None.
        settings: Toolchain settings; read from the environment when None.
        toolchain: Prebuilt toolchain (tests); built from settings when None.

    Returns:
        InceptionResult; ``error`` is set when the cycle failed.
    """
    result = InceptionResult()
    start = time.monotonic()

    try:
        manifest = load_manifest(manifest_path)
    except InceptionError as e:
        return _failed(result, e, start)

    result.manifest = manifest
    result.input_path = manifest.input
    result.output_path = manifest.output
    result.type_count = len(manifest.types)

    if settings is None:
        settings = ToolchainSettings.from_env()
    settings = settings.merged(manifest.toolchain.model_dump())
    if toolchain is None:
        toolchain = settings.build_toolchain()

    session = InceptionSession(
        toolchain,
        manifest.input,
        manifest.output,
        manifest.reset_fields,
        library_import=settings.library_import,
        search_roots=settings.search_roots,
    )
    result.bridge_path = session.bridge_path

    try:
        with session:
            session.generate(manifest.package, manifest.types, manifest.import_identity)
            if session.context is not None:
                result.import_identity = session.context.import_identity
            session.run()
    except InceptionError as e:
        _failed(result, e, start)
    else:
        result.duration_ms = int((time.monotonic() - start) * 1000)
        logger.info("Generated %s in %d ms", manifest.output, result.duration_ms)

    result.clean = session.cleanup()
    return result


def _failed(result: InceptionResult, error: InceptionError, start: float) -> InceptionResult:
    result.error = str(error)
    result.error_kind = type(error).__name__
    result.duration_ms = int((time.monotonic() - start) * 1000)
    logger.debug("Inception failed (%s)", result.error_kind)
    return result
