"""
Inception session — one staged bridge/launcher build.

    session = InceptionSession(GoToolchain(), "models/foo.go", "models/foo_ffjson.go")
    session.generate("models", descriptors)
    session.run()

generate() writes two files:

    models/foo_ffjson_expose.go           bridge, compiled into the package
    models/ffjson-inceptionXXXX/ffjson-inceptionYYYY.go
                                          launcher, a standalone main program

run() has the toolchain compile and execute the launcher, which imports
the package, calls the bridge's FFJSONExpose() and runs the ffjson
generator with the returned descriptors.  Both files and the temp
directory are removed afterwards whatever the outcome, and a failing
generate() removes whatever it had already written.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence

from pydantic import ValidationError

from inception.adapters.base import Toolchain, ToolResult
from inception.core.errors import FileError, InceptionError, RenderError
from inception.core.models.descriptor import DEFAULT_LIBRARY, GenerationContext, TypeDescriptor
from inception.core.services.build_runner import run_build
from inception.core.services.emitters import (
    create_temp_dir,
    derive_bridge_path,
    emit_bridge,
    emit_launcher,
)
from inception.core.services.import_resolver import resolve_import_identity, target_directory
from inception.core.services.janitor import cleanup as cleanup_artifacts
from inception.core.services.renderer import (
    BRIDGE_TEMPLATE,
    GENERATED_MARKER,
    LAUNCHER_TEMPLATE,
    render,
)

logger = logging.getLogger(__name__)


class InceptionSession:
    """State of one inception cycle, from generate() to cleanup().

    A session runs exactly one cycle.  At most one session may be in
    flight per input file, since the bridge path depends only on it.
    """

    def __init__(
        self,
        toolchain: Toolchain,
        input_path: str | os.PathLike,
        output_path: str | os.PathLike,
        reset_fields: bool = False,
        *,
        library_import: str = DEFAULT_LIBRARY,
        search_roots: Sequence[str] = (),
    ):
        self.toolchain = toolchain
        # absolute, since the launcher runs from the temp dir
        self.input_path = os.path.abspath(input_path)
        self.output_path = os.path.abspath(output_path)
        self.bridge_path = derive_bridge_path(self.input_path)
        self.reset_fields = reset_fields
        self.library_import = library_import
        self.search_roots = list(search_roots)

        self.context: GenerationContext | None = None
        self.temp_dir: str | None = None
        self.launcher_path: str | None = None
        self.bridge_created = False
        self._started = False

    def __enter__(self) -> InceptionSession:
        return self

    def __exit__(self, *exc_info) -> None:
        self.cleanup()

    def __repr__(self) -> str:
        return f"<InceptionSession input={self.input_path!r} launcher={self.launcher_path!r}>"

    # ── Stage 1: bridge + launcher ──────────────────────────────

    def generate(
        self,
        package_name: str,
        descriptors: Iterable[TypeDescriptor | dict],
        import_identity: str = "",
    ) -> None:
        """Render and write the launcher and the bridge file.

        Args:
            package_name: Go package name of the target package.
            descriptors: Types to expose, in order.
            import_identity: Import path of the target package; resolved
                through the toolchain when empty.

        Raises:
            ResolutionError, RenderError, FormatError, FileError: Everything
                written so far has been removed when these propagate.
        """
        if self._started:
            raise InceptionError("An InceptionSession runs a single cycle; create a new one")
        self._started = True

        done = False
        try:
            self._generate(package_name, descriptors, import_identity)
            done = True
        finally:
            if not done:
                self.cleanup()

    def _generate(
        self,
        package_name: str,
        descriptors: Iterable[TypeDescriptor | dict],
        import_identity: str,
    ) -> None:
        self._remove_stale_bridge()

        if not import_identity:
            import_identity = resolve_import_identity(
                self.toolchain, self.input_path, self.search_roots
            )
        import_identity = import_identity.replace(os.sep, "/")

        try:
            self.context = GenerationContext(
                type_descriptors=tuple(descriptors),
                import_identity=import_identity,
                package_name=package_name,
                input_path=self.input_path,
                output_path=self.output_path,
                reset_fields=self.reset_fields,
                library_import=self.library_import,
            )
        except ValidationError as e:
            raise RenderError("generation context", str(e)) from e

        logger.info(
            "Generating inception for %s (%s, %d types)",
            self.input_path, import_identity, len(self.context.type_descriptors),
        )

        launcher = render(LAUNCHER_TEMPLATE, self.context, self.toolchain)
        bridge = render(BRIDGE_TEMPLATE, self.context, self.toolchain)

        self.temp_dir = create_temp_dir(target_directory(self.input_path))
        self.launcher_path = emit_launcher(self.temp_dir, launcher)

        # set before writing so a half-written bridge is still removed
        self.bridge_created = True
        emit_bridge(self.bridge_path, bridge)

    def _remove_stale_bridge(self) -> None:
        """Remove a bridge file left behind by a killed earlier cycle."""
        if not os.path.lexists(self.bridge_path):
            return

        try:
            with open(self.bridge_path, encoding="utf-8", errors="replace") as f:
                first_line = f.readline()
        except OSError as e:
            raise FileError(self.bridge_path, f"Cannot inspect existing file ({e.strerror or e})") from e

        if not first_line.startswith(GENERATED_MARKER):
            raise FileError(self.bridge_path, "Refusing to overwrite a file not generated by ffjson")

        logger.warning("Removing stale bridge file %s from an interrupted run", self.bridge_path)
        try:
            os.remove(self.bridge_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise FileError(self.bridge_path, f"Cannot remove stale bridge file ({e.strerror or e})") from e

    # ── Stage 2: compile and run ────────────────────────────────

    def run(self) -> ToolResult:
        """Compile and execute the launcher, then clean up.

        Returns:
            The toolchain result of the successful run.

        Raises:
            BuildError: The launcher failed; cleanup has already happened.
            InceptionError: generate() has not completed on this session.
        """
        if self.launcher_path is None:
            raise InceptionError("run() requires a successful generate() on this session")

        try:
            result = run_build(self.toolchain, self.launcher_path)
        finally:
            self.cleanup()

        if not os.path.exists(self.output_path):
            logger.warning("Launcher succeeded but %s does not exist", self.output_path)
        return result

    # ── Teardown ────────────────────────────────────────────────

    def cleanup(self) -> bool:
        """Remove every artifact of this session; safe to call repeatedly."""
        return cleanup_artifacts(self)
