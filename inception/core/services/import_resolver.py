"""
Import resolver — find the Go import path of the package being generated.

The launcher has to import the target package, so we need its import
identity.  The toolchain is asked first (``go list <dir>`` knows about
both modules and GOPATH); if that fails we fall back to locating the
directory under ``<root>/src/`` for one of the GOPATH-style search roots.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence

from inception.adapters.base import Toolchain
from inception.core.errors import ResolutionError

logger = logging.getLogger(__name__)

SOURCE_ROOT = "src"


def split_search_roots(value: str | None) -> list[str]:
    """Split an OS path-list (``GOPATH`` style) into its non-empty entries."""
    if not value:
        return []
    return [p for p in value.split(os.pathsep) if p]


def target_directory(input_path: str) -> str:
    """Absolute directory containing the input file."""
    return os.path.dirname(os.path.abspath(input_path))


def resolve_import_identity(
    toolchain: Toolchain,
    input_path: str,
    search_roots: Sequence[str] = (),
) -> str:
    """Determine the import identity of the directory holding ``input_path``.

    Args:
        toolchain: Toolchain used for the identity query.
        input_path: The Go file being generated for.
        search_roots: GOPATH-style roots consulted when the query fails.

    Returns:
        The import path, ``/``-separated (e.g. ``github.com/acme/models``).

    Raises:
        ResolutionError: If neither the query nor any search root yields one.
    """
    directory = target_directory(input_path)

    result = toolchain.query(directory)
    if result.ok:
        identity = result.stdout.rstrip("\r\n")
        if identity:
            logger.debug("Resolved %s via %s: %s", directory, toolchain.name, identity)
            return identity
        logger.debug("Identity query for %s returned nothing", directory)
    else:
        logger.debug("Identity query for %s failed: %s", directory, result.diagnostics)

    identity = _match_search_roots(directory, search_roots)
    if identity is None:
        raise ResolutionError(directory, search_roots)

    logger.debug("Resolved %s via search roots: %s", directory, identity)
    return identity


def _match_search_roots(directory: str, search_roots: Iterable[str]) -> str | None:
    prefix = SOURCE_ROOT + os.sep

    for root in search_roots:
        abs_root = os.path.abspath(root)
        try:
            rel = os.path.relpath(directory, abs_root)
        except ValueError:
            # different drive on Windows
            continue

        if not rel.startswith(prefix):
            continue
        return rel[len(prefix):].replace(os.sep, "/")

    return None
