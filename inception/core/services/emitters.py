"""
Emitters — write the rendered bridge and launcher sources to disk.

The bridge goes next to the input file, inside the target package, so
the next build of that package compiles it.  The launcher goes into a
fresh temporary directory created beside the input file; both the
directory and the file name are allocated atomically by ``tempfile``,
so concurrent sessions never collide on them.
"""

from __future__ import annotations

import logging
import os
import tempfile

from inception.core.errors import FileError

logger = logging.getLogger(__name__)

BRIDGE_SUFFIX = "_ffjson_expose"
TEMP_PREFIX = "ffjson-inception"

# `go run` only accepts files ending in .go
LAUNCHER_SUFFIX = ".go"


def derive_bridge_path(input_path: str) -> str:
    """Path of the bridge file for an input file.

    ``models/foo.go`` → ``models/foo_ffjson_expose.go``
    """
    stem, ext = os.path.splitext(input_path)
    return f"{stem}{BRIDGE_SUFFIX}{ext}"


def emit_bridge(path: str, content: bytes) -> None:
    """Create (or truncate) the bridge file and write ``content``.

    Raises:
        FileError: The file could not be created or written.
    """
    try:
        with open(path, "wb") as f:
            f.write(content)
    except OSError as e:
        raise FileError(path, f"Cannot write bridge file ({e.strerror or e})") from e
    logger.debug("Wrote bridge file %s (%d bytes)", path, len(content))


def create_temp_dir(parent_dir: str) -> str:
    """Create a uniquely named temporary directory under ``parent_dir``.

    Raises:
        FileError: The directory could not be created.
    """
    try:
        return tempfile.mkdtemp(prefix=TEMP_PREFIX, dir=parent_dir)
    except OSError as e:
        raise FileError(parent_dir, f"Cannot create temp directory ({e.strerror or e})") from e


def emit_launcher(temp_dir: str, content: bytes) -> str:
    """Write ``content`` to a uniquely named ``.go`` file inside ``temp_dir``.

    Returns:
        The launcher file path.

    Raises:
        FileError: The file could not be created or written.
    """
    try:
        fd, path = tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=LAUNCHER_SUFFIX, dir=temp_dir)
    except OSError as e:
        raise FileError(temp_dir, f"Cannot create launcher file ({e.strerror or e})") from e

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
    except OSError as e:
        raise FileError(path, f"Cannot write launcher file ({e.strerror or e})") from e

    logger.debug("Wrote launcher %s (%d bytes)", path, len(content))
    return path
