"""
Artifact janitor — remove everything an inception cycle left on disk.

Runs after every run(), and after any failure inside generate().  It is
best-effort and idempotent: files already gone are fine, and other
failures are logged but never raised, so they cannot mask the error
that ended the cycle.

A bridge file that survives cleanup gets compiled into every later
build of the target package, so failing to remove it is logged at
ERROR level.
"""

from __future__ import annotations

import logging
import os
import shutil
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from inception.core.engine.session import InceptionSession

logger = logging.getLogger(__name__)


def cleanup(session: InceptionSession) -> bool:
    """Delete the launcher, the bridge file and the temp directory.

    Returns:
        True if every artifact is gone, False if something was left behind.
    """
    clean = True

    if session.launcher_path:
        if _remove_file(session.launcher_path, "launcher", logging.WARNING):
            session.launcher_path = None
        else:
            clean = False

    if session.bridge_created:
        if _remove_file(session.bridge_path, "bridge", logging.ERROR):
            session.bridge_created = False
        else:
            clean = False

    if session.temp_dir:
        if _remove_dir(session.temp_dir):
            session.temp_dir = None
        else:
            clean = False

    return clean


def _remove_file(path: str, label: str, level: int) -> bool:
    try:
        os.remove(path)
    except FileNotFoundError:
        return True
    except OSError as e:
        logger.log(level, "Could not remove %s file %s (%s); please delete it", label, path, e)
        return False
    logger.debug("Removed %s file %s", label, path)
    return True


def _remove_dir(path: str) -> bool:
    # the toolchain may have left files in it, so remove recursively
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        return True
    except OSError as e:
        logger.warning("Could not remove temp directory %s: %s", path, e)
        return False
    logger.debug("Removed temp directory %s", path)
    return True
