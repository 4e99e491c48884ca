"""
Manifest loader — reads inception.yml into a validated Manifest.

    package: models
    input: models/user.go
    output: models/user_ffjson.go     # optional, defaults to <input>_ffjson.go
    reset_fields: false
    import_identity: ""               # optional, resolved when empty
    types:
      - name: User
        options: {SkipDecoder: false, SkipEncoder: false}
    toolchain:                        # optional overrides of the env settings
      go_command: /usr/local/go/bin/go

Relative paths are resolved against the manifest's directory.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from inception.core.errors import InceptionError
from inception.core.models.descriptor import TypeDescriptor

logger = logging.getLogger(__name__)

MANIFEST_FILE = "inception.yml"

OUTPUT_SUFFIX = "_ffjson"


class ConfigError(InceptionError):
    """Raised when the manifest is missing or invalid."""


class ToolchainOverrides(BaseModel):
    go_command: str | None = None
    gofmt_command: str | None = None
    library_import: str | None = None
    search_roots: list[str] | None = None


class Manifest(BaseModel):
    """One generation target: an input file and the types to expose from it."""

    package: str
    input: str
    output: str = ""
    reset_fields: bool = False
    import_identity: str = ""
    types: list[TypeDescriptor] = Field(default_factory=list)
    toolchain: ToolchainOverrides = Field(default_factory=ToolchainOverrides)


def default_output_path(input_path: str) -> str:
    """``foo.go`` → ``foo_ffjson.go``"""
    stem, ext = os.path.splitext(input_path)
    return f"{stem}{OUTPUT_SUFFIX}{ext}"


def find_manifest_file(start_dir: Path | None = None) -> Path | None:
    """Search for inception.yml from ``start_dir`` (default: cwd) upward."""
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / MANIFEST_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_manifest(path: Path | None = None) -> Manifest:
    """Load and validate a manifest.

    Args:
        path: Explicit manifest path. If None, searches upward from cwd.

    Returns:
        Manifest with absolute input and output paths.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_manifest_file()

    if path is None:
        raise ConfigError(f"No {MANIFEST_FILE} found. Specify one with --config.")

    if not path.is_file():
        raise ConfigError(f"Manifest not found: {path}")

    logger.debug("Loading manifest from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        manifest = Manifest.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid manifest {path}: {e}") from e

    base = path.parent.resolve()
    input_path = str(base / manifest.input)
    output_path = str(base / manifest.output) if manifest.output else default_output_path(input_path)

    logger.info("Loaded manifest for %s with %d types", manifest.input, len(manifest.types))
    return manifest.model_copy(update={"input": input_path, "output": output_path})
