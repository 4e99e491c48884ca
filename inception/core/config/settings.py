"""
Toolchain settings — the only place the process environment is read.

    INCEPTION_GO_CMD     Go executable             (default: go)
    INCEPTION_GOFMT_CMD  gofmt executable          (default: gofmt)
    INCEPTION_LIBRARY    ffjson import path        (default: github.com/maxproc/ffjson)
    GOPATH               fallback search roots for import resolution

Everything downstream receives these values explicitly.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field

from inception.adapters.go import GoToolchain
from inception.core.models.descriptor import DEFAULT_LIBRARY
from inception.core.services.import_resolver import split_search_roots

SEARCH_ROOTS_VAR = "GOPATH"


class ToolchainSettings(BaseModel):
    """How to reach the Go toolchain and the ffjson library."""

    go_command: str = "go"
    gofmt_command: str = "gofmt"
    library_import: str = DEFAULT_LIBRARY
    search_roots: list[str] = Field(default_factory=list)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ToolchainSettings:
        env = os.environ if environ is None else environ
        return cls(
            go_command=env.get("INCEPTION_GO_CMD") or "go",
            gofmt_command=env.get("INCEPTION_GOFMT_CMD") or "gofmt",
            library_import=env.get("INCEPTION_LIBRARY") or DEFAULT_LIBRARY,
            search_roots=split_search_roots(env.get(SEARCH_ROOTS_VAR)),
        )

    def merged(self, overrides: Mapping[str, object]) -> ToolchainSettings:
        """Copy with manifest-level overrides applied (None values ignored)."""
        update = {k: v for k, v in overrides.items() if v is not None}
        return self.model_validate({**self.model_dump(), **update})

    def build_toolchain(self) -> GoToolchain:
        return GoToolchain(go_command=self.go_command, gofmt_command=self.gofmt_command)
