"""
Descriptor models — the metadata fed into one inception cycle.

A TypeDescriptor pairs a Go type name with its ffjson generation
options.  The GenerationContext bundles the descriptors with the
paths and identity both templates are rendered from.
"""

from __future__ import annotations

import re
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Scalar values a StructOptions field can be rendered as
OptionValue = Union[bool, int, str]

DEFAULT_LIBRARY = "github.com/maxproc/ffjson"

_GO_IDENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_GO_EXPORTED = re.compile(r"[A-Z][A-Za-z0-9_]*")


class TypeDescriptor(BaseModel):
    """A Go type name plus the options ffjson should generate it with."""

    model_config = ConfigDict(frozen=True)

    name: str
    options: dict[str, OptionValue] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not _GO_IDENT.fullmatch(value):
            raise ValueError(f"not a Go identifier: {value!r}")
        return value

    @field_validator("options")
    @classmethod
    def _check_options(cls, value: dict[str, OptionValue]) -> dict[str, OptionValue]:
        for key in value:
            if not _GO_EXPORTED.fullmatch(key):
                raise ValueError(f"option name must be an exported Go identifier: {key!r}")
        return value


class GenerationContext(BaseModel):
    """Everything the launcher and bridge templates are rendered from.

    Built once per cycle by InceptionSession.generate().
    """

    model_config = ConfigDict(frozen=True)

    type_descriptors: tuple[TypeDescriptor, ...] = ()
    import_identity: str
    package_name: str
    input_path: str
    output_path: str
    reset_fields: bool = False
    library_import: str = DEFAULT_LIBRARY
