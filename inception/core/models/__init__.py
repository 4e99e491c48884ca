"""
Domain models — Pydantic types for an inception cycle.

    from inception.core.models import TypeDescriptor, GenerationContext
"""

from inception.core.models.descriptor import (
    DEFAULT_LIBRARY,
    GenerationContext,
    OptionValue,
    TypeDescriptor,
)

__all__ = [
    "DEFAULT_LIBRARY",
    "GenerationContext",
    "OptionValue",
    "TypeDescriptor",
]
