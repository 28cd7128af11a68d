"""
bayesindex.model
================

Model-facing layer: family metadata, the introspection protocol, and
default ROPE selection.

Includes:
- introspection: ModelInfo, ModelIntrospector, PosteriorModel
- rope_range: rope_range, select_rope_range
"""

from .introspection import ModelInfo, ModelIntrospector, PosteriorModel
from .rope_range import rope_range, select_rope_range

__all__ = [
    "ModelInfo",
    "ModelIntrospector",
    "PosteriorModel",
    "rope_range",
    "select_rope_range",
]
