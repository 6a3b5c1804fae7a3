"""
Shape Hash API

Computes the geometry hash used as the `_key` of shape records, for a point
or for posted polygon coordinates.

Integration:
    from shape_hash import get_hash_triggers
"""

from .service import ShapeHashService
from .triggers import get_hash_triggers

__version__ = "1.0.0"
__all__ = [
    "ShapeHashService",
    "get_hash_triggers"
]
