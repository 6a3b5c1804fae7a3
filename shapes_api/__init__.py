"""
Unit Shapes API - shape records through the Shapes collection and shape view.

Integration:
    from shapes_api import get_shapes_triggers
"""

from .service import ShapesService
from .triggers import get_shapes_triggers

__version__ = "1.0.0"
__all__ = [
    "ShapesService",
    "get_shapes_triggers"
]
