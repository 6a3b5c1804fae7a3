"""
WorldClim API - WorldClim climate cells with selection and aggregation.

Integration:
    from worldclim_api import get_worldclim_triggers
"""

from .service import WorldClimService
from .triggers import get_worldclim_triggers

__version__ = "1.0.0"
__all__ = [
    "WorldClimService",
    "get_worldclim_triggers"
]
