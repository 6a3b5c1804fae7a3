"""
Drought Observatory API - European Drought Observatory measurements by point.

Integration:
    from drought_observatory import get_drought_observatory_triggers
"""

from .service import DroughtObservatoryService
from .triggers import get_drought_observatory_triggers

__version__ = "1.0.0"
__all__ = [
    "DroughtObservatoryService",
    "get_drought_observatory_triggers"
]
