"""
Units API - genetic conservation unit lookups over UnitShapes.

Integration:
    from units_api import get_units_triggers
"""

from .service import UnitsService
from .triggers import get_units_triggers

__version__ = "1.0.0"
__all__ = [
    "UnitsService",
    "get_units_triggers"
]
