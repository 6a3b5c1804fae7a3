"""
CHELSA API - CHELSA climatologies at 30 arc seconds, present and projected.

Integration:
    from chelsa_api import get_chelsa_triggers
"""

from .service import ChelsaService
from .triggers import get_chelsa_triggers

__version__ = "1.0.0"
__all__ = [
    "ChelsaService",
    "get_chelsa_triggers"
]
