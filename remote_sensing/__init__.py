"""
Remote Sensing API - time series of remote sensing variables per unit shape.

Integration:
    from remote_sensing import get_remote_sensing_triggers
"""

from .service import RemoteSensingService
from .triggers import get_remote_sensing_triggers

__version__ = "1.0.0"
__all__ = [
    "RemoteSensingService",
    "get_remote_sensing_triggers"
]
