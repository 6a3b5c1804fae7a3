"""
Datasets API - dataset metadata search.

Integration:
    from datasets_api import get_datasets_triggers
"""

from .service import DatasetsService
from .triggers import get_datasets_triggers

__version__ = "1.0.0"
__all__ = [
    "DatasetsService",
    "get_datasets_triggers"
]
