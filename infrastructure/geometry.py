"""
GeoJSON geometry helpers.

Geometry hashes key the shape collections: the hash of a geometry is the MD5
of its compact JSON text with `type` before `coordinates`. Integral floats
are written as integers so that 12.0 and 12 hash the same, matching the
JSON produced by the loaders that computed the stored keys.
"""

import hashlib
import json
from typing import Any, Dict, List


def geo_point(lat: float, lon: float) -> Dict[str, Any]:
    """GeoJSON Point; coordinates are [longitude, latitude]."""
    return {"type": "Point", "coordinates": [lon, lat]}


def polygon(coordinates: List[Any]) -> Dict[str, Any]:
    return {"type": "Polygon", "coordinates": coordinates}


def multi_polygon(coordinates: List[Any]) -> Dict[str, Any]:
    return {"type": "MultiPolygon", "coordinates": coordinates}


def _normalize(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, (list, tuple)):
        return [_normalize(item) for item in value]
    if isinstance(value, dict):
        return {key: _normalize(item) for key, item in value.items()}
    return value


def geometry_hash(geometry: Dict[str, Any]) -> str:
    """
    MD5 hex digest of a GeoJSON geometry.

    Args:
        geometry: GeoJSON geometry with `type` and `coordinates`

    Returns:
        32 character lowercase hex string
    """
    ordered = {"type": geometry["type"], "coordinates": _normalize(geometry["coordinates"])}
    text = json.dumps(ordered, separators=(",", ":"))
    return hashlib.md5(text.encode("utf-8")).hexdigest()
