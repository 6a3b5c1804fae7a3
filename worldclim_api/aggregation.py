"""
Aggregation of WorldClim properties.

The selected records' properties share one layout: nested objects of
numeric variables, with monthly series as lists. Aggregation walks the
layout and reduces every numeric leaf across records; list elements are
reduced by position.
"""

import statistics
from numbers import Real
from typing import Any, Callable, Dict, List, Optional, Sequence

REDUCERS: Dict[str, Callable[[Sequence[float]], float]] = {
    "MIN": min,
    "MAX": max,
    "AVG": statistics.fmean,
    "STD": statistics.pstdev,
    "VAR": statistics.pvariance,
}


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _reduce(values: List[Any], reducer: Callable[[Sequence[float]], float]) -> Optional[Any]:
    """Reduce the values found at one position of the layout, None when nothing numeric is there."""
    objects = [value for value in values if isinstance(value, dict)]
    if objects:
        keys = dict.fromkeys(key for obj in objects for key in obj)
        result: Dict[str, Any] = {}
        for key in keys:
            reduced = _reduce([obj.get(key) for obj in objects], reducer)
            if reduced is not None:
                result[key] = reduced
        return result

    series = [value for value in values if isinstance(value, list)]
    if series:
        length = max(len(items) for items in series)
        return [
            _reduce([items[index] for items in series if index < len(items)], reducer)
            for index in range(length)
        ]

    numbers = [value for value in values if _is_number(value)]
    if not numbers:
        return None
    return reducer(numbers)


def aggregate_properties(properties: List[Dict[str, Any]], operation: str) -> Dict[str, Any]:
    """
    Aggregate the properties of a selection.

    Args:
        properties: `properties` of each selected record
        operation: MIN, AVG, MAX, STD or VAR

    Returns:
        {'count': number of records, 'properties': aggregated layout}

    Raises:
        ValueError: For an unknown operation
    """
    reducer = REDUCERS.get(operation)
    if reducer is None:
        raise ValueError(f"Unknown aggregate: {operation}")

    aggregated = _reduce(properties, reducer) if properties else None
    return {
        "count": len(properties),
        "properties": aggregated or {},
    }
