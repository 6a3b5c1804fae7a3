"""
AQL builder for dataset search through the dataset view.
"""

from typing import Any, Callable, Dict, List, Optional

from infrastructure.aql import AQL, Collection, aql
from infrastructure.query_filters import (
    filter_date_range,
    filter_integer_range,
    filter_list,
    filter_lists,
    filter_pattern,
    filter_tokens,
)

LIST_FIELDS = ("_key", "std_project", "std_dataset_group", "_collection", "_subject")
ITEM_FIELDS = (
    "std_terms", "std_terms_key", "std_terms_summary", "std_terms_quant",
    "_classes", "_domain", "_tag",
)

_FILTERS: Dict[str, Callable[[str, Any], Optional[AQL]]] = {
    **{key: filter_list for key in LIST_FIELDS},
    **{key: lambda prop, value: filter_lists(prop, value, value.get("doAll", False)) for key in ITEM_FIELDS},
    "std_dataset": filter_pattern,
    "_title": lambda prop, value: filter_tokens(f"{prop}.iso_639_3_eng", value),
    "_description": lambda prop, value: filter_tokens(f"{prop}.iso_639_3_eng", value),
    "_citation": filter_tokens,
    "species_list": filter_tokens,
    "std_date": lambda prop, value: filter_date_range(value),
    "std_date_submission": filter_integer_range,
    "count": filter_integer_range,
}


def dataset_filters(selection: Dict[str, Any]) -> List[AQL]:
    """Search conditions for the present selection fields, in field order."""
    filters: List[AQL] = []
    for key, value in selection.items():
        build = _FILTERS.get(key)
        if build is None or value is None:
            continue
        condition = build(key, value)
        if condition:
            filters.append(condition)
    return filters


def dataset_query(view: str, selection: Dict[str, Any], op: str = "AND") -> Optional[AQL]:
    """
    Datasets matching a selection.

    Args:
        view: Dataset view name
        selection: DatasetQuery dump by alias, without None values
        op: AND or OR, chaining the conditions

    Returns:
        AQL query, or None when the selection produces no condition
    """
    if op not in ("AND", "OR"):
        raise ValueError(f"Invalid chaining operator: {op}")

    filters = dataset_filters(selection)
    if not filters:
        return None

    return aql(
        "FOR doc IN ${view}\n"
        "    SEARCH ${conditions}\n"
        "RETURN UNSET(doc, '_id', '_rev', '_oldRev')",
        view=Collection(view),
        conditions=AQL.join(filters, f" {op} ")
    )
