# ============================================================================
# MODULE CONTEXT - SEARCH QUERY FILTERS
# ============================================================================
# STATUS: Core Infrastructure - AQL filter clauses
# PURPOSE: Reusable SEARCH/FILTER clauses over a document bound as `doc`
# EXPORTS: filter_compare, filter_range, filter_date_range, filter_integer_range,
#          filter_list, filter_lists, filter_pattern, filter_tokens
# DEPENDENCIES: infrastructure.aql
# ============================================================================

"""
Search Query Filters

Each function returns one AQL condition that references the search document
as `doc`, or None when the input produces no condition. Callers combine the
conditions with AQL.join(), typically with " AND " or " OR ".

Property names are always bound, never inlined. A dotted property addresses
a nested attribute:

    filter_tokens("_title.iso_639_3_eng", "forest")
    # ANALYZER(doc[@value0][@value1] IN TOKENS(@value2, @value3), @value3)

Date: 14 OCT 2026
"""

from typing import Any, Dict, List, Optional

from .aql import AQL, aql, literal

COMPARE_OPERATORS = {
    "EQ": "==",
    "NE": "!=",
    "GT": ">",
    "LT": "<",
    "GE": ">=",
    "LE": "<=",
}

DEFAULT_ANALYZER = "text_en"


def document_attribute(prop: str) -> AQL:
    """Bound attribute access on `doc`, nested for dotted names."""
    return literal("doc") + AQL.join(
        (aql("[${key}]", key=key) for key in prop.split(".")),
        separator=""
    )


def _present(value: Dict[str, Any], key: str) -> bool:
    return value.get(key) is not None


def filter_compare(prop: str, value: Any, operator: str = "EQ") -> Optional[AQL]:
    """
    Compare a property to a value.

    Args:
        prop: Property name
        value: Search value
        operator: EQ, NE, GT, LT, GE or LE

    Returns:
        `doc.prop <op> value`, or None for an unknown operator
    """
    symbol = COMPARE_OPERATORS.get(operator)
    if symbol is None:
        return None
    return aql(
        "${attribute} ${op} ${value}",
        attribute=document_attribute(prop),
        op=literal(symbol),
        value=value
    )


def filter_range(prop: str, value: Dict[str, Any]) -> AQL:
    """
    Range filter using IN_RANGE.

    `value` holds min, max, min_inc and max_inc; the *_inc flags are true
    to include the bound.
    """
    return aql(
        "IN_RANGE(${attribute}, ${min}, ${max}, ${min_inc}, ${max_inc})",
        attribute=document_attribute(prop),
        min=value.get("min"),
        max=value.get("max"),
        min_inc=value.get("min_inc", True),
        max_inc=value.get("max_inc", True)
    )


def filter_date_range(value: Dict[str, Any]) -> Optional[AQL]:
    """
    Match records covering a date range.

    Applies to records with top level std_date_start and std_date_end
    fields. Either bound may be omitted; bounds are inclusive.
    """
    filters: List[AQL] = []
    if _present(value, "std_date_start"):
        filters.append(aql("doc.std_date_start >= ${start}", start=value["std_date_start"]))
    if _present(value, "std_date_end"):
        filters.append(aql("doc.std_date_end <= ${end}", end=value["std_date_end"]))

    if not filters:
        return None
    return AQL.join(filters, " AND ")


def filter_integer_range(prop: str, value: Dict[str, Any]) -> Optional[AQL]:
    """
    Inclusive min/max filter on a scalar property.

    Either bound may be omitted. Works for any ordered value, the
    submission date strings included.
    """
    attribute = document_attribute(prop)
    filters: List[AQL] = []
    if _present(value, "min"):
        filters.append(aql("${attribute} >= ${min}", attribute=attribute, min=value["min"]))
    if _present(value, "max"):
        filters.append(aql("${attribute} <= ${max}", attribute=attribute, max=value["max"]))

    if not filters:
        return None
    return AQL.join(filters, " AND ")


def filter_list(prop: str, values: List[Any]) -> AQL:
    """Scalar property matching any of the given values."""
    return aql(
        "${attribute} IN ${values}",
        attribute=document_attribute(prop),
        values=values
    )


def filter_lists(prop: str, value: Dict[str, Any], do_all: bool = False) -> AQL:
    """
    Array property matched against an array of items.

    Args:
        prop: Property name
        value: Structure with the `items` list
        do_all: True to require all items, False to match any
    """
    quantifier = "ALL" if do_all else "ANY"
    return aql(
        "${items} ${quantifier} IN ${attribute}",
        items=value["items"],
        quantifier=literal(quantifier),
        attribute=document_attribute(prop)
    )


def filter_pattern(prop: str, value: str) -> AQL:
    """Wildcard pattern match using LIKE."""
    return aql(
        "LIKE(${attribute}, ${pattern})",
        attribute=document_attribute(prop),
        pattern=value
    )


def filter_tokens(prop: str, value: str, analyzer: str = DEFAULT_ANALYZER) -> AQL:
    """Space delimited keywords matched through a text analyzer."""
    return aql(
        "ANALYZER(${attribute} IN TOKENS(${value}, ${analyzer}), ${analyzer})",
        attribute=document_attribute(prop),
        value=value,
        analyzer=analyzer
    )
