# ============================================================================
# MODULE CONTEXT - AQL COMPOSITION
# ============================================================================
# STATUS: Core Infrastructure - Query composition
# PURPOSE: Compose AQL query text and bind variables from reusable fragments
# EXPORTS: AQL, AQLQuery, Collection, aql, literal
# DEPENDENCIES: re, dataclasses (stdlib only)
# PATTERNS: Composable fragments, bind parameters for all user values
# ============================================================================

"""
AQL Composition

Query fragments that keep user input out of the query text. A fragment is a
sequence of raw AQL text and bind placeholders; fragments nest, and only
render() decides the final bind variable names.

    from infrastructure.aql import aql, Collection

    query = aql(
        "FOR doc IN ${coll} FILTER doc._key == ${key} RETURN doc",
        coll=Collection("Shapes"),
        key=geometry_hash
    ).render()

    query.query      # 'FOR doc IN @@value0 FILTER doc._key == @value1 RETURN doc'
    query.bind_vars  # {'@value0': 'Shapes', 'value1': '...'}

Template placeholders use ${name}. A parameter can be:
- an AQL fragment: embedded as-is, its binds carried along
- a Collection: bound as a collection parameter (@@valueN)
- anything else: bound as a value parameter (@valueN)

Date: 14 OCT 2026
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

_PLACEHOLDER = re.compile(r"\$\{(\w+)\}")


class Collection:
    """Collection name bound as a collection parameter."""

    def __init__(self, name: str):
        if not name:
            raise ValueError("Collection name must not be empty")
        self.name = name

    def __repr__(self) -> str:
        return f"Collection({self.name!r})"


class _Value:
    """A single value bind. Identity decides bind sharing."""

    __slots__ = ("value",)

    def __init__(self, value: Any):
        self.value = value


@dataclass(frozen=True)
class AQLQuery:
    """Rendered query ready for db.aql.execute()."""
    query: str
    bind_vars: Dict[str, Any] = field(default_factory=dict)


_Token = Union[str, _Value, Collection]


class AQL:
    """
    An AQL fragment: raw text interleaved with bind placeholders.

    Fragments are immutable once built. Combine them with aql() templates,
    AQL.join() or the + operator.
    """

    def __init__(self, tokens: Optional[List[_Token]] = None):
        self._tokens: List[_Token] = list(tokens or [])

    @classmethod
    def join(cls, fragments: Iterable[Optional["AQL"]], separator: str = "\n") -> "AQL":
        """
        Join fragments with a raw separator, skipping None and empty fragments.

        Args:
            fragments: Fragments to join
            separator: Raw AQL text placed between fragments

        Returns:
            Joined fragment (empty when nothing remains)
        """
        tokens: List[_Token] = []
        for fragment in fragments:
            if not fragment:
                continue
            if tokens and separator:
                tokens.append(separator)
            tokens.extend(fragment._tokens)
        return cls(tokens)

    def __add__(self, other: "AQL") -> "AQL":
        if not isinstance(other, AQL):
            return NotImplemented
        return AQL(self._tokens + other._tokens)

    def __bool__(self) -> bool:
        return any(
            not isinstance(token, str) or token.strip()
            for token in self._tokens
        )

    def __repr__(self) -> str:
        return f"AQL({self.render().query!r})"

    def render(self) -> AQLQuery:
        """
        Render the fragment into query text and bind variables.

        Bind names are numbered in order of first appearance. A value bind
        referenced twice and a collection named twice are each bound once.
        """
        parts: List[str] = []
        bind_vars: Dict[str, Any] = {}
        value_names: Dict[int, str] = {}
        collection_names: Dict[str, str] = {}

        for token in self._tokens:
            if isinstance(token, str):
                parts.append(token)
            elif isinstance(token, Collection):
                name = collection_names.get(token.name)
                if name is None:
                    name = f"@value{len(value_names) + len(collection_names)}"
                    collection_names[token.name] = name
                    bind_vars[name] = token.name
                parts.append(f"@{name}")
            else:
                name = value_names.get(id(token))
                if name is None:
                    name = f"value{len(value_names) + len(collection_names)}"
                    value_names[id(token)] = name
                    bind_vars[name] = token.value
                parts.append(f"@{name}")

        return AQLQuery(query="".join(parts), bind_vars=bind_vars)


def aql(template: str, **params: Any) -> AQL:
    """
    Build a fragment from a ${name} template.

    Args:
        template: AQL text with ${name} placeholders
        **params: Placeholder values (AQL fragments, Collections or plain values)

    Returns:
        AQL fragment

    Raises:
        KeyError: If the template names a parameter that was not given
    """
    tokens: List[_Token] = []
    values: Dict[str, _Value] = {}
    position = 0

    for match in _PLACEHOLDER.finditer(template):
        if match.start() > position:
            tokens.append(template[position:match.start()])
        position = match.end()

        name = match.group(1)
        if name not in params:
            raise KeyError(f"Missing AQL template parameter: {name}")
        param = params[name]

        if isinstance(param, AQL):
            tokens.extend(param._tokens)
        elif isinstance(param, Collection):
            tokens.append(param)
        else:
            if name not in values:
                values[name] = _Value(param)
            tokens.append(values[name])

    if position < len(template):
        tokens.append(template[position:])

    return AQL(tokens)


def literal(text: str) -> AQL:
    """
    Trusted raw AQL text: keywords and generated attribute paths only.

    Never pass user input here.
    """
    return AQL([text])
