"""Query construction for symbol name search.

Raw user input is never tokenized. Each query string is matched against
the ``fqn`` field three ways at once:

- as a prefix of any indexed token (``Has`` finds ``HashMap``)
- as an exact token, which scores above a bare prefix hit
- as a camel-case wildcard, where each inner capital starts a new hump
  (``HaMa`` becomes ``Ha*Ma*`` and finds ``HashMap``; ``HsMp`` becomes
  ``Hs*Mp*``, which does not: the letters typed for each hump must start
  the matching hump of the name)

Type filters then restrict the hits by the ``TYPE`` discriminator.
"""

import re
from typing import Iterable, Optional

from whoosh.query import (
    And,
    AndNot,
    DisjunctionMax,
    Or,
    Prefix,
    Query,
    Term,
    Wildcard,
)

from .index_schema import FILE_FIELD, FQN_FIELD, TYPE_FIELD, FqnIndexType

_INNER_CAPITAL = re.compile(r"(?<!^)([A-Z])")


def camel_case_pattern(query: str) -> str:
    """Wildcard pattern matching camel humps aligned with ``query``'s capitals."""
    return _INNER_CAPITAL.sub(r"*\1", query) + "*"


def type_query(index_type: FqnIndexType) -> Query:
    return Term(TYPE_FIELD, index_type.value)


def boosted_prefix_query(
    text: str,
    camel_case_text: Optional[str] = None,
    fieldname: str = FQN_FIELD,
) -> Query:
    """Prefix query that ranks exact matches at least as high as prefixes.

    Args:
        text: Literal query text
        camel_case_text: Optional wildcard pattern added as a third clause
        fieldname: Field to search

    Returns:
        Query: Disjunction of the prefix, exact and optional wildcard clauses
    """
    clauses = [Prefix(fieldname, text), Term(fieldname, text)]
    if camel_case_text is not None:
        clauses.append(Wildcard(fieldname, camel_case_text))
    return Or(clauses)


def symbol_name_query(text: str) -> Query:
    """Camel-augmented boosted prefix query on the ``fqn`` field."""
    return boosted_prefix_query(text, camel_case_pattern(text))


def class_query(text: str) -> Query:
    """Match ``text`` against class entries only."""
    return And([symbol_name_query(text), type_query(FqnIndexType.CLASS)])


def class_or_method_query(text: str) -> Query:
    """Match ``text`` against classes and methods; fields never qualify."""
    type_filter = AndNot(
        Or(
            [
                type_query(FqnIndexType.CLASS),
                type_query(FqnIndexType.METHOD),
            ]
        ),
        type_query(FqnIndexType.FIELD),
    )
    return And([symbol_name_query(text), type_filter])


def classes_methods_query(terms: Iterable[str]) -> Query:
    """Combine one class-or-method query per term, scored by the best match.

    The tie-break factor is zero, so matching several terms ranks no higher
    than matching the single best one.
    """
    return DisjunctionMax([class_or_method_query(t) for t in terms], tiebreak=0.0)


def file_query(uri: str) -> Query:
    """Exact match on the ``file`` field, used to delete a file's entries."""
    return Term(FILE_FIELD, uri)
