"""Synonym analysis for fully-qualified symbol names.

A fully-qualified name such as ``com.example.HashMap`` is indexed verbatim
and additionally under a deliberately redundant set of alternates, so that
the partial and abbreviated forms people type into a "go to symbol" box
still hit:

- camel-case initials of the simple name (``HM``)
- every ``$``-separated fragment of the simple name (``Foo$Bar`` gives
  ``Foo`` and ``Bar``)
- the short-package form (``c.e.HashMap``), the same with a space before
  the name (``c.e HashMap``) and with spaces throughout (``c e HashMap``)
- the simple name itself, and a lowercase copy of everything above

Alternates of a single character are dropped, as is the term itself.
"""

import re
from typing import Iterable, Iterator, List, Set, Tuple

from whoosh.analysis import Filter, IDTokenizer, Token

_SIGNATURE = re.compile(r"\(.*")


def _cases(text: str) -> List[str]:
    return [text, text.lower()]


def camel_fragment(name: str) -> str:
    """Return the uppercase letters of ``name`` (``HashMap`` -> ``HM``)."""
    return "".join(c for c in name if c.isupper())


def split_fqn(term: str) -> Tuple[List[str], str]:
    """Split a name into its package path and simple name.

    Any parenthesized signature suffix is removed first. Trailing empty
    segments are ignored, so ``a.b.`` splits like ``a.b``.
    """
    parts = _SIGNATURE.sub("", term).split(".")
    while len(parts) > 1 and not parts[-1]:
        parts.pop()
    return parts[:-1], parts[-1]


def short_package_form(path: Iterable[str], name: str) -> str:
    """Abbreviate every package segment to its first character.

    ``(["com", "example"], "Foo")`` gives ``c.e.Foo``; with no package the
    result is just the name.
    """
    initials = [segment[:1] for segment in path]
    return ".".join(initials + [name])


def fqn_synonyms(term: str) -> Set[str]:
    """Compute the alternate tokens ``term`` should also be searchable by.

    Args:
        term: Fully-qualified name, optionally with a ``(...)`` suffix

    Returns:
        Set[str]: Alternates of two characters or more, never ``term``
    """
    path, name = split_fqn(term)
    short_pkg = short_package_form(path, name)

    candidates = {term, name, camel_fragment(name)}
    for inner in name.split("$"):
        candidates.update(_cases(inner))
    candidates.update([short_pkg, short_pkg.replace(".", " ")])
    if path:
        initials = ".".join(segment[:1] for segment in path)
        candidates.add(f"{initials} {name}")

    synonyms = set()
    for candidate in candidates:
        if len(candidate) > 1:
            synonyms.update(_cases(candidate))
    synonyms.discard(term)
    return synonyms


class FqnSynonymFilter(Filter):
    """Emit each token verbatim followed by its :func:`fqn_synonyms`.

    Expansion only happens while indexing; query-time text passes through
    untouched.
    """

    def __call__(self, tokens: Iterator[Token]) -> Iterator[Token]:
        for t in tokens:
            yield t
            if t.mode == "query":
                continue
            original = t.text
            for synonym in sorted(fqn_synonyms(original)):
                t.text = synonym
                yield t


def FqnAnalyzer():
    """Analyzer for the ``fqn`` field: whole value as one token, plus synonyms."""
    return IDTokenizer() | FqnSynonymFilter()
