"""Tests for symbol query construction."""

import pytest
from whoosh.query import And, AndNot, DisjunctionMax, Or, Prefix, Term, Wildcard

from symbol_index.search.query_builder import (
    boosted_prefix_query,
    camel_case_pattern,
    class_or_method_query,
    class_query,
    classes_methods_query,
    file_query,
    type_query,
)
from symbol_index.search.index_schema import FqnIndexType


class TestCamelCasePattern:
    @pytest.mark.parametrize(
        "query, pattern",
        [
            ("HsMp", "Hs*Mp*"),
            ("HashMap", "Hash*Map*"),
            ("HM", "H*M*"),
            ("hashmap", "hashmap*"),
            ("fooBar", "foo*Bar*"),
            ("", "*"),
        ],
    )
    def test_wildcard_before_inner_capitals(self, query, pattern):
        assert camel_case_pattern(query) == pattern


class TestBoostedPrefixQuery:
    """Test cases for boosted_prefix_query."""

    def test_single_term_form(self):
        query = boosted_prefix_query("Foo")

        assert isinstance(query, Or)
        assert query.subqueries == [Prefix("fqn", "Foo"), Term("fqn", "Foo")]

    def test_camel_augmented_form(self):
        query = boosted_prefix_query("HsMp", camel_case_pattern("HsMp"))

        assert query.subqueries == [
            Prefix("fqn", "HsMp"),
            Term("fqn", "HsMp"),
            Wildcard("fqn", "Hs*Mp*"),
        ]

    def test_other_field(self):
        query = boosted_prefix_query("x", fieldname="file")

        assert all(q.fieldname == "file" for q in query.subqueries)


class TestTypeFilteredQueries:
    def test_class_query_requires_class_tag(self):
        query = class_query("Foo")

        assert isinstance(query, And)
        name_query, type_filter = query.subqueries
        assert Wildcard("fqn", "Foo*") in name_query.subqueries
        assert type_filter == Term("TYPE", "ClassIndex")

    def test_class_or_method_query_excludes_fields(self):
        query = class_or_method_query("Foo")

        name_query, type_filter = query.subqueries
        assert isinstance(type_filter, AndNot)
        assert type_filter.a == Or(
            [type_query(FqnIndexType.CLASS), type_query(FqnIndexType.METHOD)]
        )
        assert type_filter.b == Term("TYPE", "FieldIndex")

    def test_classes_methods_query_is_disjunction_max(self):
        query = classes_methods_query(["Foo", "bar"])

        assert isinstance(query, DisjunctionMax)
        assert query.tiebreak == 0.0
        assert query.subqueries == [
            class_or_method_query("Foo"),
            class_or_method_query("bar"),
        ]

    def test_empty_query_still_builds(self):
        query = class_query("")

        assert query.subqueries[0].subqueries[0] == Prefix("fqn", "")


def test_file_query_is_exact_term():
    assert file_query("file:///src/Foo.scala") == Term(
        "file", "file:///src/Foo.scala"
    )
