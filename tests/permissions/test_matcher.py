"""
Tests for clause and filter set matching.
"""

import itertools

import pytest

from permsearch.permissions import (
    Filter,
    FilterSet,
    clause_matches,
    decode,
    parse_filter,
    parse_filter_set,
    set_matches,
)


class TestClauseMatches:
    """Single clause matching"""

    def test_all_wildcards_match_any_mode(self):
        """Test that an all-wildcard pattern matches every mode"""
        clause = parse_filter("*********")
        for mode in range(0o1000):
            assert clause_matches(clause, 123, 456, decode(mode))

    def test_owner_mismatch_never_matches(self):
        """Test that a different owner id always fails the clause"""
        perm = decode(0o644)
        for clause in (
            parse_filter("u1000"),
            parse_filter("u1000g0"),
            parse_filter("rw-r--r--u1000"),
            parse_filter("*********u1000g0"),
        ):
            assert not clause_matches(clause, 0, 0, perm)

    def test_group_mismatch_never_matches(self):
        """Test that a different group id fails the clause"""
        assert not clause_matches(parse_filter("g5"), 5, 6, decode(0o777))

    def test_all_present_fields_must_agree(self):
        """Test that owner, group and permissions are combined with AND"""
        clause = parse_filter("rw-r-----u1000g100")
        assert clause_matches(clause, 1000, 100, decode(0o640))
        assert not clause_matches(clause, 1000, 100, decode(0o644))
        assert not clause_matches(clause, 1000, 101, decode(0o640))

    def test_absent_fields_match_anything(self):
        """Test that missing fields place no constraint"""
        assert clause_matches(parse_filter("g7"), 99, 7, decode(0o777))
        assert clause_matches(parse_filter("u99"), 99, 7, decode(0o000))

    def test_partial_wildcards(self):
        """Test that wildcard positions accept either state"""
        clause = parse_filter("rw*r-*---")
        assert clause_matches(clause, 0, 0, decode(0o640))
        assert clause_matches(clause, 0, 0, decode(0o750))
        assert not clause_matches(clause, 0, 0, decode(0o770))
        assert not clause_matches(clause, 0, 0, decode(0o644))

    def test_clause_without_constraints_matches(self):
        """Test that an empty clause matches any entry"""
        assert clause_matches(Filter(), 1, 2, decode(0o600))


class TestSetMatches:
    """OR across the clauses of a FilterSet"""

    def test_any_clause_is_enough(self):
        """Test that one matching clause allows the entry"""
        filter_set = parse_filter_set("rwx------u1000,rwxr-xr-xu0")
        assert set_matches(filter_set, 1000, 1000, decode(0o700))
        assert set_matches(filter_set, 0, 0, decode(0o755))
        assert not set_matches(filter_set, 1000, 1000, decode(0o755))

    @pytest.mark.parametrize(
        "owner,group,mode",
        [(0, 0, 0o755), (1000, 1000, 0o700), (1000, 0, 0o644), (5, 5, 0o000)],
    )
    def test_or_of_clauses_is_order_independent(self, owner, group, mode):
        """Test that clause order does not change the outcome"""
        clauses = [parse_filter(text) for text in ("u1000", "rw-r--r--", "g0", "---------u5")]
        perm = decode(mode)
        expected = any(clause_matches(c, owner, group, perm) for c in clauses)

        for ordering in itertools.permutations(clauses, 2):
            a, b = ordering
            result = set_matches(FilterSet(ordering), owner, group, perm)
            assert result == (
                clause_matches(a, owner, group, perm) or clause_matches(b, owner, group, perm)
            )
        assert set_matches(FilterSet(tuple(clauses)), owner, group, perm) == expected
        assert set_matches(FilterSet(tuple(reversed(clauses))), owner, group, perm) == expected
