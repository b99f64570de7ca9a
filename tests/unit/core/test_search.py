"""Tests for in-document search."""

from __future__ import annotations

from iam_lens.core.search import LineSearch, SearchMatch, find_matches

DOCUMENT = "Allow s3\nDeny ec2\nAllow s3 again"


def test_matches_are_case_insensitive_per_line():
    matches = find_matches(DOCUMENT, "allow")
    assert matches == [
        SearchMatch(line=0, start=0, end=5, text="Allow"),
        SearchMatch(line=2, start=0, end=5, text="Allow"),
    ]


def test_match_count_equals_occurrences():
    text = "aaa\nbab\n\naXa"
    assert len(find_matches(text, "a")) == 6


def test_matches_do_not_overlap():
    assert [m.start for m in find_matches("aaaa", "aa")] == [0, 2]


def test_special_characters_are_literal():
    text = '"Action": "s3:*"\n"Resource": "*"'
    matches = find_matches(text, "s3:*")
    assert [(m.line, m.text) for m in matches] == [(0, "s3:*")]
    assert find_matches("a.c\nabc", ".") == [SearchMatch(0, 1, 2, ".")]


def test_query_is_trimmed():
    assert len(find_matches(DOCUMENT, "  deny  ")) == 1


def test_empty_and_overlong_queries_yield_nothing():
    assert find_matches(DOCUMENT, "") == []
    assert find_matches(DOCUMENT, "   ") == []
    assert find_matches("x" * 200, "x" * 101) == []


class TestLineSearch:
    def test_update_selects_first_match(self):
        search = LineSearch()
        assert search.update("allow", DOCUMENT) is True
        assert search.current == 0
        assert search.current_match.line == 0

    def test_next_wraps(self):
        search = LineSearch()
        search.update("allow", DOCUMENT)
        search.next()
        assert search.current == 1
        search.next()
        assert search.current == 0

    def test_previous_wraps(self):
        search = LineSearch()
        search.update("allow", DOCUMENT)
        search.previous()
        assert search.current == 1
        search.previous()
        assert search.current == 0

    def test_navigation_without_matches_is_noop(self):
        search = LineSearch()
        search.update("missing", DOCUMENT)
        assert search.next() is False
        assert search.previous() is False
        assert search.current == -1
        assert search.current_match is None

    def test_status(self):
        search = LineSearch()
        assert search.status() == ""
        search.update("allow", DOCUMENT)
        assert search.status() == "(1/2)"
        search.update("zzz", DOCUMENT)
        assert search.status() == "(no matches)"

    def test_clear(self):
        search = LineSearch()
        search.update("allow", DOCUMENT)
        search.clear()
        assert (search.query, search.matches, search.current) == ("", [], -1)

    def test_matches_on_line(self):
        search = LineSearch()
        search.update("s3", DOCUMENT)
        assert [m.line for m in search.matches_on_line(2)] == [2]
        assert search.matches_on_line(1) == []
