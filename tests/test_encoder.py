"""Tests for solrwrap.encoder -- option merging and per-key query encoding."""

from __future__ import annotations

import pytest

from solrwrap.encoder import (
    MORE_LIKE_THIS_DEFAULTS,
    SEARCH_DEFAULTS,
    QueryEncoder,
    encode,
    encode_parameter,
    merge_options,
    solr_name,
    to_pairs,
)


class TestWireExamples:
    def test_defaults_then_caller_options(self) -> None:
        query = encode(SEARCH_DEFAULTS, {"query": "roses", "filterQueries": ["blue", "violet"]})
        assert query == "?wt=json&start=0&rows=10&q=roses&fq=blue&fq=violet"

    def test_overridden_defaults_move_after_remaining_defaults(self) -> None:
        query = encode(
            SEARCH_DEFAULTS,
            {"query": "roses", "filterQueries": ["blue", "violet"], "offset": 0, "limit": 10},
        )
        assert query == "?wt=json&q=roses&fq=blue&fq=violet&start=0&rows=10"

    def test_overriding_format(self) -> None:
        query = encode(SEARCH_DEFAULTS, [("q", "roses"), ("fq", ["blue", "violet"]), ("wt", "xml")])
        assert query == "?start=0&rows=10&q=roses&fq=blue&fq=violet&wt=xml"

    def test_defaults_only(self) -> None:
        assert encode(SEARCH_DEFAULTS) == "?wt=json&q=%2A%3A%2A&start=0&rows=10"


class TestDefaults:
    @pytest.mark.parametrize(
        "options",
        [
            {},
            {"fq": "blue"},
            {"sort": "price asc", "fl": ["id", "name"]},
        ],
    )
    def test_each_default_appears_once(self, options: dict) -> None:
        segments = encode(SEARCH_DEFAULTS, options)[1:].split("&")
        keys = [s.split("=", 1)[0] for s in segments]
        for key in ("wt", "q", "start", "rows"):
            assert keys.count(key) == 1
        assert "wt=json" in segments
        assert "start=0" in segments
        assert "rows=10" in segments

    def test_more_like_this_defaults_enable_mlt(self) -> None:
        assert encode(MORE_LIKE_THIS_DEFAULTS).endswith("&mlt=true")

    def test_idempotent(self) -> None:
        options = [("query", "red roses"), ("fq", ["a", "b"]), ("cursorMark", "AoE+x=")]
        assert encode(SEARCH_DEFAULTS, options) == encode(SEARCH_DEFAULTS, options)


class TestListValues:
    def test_one_segment_per_element_in_order(self) -> None:
        assert encode([], {"fq": ["c", "a", "b"]}) == "?fq=c&fq=a&fq=b"

    def test_empty_list_is_suppressed(self) -> None:
        assert encode(SEARCH_DEFAULTS, {"fq": []}) == "?wt=json&q=%2A%3A%2A&start=0&rows=10"

    def test_tuple_behaves_like_list(self) -> None:
        assert encode([], {"fl": ("id", "score")}) == "?fl=id&fl=score"

    def test_list_of_query_values_uses_query_rule(self) -> None:
        assert encode([], {"q": ["red roses", "tulips"]}) == "?q=red+roses&q=tulips"

    def test_nested_list_fails_fast(self) -> None:
        with pytest.raises(TypeError, match="Nested"):
            encode([], {"fq": [["a"]]})

    def test_none_elements_are_skipped(self) -> None:
        assert encode([], {"fq": ["a", None, "b"]}) == "?fq=a&fq=b"


class TestQueryRule:
    def test_space_becomes_plus(self) -> None:
        assert encode_parameter("q", "red roses") == "q=red+roses"

    def test_reserved_characters_are_percent_encoded(self) -> None:
        assert encode_parameter("q", "title:a&b=c") == "q=title%3Aa%26b%3Dc"

    def test_plus_in_query_is_escaped(self) -> None:
        assert encode_parameter("q", "+must") == "q=%2Bmust"

    def test_non_ascii_is_utf8_encoded(self) -> None:
        assert encode_parameter("q", "café") == "q=caf%C3%A9"

    def test_number_is_stringified(self) -> None:
        assert encode_parameter("q", 42) == "q=42"


class TestCursorMarkRule:
    def test_plus_becomes_percent_2b(self) -> None:
        segment = encode_parameter("cursorMark", "AoE+abc")
        assert segment == "cursorMark=AoE%2Babc"
        assert "+" not in segment
        assert "%20" not in segment

    def test_initial_cursor(self) -> None:
        assert encode_parameter("cursorMark", "*") == "cursorMark=*"

    def test_alias_resolves_to_cursor_rule(self) -> None:
        assert encode([], {"cursor_mark": "a+b="}) == "?cursorMark=a%2Bb="


class TestGenericRule:
    def test_pair_is_uri_encoded(self) -> None:
        assert encode_parameter("fq", "price:[10 TO 20]") == "fq=price:[10%20TO%2020]"

    def test_plus_stays_literal(self) -> None:
        assert encode_parameter("fq", "+color:red") == "fq=+color:red"

    def test_dotted_key(self) -> None:
        assert encode_parameter("suggest.q", "ros es") == "suggest.q=ros%20es"

    def test_percent_is_escaped(self) -> None:
        assert encode_parameter("fl", "a%b") == "fl=a%25b"

    def test_booleans_are_lowercase(self) -> None:
        assert encode_parameter("hl", True) == "hl=true"
        assert encode_parameter("hl", False) == "hl=false"

    def test_float(self) -> None:
        assert encode_parameter("mm", 0.5) == "mm=0.5"

    def test_none_is_not_emitted(self) -> None:
        assert encode_parameter("fq", None) is None
        assert encode([], {"fq": None, "rows": 5}) == "?rows=5"

    def test_non_scalar_raises(self) -> None:
        with pytest.raises(TypeError, match="scalars"):
            encode_parameter("fq", object())  # type: ignore[arg-type]


class TestMerge:
    def test_aliases(self) -> None:
        assert solr_name("query") == "q"
        assert solr_name("suggestDictionary") == "suggest.dictionary"
        assert solr_name("mlt.fl") == "mlt.fl"

    def test_pairs_and_mapping_normalize_the_same(self) -> None:
        assert to_pairs({"limit": 5}) == to_pairs([("limit", 5)]) == [("rows", 5)]

    def test_duplicate_override_keys_are_kept(self) -> None:
        merged = merge_options([("wt", "json")], [("fq", "a"), ("fq", "b")])
        assert merged == [("wt", "json"), ("fq", "a"), ("fq", "b")]
        assert encode([("wt", "json")], [("fq", "a"), ("fq", "b")]) == "?wt=json&fq=a&fq=b"

    def test_alias_overrides_raw_default(self) -> None:
        merged = merge_options(SEARCH_DEFAULTS, {"format": "xml"})
        assert ("wt", "json") not in merged
        assert merged[-1] == ("wt", "xml")

    def test_nothing_at_all(self) -> None:
        assert encode([], None) == "?"


class TestQueryEncoder:
    def test_build_query_uses_bound_defaults(self) -> None:
        encoder = QueryEncoder(SEARCH_DEFAULTS)
        assert encoder.build_query({"query": "roses"}) == "?wt=json&start=0&rows=10&q=roses"

    def test_defaults_are_copied(self) -> None:
        encoder = QueryEncoder(SEARCH_DEFAULTS)
        encoder.defaults.append(("x", 1))
        assert ("x", 1) not in encoder.defaults
