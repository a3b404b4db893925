"""
Query-string encoding for Solr request handlers.

Solr's parameter parser expects slightly different encodings depending on
the parameter: the main query ``q`` is form-encoded, ``cursorMark`` tokens
are base64-like and must keep a literal ``+`` distinguishable from a space,
and every other parameter is URI-encoded as a whole ``key=value`` pair.

Usage::

    from solrwrap.encoder import QueryEncoder, SEARCH_DEFAULTS
    QueryEncoder(SEARCH_DEFAULTS).build_query({"query": "roses", "fq": ["blue", "violet"]})
    # '?wt=json&start=0&rows=10&q=roses&fq=blue&fq=violet'
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Callable, Union
from urllib.parse import quote, quote_plus

logger = logging.getLogger(__name__)

Scalar = Union[str, int, float, bool]
OptionValue = Union[Scalar, list, tuple, None]
OptionPairs = list[tuple[str, OptionValue]]
OptionSet = Union[Mapping[str, OptionValue], Iterable[tuple[str, OptionValue]]]

# RFC 3986 reserved characters stay literal when a whole pair is encoded.
_RESERVED = ":/?#[]@!$&'()*+,;="

SEARCH_DEFAULTS: OptionPairs = [("wt", "json"), ("q", "*:*"), ("start", 0), ("rows", 10)]
SUGGEST_DEFAULTS: OptionPairs = list(SEARCH_DEFAULTS)
MORE_LIKE_THIS_DEFAULTS: OptionPairs = SEARCH_DEFAULTS + [("mlt", True)]

ALIASES: dict[str, str] = {
    "query": "q",
    "filter_queries": "fq",
    "filterQueries": "fq",
    "offset": "start",
    "limit": "rows",
    "format": "wt",
    "fields": "fl",
    "cursor_mark": "cursorMark",
    "suggest_query": "suggest.q",
    "suggestQuery": "suggest.q",
    "suggest_dictionary": "suggest.dictionary",
    "suggestDictionary": "suggest.dictionary",
    "mlt_fields": "mlt.fl",
    "mltFields": "mlt.fl",
}


def solr_name(name: str) -> str:
    """Map a symbolic option name to the Solr parameter it stands for."""
    return ALIASES.get(name, name)


def to_pairs(options: OptionSet | None) -> OptionPairs:
    """Normalize a mapping or pair sequence into a list of (solr_name, value)."""
    if options is None:
        return []
    items = options.items() if isinstance(options, Mapping) else options
    return [(solr_name(str(name)), value) for name, value in items]


def merge_options(defaults: OptionSet | None, overrides: OptionSet | None) -> OptionPairs:
    """Merge *overrides* into *defaults*.

    Defaults whose key is overridden are dropped, then every override pair is
    appended in caller order. Duplicate override keys are all kept.
    """
    default_pairs = to_pairs(defaults)
    override_pairs = to_pairs(overrides)
    overridden = {name for name, _ in override_pairs}
    return [pair for pair in default_pairs if pair[0] not in overridden] + override_pairs


def stringify(value: Scalar) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise TypeError(f"Solr option values must be scalars, got {type(value).__name__}")


def uri_encode(text: str) -> str:
    """Percent-encode everything except unreserved and reserved URI characters."""
    return quote(text, safe=_RESERVED)


def _encode_query(key: str, value: Scalar) -> str:
    return f"{key}={quote_plus(stringify(value), safe='')}"


def _encode_cursor_mark(key: str, value: Scalar) -> str:
    return uri_encode(f"{key}={stringify(value)}").replace("+", "%2B")


def _encode_generic(key: str, value: Scalar) -> str:
    return uri_encode(f"{key}={stringify(value)}")


_KEY_RULES: dict[str, Callable[[str, Scalar], str]] = {
    "q": _encode_query,
    "cursorMark": _encode_cursor_mark,
}


def encode_parameter(key: str, value: OptionValue) -> str | None:
    """Encode one option into its query-string segment(s).

    Lists expand to one segment per element joined with ``&``. Returns
    ``None`` when the option contributes nothing (``None`` or empty list).
    """
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        segments = []
        for item in value:
            if isinstance(item, (list, tuple, Mapping)):
                raise TypeError(f"Nested collections are not allowed in option {key!r}")
            segment = encode_parameter(key, item)
            if segment is not None:
                segments.append(segment)
        return "&".join(segments) if segments else None
    rule = _KEY_RULES.get(key, _encode_generic)
    return rule(key, value)


def encode(defaults: OptionSet | None, overrides: OptionSet | None = None) -> str:
    """Build ``?key=value&...`` from *defaults* merged with *overrides*."""
    segments = []
    for key, value in merge_options(defaults, overrides):
        segment = encode_parameter(key, value)
        if segment is not None:
            segments.append(segment)
    return "?" + "&".join(segments)


class QueryEncoder:
    """Query encoder bound to one request handler's default options."""

    def __init__(self, defaults: OptionSet | None = None) -> None:
        self._defaults = to_pairs(defaults)

    @property
    def defaults(self) -> OptionPairs:
        return list(self._defaults)

    def build_query(self, options: OptionSet | None = None) -> str:
        query = encode(self._defaults, options)
        logger.debug("Solr query built: %s", query)
        return query

    def __repr__(self) -> str:
        return f"QueryEncoder(defaults={self._defaults!r})"


def options_from(options: OptionSet | None, extra: Mapping[str, Any]) -> OptionPairs:
    """Combine a positional option set with keyword options (pairs first)."""
    return to_pairs(options) + to_pairs(extra)
