"""Tests for solrwrap.models -- results, outcomes and exceptions."""

from __future__ import annotations

import dataclasses

import pytest

from solrwrap.models import (
    Err,
    Ok,
    SolrError,
    SolrMissingKeyError,
    SolrParseError,
    SolrTransportError,
    Success,
    TransportFailure,
)


class TestResults:
    def test_ok_unwrap(self) -> None:
        result = Ok({"a": 1})
        assert result.ok is True
        assert result.unwrap() == {"a": 1}

    def test_err_unwrap_raises_carried_error(self) -> None:
        result = Err(SolrTransportError("timeout"))
        assert result.ok is False
        with pytest.raises(SolrTransportError, match="timeout"):
            result.unwrap()

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            Ok(1).value = 2  # type: ignore[misc]

    def test_equality(self) -> None:
        assert Ok([1]) == Ok([1])
        assert Success("{}") == Success("{}")
        assert TransportFailure("x") != TransportFailure("y")


class TestExceptions:
    def test_hierarchy(self) -> None:
        for exc in (
            SolrTransportError("r"),
            SolrParseError("bad"),
            SolrMissingKeyError("suggest"),
        ):
            assert isinstance(exc, SolrError)

    def test_transport_error_message(self) -> None:
        assert str(SolrTransportError(404)) == "Solr request failed: 404"
        assert str(SolrTransportError(404, "Not Found")) == "Solr request failed: 404: Not Found"

    def test_parse_error_truncates_body(self) -> None:
        err = SolrParseError("bad", raw_body="x" * 5000)
        assert len(err.raw_body) == 2000

    def test_missing_key_lists_available(self) -> None:
        err = SolrMissingKeyError("suggest", ["response", "error"])
        assert "suggest" in str(err)
        assert "['error', 'response']" in str(err)
