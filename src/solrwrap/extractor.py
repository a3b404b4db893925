"""
Turn transport outcomes into typed results.

Every failure channel stays distinguishable: transport errors never reach the
JSON decoder, undecodable bodies become ``SolrParseError`` and decodable
bodies that lack the handler's top-level key become ``SolrMissingKeyError``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from solrwrap.models import (
    Err,
    Ok,
    Result,
    SolrMissingKeyError,
    SolrOutcome,
    SolrParseError,
    SolrTransportError,
    Success,
    TransportFailure,
    TransportFailureWithMessage,
)

logger = logging.getLogger(__name__)


def flatten_more_like_this(mlt: Any) -> list[Any]:
    """Concatenate the ``docs`` list of every entry in a ``moreLikeThis`` section.

    Entries without a ``docs`` list contribute nothing.
    """
    if not isinstance(mlt, dict):
        return []
    docs: list[Any] = []
    for entry in mlt.values():
        if not isinstance(entry, dict):
            continue
        entry_docs = entry.get("docs")
        if isinstance(entry_docs, list):
            docs.extend(entry_docs)
    return docs


def decode(body: str) -> Result:
    try:
        return Ok(json.loads(body))
    except ValueError as exc:
        logger.error("Solr response parse: %s", exc)
        return Err(SolrParseError(f"Failed to decode Solr response: {exc}", raw_body=body))


def unwrap(data: Any, key: str | None) -> Result:
    """Return ``data[key]``, or the whole document when *key* is ``None``."""
    if key is None:
        return Ok(data)
    if isinstance(data, dict) and key in data:
        return Ok(data[key])
    available = list(data) if isinstance(data, dict) else []
    error = SolrMissingKeyError(key, available)
    logger.error("Solr response missing key: %s", error)
    return Err(error)


def extract(
    outcome: SolrOutcome,
    key: str | None = None,
    transform: Callable[[Any], Any] | None = None,
) -> Result:
    """Parse a transport outcome and unwrap *key* from the decoded body."""
    if isinstance(outcome, TransportFailureWithMessage):
        logger.error("Solr request failed: %r (%s)", outcome.reason, outcome.message[:500])
        return Err(SolrTransportError(outcome.reason, outcome.message))

    if isinstance(outcome, TransportFailure):
        logger.error("Solr request failed: %r", outcome.reason)
        return Err(SolrTransportError(outcome.reason))

    if not isinstance(outcome, Success):
        raise TypeError(f"Unknown Solr outcome: {outcome!r}")

    decoded = decode(outcome.body)
    if isinstance(decoded, Err):
        return decoded

    result = unwrap(decoded.value, key)
    if isinstance(result, Ok) and transform is not None:
        return Ok(transform(result.value))
    return result


class ResponseExtractor:
    """Extractor bound to one handler's unwrap key and optional transform."""

    def __init__(
        self,
        key: str | None = None,
        transform: Callable[[Any], Any] | None = None,
    ) -> None:
        self.key = key
        self.transform = transform

    def extract(self, outcome: SolrOutcome) -> Result:
        return extract(outcome, self.key, self.transform)
