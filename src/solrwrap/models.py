"""
Data models and exception hierarchy for the Solr wrapper.

All public types used by the solrwrap library are defined here. Models are
frozen dataclasses so that outcomes and results can be shared safely across
threads and async tasks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class SolrError(Exception):
    """Base exception for all Solr request errors."""


class SolrTransportError(SolrError):
    """The request did not produce a usable body (DNS, TCP, TLS, timeout, HTTP status).

    ``reason`` is a short token or status code; ``message`` is the descriptive
    text the transport attached, if any.
    """

    def __init__(self, reason: object, message: str | None = None) -> None:
        self.reason = reason
        self.message = message
        if message is None:
            super().__init__(f"Solr request failed: {reason}")
        else:
            super().__init__(f"Solr request failed: {reason}: {message}")


class SolrParseError(SolrError):
    """Solr returned a body that is not valid JSON."""

    def __init__(self, message: str, raw_body: str = "") -> None:
        self.raw_body = raw_body[:2000]
        super().__init__(message)


class SolrMissingKeyError(SolrError):
    """Solr returned valid JSON without the expected top-level key."""

    def __init__(self, key: str, available: list[str] | None = None) -> None:
        self.key = key
        self.available = available or []
        super().__init__(
            f"Expected key {key!r} in Solr response, found {sorted(self.available)!r}"
        )


# ---------------------------------------------------------------------------
# Transport outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Success:
    """The transport received a 2xx response with a body."""

    body: str


@dataclass(frozen=True)
class TransportFailure:
    """The transport failed with no body available."""

    reason: object


@dataclass(frozen=True)
class TransportFailureWithMessage:
    """The transport failed and attached a descriptive message (e.g. an HTTP error body)."""

    reason: object
    message: str


SolrOutcome = Union[Success, TransportFailure, TransportFailureWithMessage]


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result carrying the extracted value."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed result carrying the error that explains it."""

    error: SolrError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        """Raise the carried error."""
        raise self.error


Result = Union[Ok[Any], Err]
