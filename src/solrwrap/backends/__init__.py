"""Pluggable HTTP transports for solrwrap.

The :class:`Transport` protocol defines the contract between the client and
the network.  Transports never raise for request failures; they report one of
the :data:`~solrwrap.models.SolrOutcome` variants instead.  The default
implementation is :class:`~solrwrap.backends.http.HttpxTransport`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from solrwrap.models import SolrOutcome


@runtime_checkable
class Transport(Protocol):
    """Protocol for transports used by :class:`~solrwrap.client.SolrClient`."""

    def get(self, url: str) -> SolrOutcome: ...

    def post(self, url: str, payload: Any) -> SolrOutcome: ...

    async def aget(self, url: str) -> SolrOutcome: ...

    async def apost(self, url: str, payload: Any) -> SolrOutcome: ...

    def close(self) -> None: ...

    async def aclose(self) -> None: ...


__all__ = ["Transport"]
