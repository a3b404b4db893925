"""
Solr client with persistent HTTP connections.

Provides ``SolrClient`` for use in servers and pipelines (connection pooling,
validated config, context manager support) and module-level convenience
functions ``search()`` / ``suggest()`` / ``more_like_this()`` for one-shot use.

Every request returns an ``Ok`` / ``Err`` result rather than raising, so
callers branch on ``result.ok`` (or call ``result.unwrap()`` to raise).

Usage:
    # One-shot (creates and closes a client per call):
    from solrwrap import search
    result = search(query="roses", filter_queries=["blue", "violet"])

    # Persistent client (recommended for servers and pipelines):
    from solrwrap import SolrClient
    with SolrClient() as client:
        hits = client.get(q="roses").unwrap()["response"]["docs"]
        suggestions = client.suggest(suggest_query="ros", suggest_dictionary="default")
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from solrwrap.backends import Transport
from solrwrap.backends.http import HttpxTransport
from solrwrap.config import SolrConfig
from solrwrap.endpoints import MORE_LIKE_THIS, SEARCH, SUGGEST, Endpoint
from solrwrap.encoder import OptionSet, options_from
from solrwrap.extractor import extract
from solrwrap.models import Result

logger = logging.getLogger(__name__)

_UPDATE_KEY = "responseHeader"
_COMMIT_QUERY = "?commit=true&wt=json"


class SolrClient:
    """Persistent Solr client bound to one core.

    Holds a transport with pooled connections; the default is
    :class:`~solrwrap.backends.http.HttpxTransport`.

    Usage:
        with SolrClient(SolrConfig(core="products")) as client:
            result = client.get(query="roses")
    """

    def __init__(
        self,
        config: SolrConfig | None = None,
        *,
        transport: Transport | None = None,
        _sync_transport: httpx.BaseTransport | None = None,
        _async_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or SolrConfig.from_env()
        self._transport: Transport = transport or HttpxTransport(
            self._config,
            _sync_transport=_sync_transport,
            _async_transport=_async_transport,
        )
        self._closed = False

        logger.debug(
            "SolrClient created core_url=%s timeout_read=%.1f retries=%d",
            self._config.core_url,
            self._config.timeout_read,
            self._config.retries,
        )

    @property
    def config(self) -> SolrConfig:
        return self._config

    def info(self) -> dict[str, object]:
        """Return the hostname, port and core this client talks to."""
        return self._config.info()

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("SolrClient is closed")

    def url_for(self, endpoint: Endpoint, options: OptionSet | None = None) -> str:
        """Build the full request URL for *endpoint* with *options* encoded."""
        url = f"{self._config.core_url}{endpoint.path}{endpoint.encoder.build_query(options)}"
        logger.debug("Solr %s url=%s", endpoint.name, url)
        return url

    # -- Read handlers -------------------------------------------------------

    def request(self, endpoint: Endpoint, options: OptionSet | None = None) -> Result:
        """Query *endpoint* and extract its response."""
        self._check_open()
        url = self.url_for(endpoint, options)
        return endpoint.extractor.extract(self._transport.get(url))

    async def arequest(self, endpoint: Endpoint, options: OptionSet | None = None) -> Result:
        """Async variant of request()."""
        self._check_open()
        url = self.url_for(endpoint, options)
        return endpoint.extractor.extract(await self._transport.aget(url))

    def get(self, options: OptionSet | None = None, **kwargs: Any) -> Result:
        """Send a search request; ``Ok`` carries the whole decoded response.

        Options may be a mapping, a list of ``(name, value)`` pairs (for
        repeated parameters), keyword arguments, or a mix. Symbolic names such
        as ``query`` or ``filter_queries`` map to ``q`` and ``fq``.
        """
        return self.request(SEARCH, options_from(options, kwargs))

    search = get

    def suggest(self, options: OptionSet | None = None, **kwargs: Any) -> Result:
        """Send a suggest request; ``Ok`` carries the ``suggest`` section."""
        return self.request(SUGGEST, options_from(options, kwargs))

    def more_like_this(self, options: OptionSet | None = None, **kwargs: Any) -> Result:
        """Send a more-like-this request; ``Ok`` carries the similar docs, flattened."""
        return self.request(MORE_LIKE_THIS, options_from(options, kwargs))

    async def aget(self, options: OptionSet | None = None, **kwargs: Any) -> Result:
        return await self.arequest(SEARCH, options_from(options, kwargs))

    asearch = aget

    async def asuggest(self, options: OptionSet | None = None, **kwargs: Any) -> Result:
        return await self.arequest(SUGGEST, options_from(options, kwargs))

    async def amore_like_this(self, options: OptionSet | None = None, **kwargs: Any) -> Result:
        return await self.arequest(MORE_LIKE_THIS, options_from(options, kwargs))

    # -- Index mutations -----------------------------------------------------

    def add(self, document: dict[str, Any]) -> Result:
        """Add *document* to the index. Not visible to searches until commit()."""
        self._check_open()
        outcome = self._transport.post(self._config.json_docs_update_url, document)
        return extract(outcome, _UPDATE_KEY)

    def commit(self) -> Result:
        """Commit pending changes."""
        self._check_open()
        outcome = self._transport.get(self._config.update_url + _COMMIT_QUERY)
        return extract(outcome, _UPDATE_KEY)

    def delete_by_id(self, doc_id: Any) -> Result:
        """Delete the document with id *doc_id*."""
        self._check_open()
        outcome = self._transport.post(self._config.update_url, {"delete": {"id": doc_id}})
        return extract(outcome, _UPDATE_KEY)

    def delete_all(self) -> Result:
        """Delete every document in the core."""
        self._check_open()
        outcome = self._transport.post(self._config.update_url, {"delete": {"query": "*:*"}})
        return extract(outcome, _UPDATE_KEY)

    # -- Lifecycle -----------------------------------------------------------

    def close(self) -> None:
        """Close the underlying transport."""
        if not self._closed:
            self._transport.close()
            self._closed = True
            logger.debug("SolrClient closed core_url=%s", self._config.core_url)

    async def aclose(self) -> None:
        """Close the underlying transport, including its async connections."""
        if not self._closed:
            await self._transport.aclose()
            self._closed = True
            logger.debug("SolrClient closed (async) core_url=%s", self._config.core_url)

    def __enter__(self) -> SolrClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    async def __aenter__(self) -> SolrClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()


# ---------------------------------------------------------------------------
# Module-level convenience functions
# ---------------------------------------------------------------------------


def _one_shot(
    endpoint: Endpoint,
    options: OptionSet | None,
    kwargs: dict[str, Any],
    config: SolrConfig | None,
    transport: httpx.BaseTransport | None,
) -> Result:
    with SolrClient(config or SolrConfig.from_env(), _sync_transport=transport) as client:
        return client.request(endpoint, options_from(options, kwargs))


def search(
    options: OptionSet | None = None,
    *,
    config: SolrConfig | None = None,
    _transport_override: httpx.BaseTransport | None = None,
    **kwargs: Any,
) -> Result:
    """Search the configured core (one-shot convenience).

    Creates a temporary client for a single call. For repeated use, prefer
    ``SolrClient`` which maintains a persistent connection pool.
    """
    return _one_shot(SEARCH, options, kwargs, config, _transport_override)


def suggest(
    options: OptionSet | None = None,
    *,
    config: SolrConfig | None = None,
    _transport_override: httpx.BaseTransport | None = None,
    **kwargs: Any,
) -> Result:
    """Query the suggest handler (one-shot convenience)."""
    return _one_shot(SUGGEST, options, kwargs, config, _transport_override)


def more_like_this(
    options: OptionSet | None = None,
    *,
    config: SolrConfig | None = None,
    _transport_override: httpx.BaseTransport | None = None,
    **kwargs: Any,
) -> Result:
    """Run a more-like-this query (one-shot convenience)."""
    return _one_shot(MORE_LIKE_THIS, options, kwargs, config, _transport_override)
