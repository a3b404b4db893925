"""httpx transport for Solr.

Holds a persistent ``httpx.Client`` / ``httpx.AsyncClient`` pair and maps
every request to a :data:`~solrwrap.models.SolrOutcome` instead of raising.
"""

from __future__ import annotations

import importlib.metadata
import logging
import time
from typing import Any

import httpx

from solrwrap.config import SolrConfig
from solrwrap.models import (
    SolrOutcome,
    Success,
    TransportFailure,
    TransportFailureWithMessage,
)

logger = logging.getLogger(__name__)

try:
    _PKG_VERSION = importlib.metadata.version("solrwrap")
except importlib.metadata.PackageNotFoundError:
    _PKG_VERSION = "dev"

_USER_AGENT = f"solrwrap/{_PKG_VERSION}"


def _elapsed_ms(t0: float) -> float:
    return (time.monotonic() - t0) * 1000


def _to_outcome(resp: httpx.Response, url: str, t0: float) -> SolrOutcome:
    elapsed = _elapsed_ms(t0)
    if resp.is_success:
        logger.info(
            "Solr %s %s -> %d elapsed_ms=%.1f",
            resp.request.method,
            url,
            resp.status_code,
            elapsed,
        )
        return Success(resp.text)
    logger.warning("Solr HTTP %d for %s (%.1fms)", resp.status_code, url, elapsed)
    return TransportFailureWithMessage(resp.status_code, resp.text[:500])


def _failure(exc: httpx.HTTPError, url: str, base_url: str, t0: float) -> SolrOutcome:
    """Map httpx exceptions to a transport failure outcome."""
    elapsed = _elapsed_ms(t0)
    if isinstance(exc, httpx.ConnectError):
        logger.warning("Solr connection failed for %s (%.1fms): %s", url, elapsed, exc)
        return TransportFailure(f"Cannot connect to Solr at {base_url}: {exc}")

    if isinstance(exc, httpx.TimeoutException):
        logger.warning("Solr timeout for %s (%.1fms)", url, elapsed)
        return TransportFailure(f"Timeout connecting to Solr at {base_url}: {exc}")

    logger.warning("Solr error for %s (%.1fms): %s", url, elapsed, exc)
    return TransportFailure(f"Solr request failed: {exc}")


class HttpxTransport:
    """Default transport backed by pooled httpx clients.

    Usable as both sync and async context manager.
    """

    def __init__(
        self,
        config: SolrConfig,
        *,
        _sync_transport: httpx.BaseTransport | None = None,
        _async_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config

        timeout = httpx.Timeout(
            connect=config.timeout_connect,
            read=config.timeout_read,
            pool=config.timeout_pool,
            write=config.timeout_read,
        )
        headers = {"Accept": "application/json", "User-Agent": _USER_AGENT}

        transport = _sync_transport or httpx.HTTPTransport(
            retries=config.retries,
            verify=config.verify_ssl,  # type: ignore[arg-type]
        )
        self._sync_client = httpx.Client(transport=transport, timeout=timeout, headers=headers)

        async_transport = _async_transport or httpx.AsyncHTTPTransport(
            retries=config.retries,
            verify=config.verify_ssl,  # type: ignore[arg-type]
        )
        self._async_client = httpx.AsyncClient(
            transport=async_transport, timeout=timeout, headers=headers
        )

    # -- Protocol methods ----------------------------------------------------

    def get(self, url: str) -> SolrOutcome:
        t0 = time.monotonic()
        try:
            resp = self._sync_client.get(url)
        except httpx.HTTPError as exc:
            return _failure(exc, url, self._config.base_url, t0)
        return _to_outcome(resp, url, t0)

    def post(self, url: str, payload: Any) -> SolrOutcome:
        t0 = time.monotonic()
        try:
            resp = self._sync_client.post(url, json=payload)
        except httpx.HTTPError as exc:
            return _failure(exc, url, self._config.base_url, t0)
        return _to_outcome(resp, url, t0)

    async def aget(self, url: str) -> SolrOutcome:
        t0 = time.monotonic()
        try:
            resp = await self._async_client.get(url)
        except httpx.HTTPError as exc:
            return _failure(exc, url, self._config.base_url, t0)
        return _to_outcome(resp, url, t0)

    async def apost(self, url: str, payload: Any) -> SolrOutcome:
        t0 = time.monotonic()
        try:
            resp = await self._async_client.post(url, json=payload)
        except httpx.HTTPError as exc:
            return _failure(exc, url, self._config.base_url, t0)
        return _to_outcome(resp, url, t0)

    # -- Lifecycle -----------------------------------------------------------

    def close(self) -> None:
        self._sync_client.close()

    async def aclose(self) -> None:
        await self._async_client.aclose()
        self._sync_client.close()

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()
