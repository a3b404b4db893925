"""In-memory mock transport for testing without network access."""

from __future__ import annotations

import json
from typing import Any

from solrwrap.models import SolrOutcome, Success


class MockTransport:
    """A :class:`~solrwrap.backends.Transport` that returns canned outcomes.

    Outcomes are handed out in order; the last one repeats once the queue
    runs dry. Every requested URL (and POST payload) is recorded.

    Usage::

        transport = MockTransport(MockTransport.json({"suggest": {}}))
        client = SolrClient(config, transport=transport)
    """

    def __init__(self, *outcomes: SolrOutcome) -> None:
        self._outcomes = list(outcomes) or [Success("{}")]
        self.urls: list[str] = []
        self.payloads: list[Any] = []
        self.closed = False

    @staticmethod
    def json(data: Any) -> Success:
        return Success(json.dumps(data))

    def _next(self) -> SolrOutcome:
        if len(self._outcomes) > 1:
            return self._outcomes.pop(0)
        return self._outcomes[0]

    def get(self, url: str) -> SolrOutcome:
        self.urls.append(url)
        return self._next()

    def post(self, url: str, payload: Any) -> SolrOutcome:
        self.urls.append(url)
        self.payloads.append(payload)
        return self._next()

    async def aget(self, url: str) -> SolrOutcome:
        return self.get(url)

    async def apost(self, url: str, payload: Any) -> SolrOutcome:
        return self.post(url, payload)

    def close(self) -> None:
        self.closed = True

    async def aclose(self) -> None:
        self.closed = True
