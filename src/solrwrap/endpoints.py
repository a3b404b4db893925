"""Request handlers exposed by the client and how each one is queried and unwrapped."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from solrwrap.encoder import (
    MORE_LIKE_THIS_DEFAULTS,
    SEARCH_DEFAULTS,
    SUGGEST_DEFAULTS,
    OptionPairs,
    QueryEncoder,
)
from solrwrap.extractor import ResponseExtractor, flatten_more_like_this


@dataclass(frozen=True)
class Endpoint:
    """A Solr request handler: its path, default options and response unwrapping.

    ``unwrap_key`` of ``None`` passes the whole decoded body through.
    """

    name: str
    path: str
    defaults: OptionPairs = field(default_factory=list)
    unwrap_key: str | None = None
    transform: Callable[[Any], Any] | None = None

    @property
    def encoder(self) -> QueryEncoder:
        return QueryEncoder(self.defaults)

    @property
    def extractor(self) -> ResponseExtractor:
        return ResponseExtractor(self.unwrap_key, self.transform)


SEARCH = Endpoint("search", "/select", SEARCH_DEFAULTS)
SUGGEST = Endpoint("suggest", "/suggest", SUGGEST_DEFAULTS, unwrap_key="suggest")
MORE_LIKE_THIS = Endpoint(
    "more_like_this",
    "/select",
    MORE_LIKE_THIS_DEFAULTS,
    unwrap_key="moreLikeThis",
    transform=flatten_more_like_this,
)

__all__ = ["Endpoint", "MORE_LIKE_THIS", "SEARCH", "SUGGEST"]
