"""solrwrap: a small Solr client for search, suggest, more-like-this and indexing."""

from solrwrap.client import SolrClient, more_like_this, search, suggest
from solrwrap.config import SolrConfig
from solrwrap.encoder import QueryEncoder, encode
from solrwrap.endpoints import MORE_LIKE_THIS, SEARCH, SUGGEST, Endpoint
from solrwrap.extractor import ResponseExtractor, extract
from solrwrap.logging import bind_request_id, configure_logging, get_request_id
from solrwrap.models import (
    Err,
    Ok,
    Result,
    SolrError,
    SolrMissingKeyError,
    SolrOutcome,
    SolrParseError,
    SolrTransportError,
    Success,
    TransportFailure,
    TransportFailureWithMessage,
)

__version__ = "0.1.0"

__all__ = [
    "MORE_LIKE_THIS",
    "SEARCH",
    "SUGGEST",
    "Endpoint",
    "Err",
    "Ok",
    "QueryEncoder",
    "ResponseExtractor",
    "Result",
    "SolrClient",
    "SolrConfig",
    "SolrError",
    "SolrMissingKeyError",
    "SolrOutcome",
    "SolrParseError",
    "SolrTransportError",
    "Success",
    "TransportFailure",
    "TransportFailureWithMessage",
    "__version__",
    "bind_request_id",
    "configure_logging",
    "encode",
    "extract",
    "get_request_id",
    "more_like_this",
    "search",
    "suggest",
]
