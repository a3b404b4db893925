"""
Configuration for Solr connections.

All configuration is validated at construction time, not per-call.
Environment variables are read once via ``SolrConfig.from_env()`` and
the resulting object is immutable.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_DEFAULT_HOSTNAME = "localhost"
_DEFAULT_PORT = 8983
_DEFAULT_CORE = "collection1"
_DEFAULT_SCHEME = "http"
_DEFAULT_TIMEOUT_CONNECT = 5.0
_DEFAULT_TIMEOUT_READ = 25.0
_DEFAULT_TIMEOUT_POOL = 10.0
_DEFAULT_RETRIES = 2
_SCHEMES = ("http", "https")


@dataclass(frozen=True)
class SolrConfig:
    """Validated, immutable configuration for a single Solr core.

    Args:
        hostname: Solr host name or IP address.
        port: Solr HTTP port (1-65535).
        core: Name of the Solr core (or collection) to query.
        scheme: ``http`` or ``https``.
        timeout_connect: TCP connect timeout in seconds.
        timeout_read: HTTP read timeout in seconds.
        timeout_pool: Connection pool acquisition timeout in seconds.
        retries: Transport-level retries on connection failure.
        verify_ssl: TLS verification (True, False, or path to CA bundle).
    """

    hostname: str = _DEFAULT_HOSTNAME
    port: int = _DEFAULT_PORT
    core: str = _DEFAULT_CORE
    scheme: str = _DEFAULT_SCHEME
    timeout_connect: float = _DEFAULT_TIMEOUT_CONNECT
    timeout_read: float = _DEFAULT_TIMEOUT_READ
    timeout_pool: float = _DEFAULT_TIMEOUT_POOL
    retries: int = _DEFAULT_RETRIES
    verify_ssl: bool | str = True

    def __post_init__(self) -> None:
        errors: list[str] = []

        if not self.hostname:
            errors.append("hostname must be a non-empty string")
        if self.port < 1 or self.port > 65535:
            errors.append(f"port must be 1-65535, got {self.port}")
        if not self.core or "/" in self.core:
            errors.append(f"core must be a non-empty name without '/', got {self.core!r}")
        if self.scheme not in _SCHEMES:
            errors.append(f"scheme must be one of {_SCHEMES}, got {self.scheme!r}")
        if self.timeout_connect <= 0:
            errors.append(f"timeout_connect must be > 0, got {self.timeout_connect}")
        if self.timeout_read <= 0:
            errors.append(f"timeout_read must be > 0, got {self.timeout_read}")
        if self.timeout_pool <= 0:
            errors.append(f"timeout_pool must be > 0, got {self.timeout_pool}")
        if self.retries < 0:
            errors.append(f"retries must be >= 0, got {self.retries}")

        if errors:
            raise ValueError("Invalid Solr configuration: " + "; ".join(errors))

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.hostname}:{self.port}/solr"

    @property
    def core_url(self) -> str:
        return f"{self.base_url}/{self.core}"

    @property
    def select_url(self) -> str:
        return f"{self.core_url}/select"

    @property
    def suggest_url(self) -> str:
        return f"{self.core_url}/suggest"

    @property
    def update_url(self) -> str:
        return f"{self.core_url}/update"

    @property
    def json_docs_update_url(self) -> str:
        return f"{self.core_url}/update/json/docs"

    def info(self) -> dict[str, object]:
        """Return the connection triple identifying this core."""
        return {"hostname": self.hostname, "port": self.port, "core": self.core}

    @classmethod
    def from_env(cls, **overrides: object) -> SolrConfig:
        """Build config from environment variables with optional overrides.

        Environment variables:
            SOLR_HOSTNAME         -- Solr host (default localhost)
            SOLR_PORT             -- Solr port (default 8983)
            SOLR_CORE             -- Core / collection name (default collection1)
            SOLR_SCHEME           -- http or https (default http)
            SOLR_TIMEOUT_CONNECT  -- Connect timeout seconds (default 5.0)
            SOLR_TIMEOUT_READ     -- Read timeout seconds (default 25.0)
            SOLR_TIMEOUT_POOL     -- Pool timeout seconds (default 10.0)
            SOLR_RETRIES          -- Transport retries (default 2)
            SOLR_VERIFY_SSL       -- "true", "false", or path to CA bundle

        Explicit keyword arguments override environment variables.
        """

        def _env(key: str, default: str) -> str:
            return os.environ.get(key, default)

        def _env_float(key: str, default: float) -> float:
            raw = os.environ.get(key)
            if raw is None:
                return default
            try:
                return float(raw)
            except ValueError:
                raise ValueError(f"Environment variable {key}={raw!r} is not a valid number")

        def _env_int(key: str, default: int) -> int:
            raw = os.environ.get(key)
            if raw is None:
                return default
            try:
                return int(raw)
            except ValueError:
                raise ValueError(f"Environment variable {key}={raw!r} is not a valid integer")

        def _env_verify(key: str, default: bool | str) -> bool | str:
            raw = os.environ.get(key)
            if raw is None:
                return default
            low = raw.strip().lower()
            if low in ("true", "1", "yes"):
                return True
            if low in ("false", "0", "no"):
                return False
            return raw  # CA bundle path

        kwargs: dict[str, object] = {
            "hostname": _env("SOLR_HOSTNAME", _DEFAULT_HOSTNAME),
            "port": _env_int("SOLR_PORT", _DEFAULT_PORT),
            "core": _env("SOLR_CORE", _DEFAULT_CORE),
            "scheme": _env("SOLR_SCHEME", _DEFAULT_SCHEME).lower(),
            "timeout_connect": _env_float("SOLR_TIMEOUT_CONNECT", _DEFAULT_TIMEOUT_CONNECT),
            "timeout_read": _env_float("SOLR_TIMEOUT_READ", _DEFAULT_TIMEOUT_READ),
            "timeout_pool": _env_float("SOLR_TIMEOUT_POOL", _DEFAULT_TIMEOUT_POOL),
            "retries": _env_int("SOLR_RETRIES", _DEFAULT_RETRIES),
            "verify_ssl": _env_verify("SOLR_VERIFY_SSL", True),
        }
        kwargs.update({k: v for k, v in overrides.items() if v is not None})

        config = cls(**kwargs)  # type: ignore[arg-type]
        logger.info(
            "Solr config: core_url=%s timeout_connect=%.1f timeout_read=%.1f retries=%d",
            config.core_url,
            config.timeout_connect,
            config.timeout_read,
            config.retries,
        )
        return config
