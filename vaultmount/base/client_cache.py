"""
Client connection cache (pooling).

Avoids creating redundant hvac clients when several resources are built
against the same Vault server with the same credentials.
"""

from __future__ import annotations

import hashlib
import json
import threading
from typing import Any, Callable


class ClientCache:
    """Thread-safe, in-process cache for API clients keyed by provider + config hash."""

    _instance: ClientCache | None = None
    _cache: dict[str, Any]
    _lock: threading.Lock

    def __new__(cls) -> ClientCache:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._cache = {}
            cls._instance._lock = threading.Lock()
        return cls._instance

    @staticmethod
    def _make_key(provider: str, config: dict) -> str:
        """Produce a deterministic cache key from provider and config."""
        # Sort keys so dict ordering doesn't affect the hash.
        serialised = json.dumps(
            {"provider": provider, "config": config},
            sort_keys=True,
            default=str,
        )
        return hashlib.sha256(serialised.encode()).hexdigest()

    def get_or_create(
        self,
        provider: str,
        config: dict,
        factory: Callable[[], Any],
    ) -> Any:
        """Return a cached client or create one via *factory*.

        Args:
            provider: Provider name (e.g. 'vault').
            config: Configuration dict the client is built from.
            factory: Zero-argument callable that creates a new client.

        Returns:
            The cached (or newly-created) client.
        """
        key = self._make_key(provider, config)
        with self._lock:
            if key not in self._cache:
                self._cache[key] = factory()
            return self._cache[key]

    def clear(self) -> None:
        """Flush all cached clients."""
        with self._lock:
            self._cache.clear()
