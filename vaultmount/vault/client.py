"""hvac client construction for the Vault provider."""

from __future__ import annotations

import hvac

from vaultmount.base.client_cache import ClientCache
from vaultmount.base.config import VaultConfig


def build_client(config: VaultConfig) -> hvac.Client:
    """Create a new hvac client from *config*.

    Args:
        config: Validated Vault connection settings.

    Returns:
        An ``hvac.Client``; the token is used as-is, no login is performed.
    """
    return hvac.Client(
        url=config.address,
        token=config.token,
        namespace=config.namespace,
        verify=config.verify,
        timeout=config.timeout,
    )


def get_client(config: VaultConfig) -> hvac.Client:
    """Return a shared hvac client for *config*, building it on first use."""
    return ClientCache().get_or_create(
        "vault",
        config.model_dump(),
        lambda: build_client(config),
    )
