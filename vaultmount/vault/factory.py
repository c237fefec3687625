"""Vault resource factory.

Maps resource types to their Vault implementations.
``RESOURCE_REGISTRY`` is consumed by :func:`vaultmount.factory.universal_factory`.
"""

from vaultmount.vault.secret_backend import SecretBackend


# Resource registry for Vault
RESOURCE_REGISTRY: dict[str, type] = {
    "vault_secret_backend": SecretBackend,
}
