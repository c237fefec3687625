"""Vault provider: resources backed by the hvac client."""

from .secret_backend import SecretBackend, SecretBackendSchema, mount_config_input

__all__ = [
    "SecretBackend",
    "SecretBackendSchema",
    "mount_config_input",
]
