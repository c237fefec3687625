"""
Pydantic configuration models for provider configs.

Validates the Vault connection settings at initialization time instead of
silently passing bad values to the hvac client.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, model_validator


_TRUTHY = {"1", "true", "yes", "on"}


class VaultConfig(BaseModel):
    """Configuration for the Vault provider.

    Settings are resolved in order:
    1. Explicit values passed in the config dict.
    2. Environment variables (VAULT_ADDR, VAULT_TOKEN, VAULT_NAMESPACE,
       VAULT_CACERT, VAULT_SKIP_VERIFY).
    3. Defaults; ``address`` has none and must come from 1 or 2.
    """

    model_config = ConfigDict(extra="forbid")

    address: str | None = Field(default=None, description="Vault server URL")
    token: str | None = Field(default=None, description="Vault token")
    namespace: str | None = Field(default=None, description="Vault Enterprise namespace")
    ca_cert: str | None = Field(default=None, description="Path to a CA bundle for TLS")
    skip_verify: bool = Field(default=False, description="Disable TLS verification")
    timeout: int = Field(default=30, gt=0, description="Request timeout in seconds")

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Fall back to environment variables for missing settings."""
        env_map = {
            "address": "VAULT_ADDR",
            "token": "VAULT_TOKEN",
            "namespace": "VAULT_NAMESPACE",
            "ca_cert": "VAULT_CACERT",
        }
        for field, env_var in env_map.items():
            if not values.get(field):
                values[field] = os.environ.get(env_var)
        if "skip_verify" not in values:
            values["skip_verify"] = (
                os.environ.get("VAULT_SKIP_VERIFY", "").lower() in _TRUTHY
            )
        return values

    @model_validator(mode="after")
    def validate_address_and_ca(self) -> VaultConfig:
        """Ensure an address is set and the CA bundle exists."""
        if not self.address:
            raise ValueError(
                "Vault address is required. Set it explicitly or via "
                "the VAULT_ADDR environment variable."
            )
        if self.ca_cert and not Path(self.ca_cert).exists():
            raise ValueError(f"CA certificate not found: {self.ca_cert}")
        return self

    @property
    def verify(self) -> bool | str:
        """Value for hvac's ``verify`` argument."""
        if self.skip_verify:
            return False
        return self.ca_cert or True


# Map provider names to their config models for dynamic validation
CONFIG_REGISTRY: dict[str, type[BaseModel]] = {
    "vault": VaultConfig,
}


def validate_config(provider: str, config: dict) -> BaseModel:
    """Validate and return a typed config model for the given provider.

    Args:
        provider: The provider name (e.g. 'vault').
        config: Raw configuration dictionary.

    Returns:
        A validated Pydantic config model.

    Raises:
        ValueError: If the provider is unknown.
        pydantic.ValidationError: If the config is invalid.
    """
    model = CONFIG_REGISTRY.get(provider)
    if model is None:
        raise ValueError(f"No config model registered for provider: {provider}")
    return model(**config)


__all__ = [
    "VaultConfig",
    "CONFIG_REGISTRY",
    "validate_config",
]
