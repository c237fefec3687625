"""Universal resource factory.

Provides :func:`universal_factory`, the single entry-point for creating
managed resources.  The function validates the provider config and
returns a typed instance via ``@overload`` signatures so IDEs can
autocomplete methods.
"""

from typing import overload, Literal, Any

from vaultmount.base import ResourceBlueprint, existing_resources
from vaultmount.base.config import validate_config
from vaultmount.vault.factory import RESOURCE_REGISTRY as VAULT_RESOURCES
from vaultmount.vault.secret_backend import SecretBackend


# Nested factory registry: provider -> resource registry
_FACTORY_REGISTRY: dict[str, dict[str, type]] = {
    "vault": VAULT_RESOURCES,
}


def _provider_for(resource_type: str) -> str | None:
    for provider, resources in _FACTORY_REGISTRY.items():
        if resource_type in resources:
            return provider
    return None


@overload
def universal_factory(
    resource_type: Literal["vault_secret_backend"], config: dict
) -> SecretBackend: ...


@overload
def universal_factory(resource_type: str, config: dict) -> ResourceBlueprint: ...


def universal_factory(resource_type: existing_resources | str, config: dict) -> Any:
    """
    Universal factory function to create resource handlers by type.
    Args:
        resource_type: The resource type (e.g., 'vault_secret_backend').
        config: Provider configuration dictionary (e.g. Vault address and token).
    Returns:
        An instance of the requested resource class.
    Raises:
        ValueError: If the resource type is not supported.
        pydantic.ValidationError: If the provider config is invalid.
    """
    provider = _provider_for(resource_type)
    if provider is None:
        raise ValueError(f"Unsupported resource type: {resource_type}")

    resource_class = _FACTORY_REGISTRY[provider][resource_type]
    config_obj = validate_config(provider, config)
    return resource_class(config_obj)
