"""vaultmount: manage HashiCorp Vault secret backend mounts as resources.

Entry point for the library. Import :func:`universal_factory` to create
a resource handler with a single call::

    from vaultmount import universal_factory

    backend = universal_factory("vault_secret_backend", {"address": "http://127.0.0.1:8200"})
    state = backend.create(backend.planned_data(None, {"type": "kv", "path": "app-kv"}))
"""

from .base import ResourceBlueprint, ResourceData, ResourceDiff, ResourceSchema
from .factory import universal_factory

__all__ = [
    "ResourceBlueprint",
    "ResourceData",
    "ResourceDiff",
    "ResourceSchema",
    "universal_factory",
]
