"""Vault implementation of a generic secret backend mount.

Mounts, tunes and unmounts a secrets engine through ``sys/mounts``.
Vault always reports mount paths with a trailing slash; state keeps the
path without one.
"""

from __future__ import annotations

from typing import Any, Callable, ClassVar

from hvac.exceptions import VaultError
from pydantic import Field, field_validator, model_validator
from requests.exceptions import RequestException

from vaultmount.base import ResourceBlueprint, ResourceData, ResourceSchema
from vaultmount.base.config import VaultConfig
from vaultmount.base.exceptions import (
    MountAlreadyExistsError,
    MountListError,
    SecretBackendError,
)
from vaultmount.base.logger import vm_logger
from vaultmount.vault.client import get_client
from vaultmount.vault.ttl import parse_duration, to_duration

RESOURCE_TYPE = "vault_secret_backend"

# Errors the hvac client surfaces for server rejections and transport failures.
_REMOTE_ERRORS = (VaultError, RequestException)


def _mount_key(path: str) -> str:
    """Registry key Vault uses for *path*."""
    return path.strip("/") + "/"


def _suppress_trailing_slash(old: str, new: str) -> bool:
    return old + "/" == new or new + "/" == old


class SecretBackendSchema(ResourceSchema):
    """Attributes of ``vault_secret_backend``."""

    type: str = Field(
        min_length=1,
        description="Name of the secret backend",
        json_schema_extra={"force_new": True},
    )
    path: str | None = Field(
        default=None,
        description="Path to mount the backend at, defaults to the type",
        json_schema_extra={"force_new": True},
    )
    description: str = Field(
        default="",
        description="Human-friendly description of the mount for the backend.",
        json_schema_extra={"force_new": True},
    )
    default_lease_ttl_seconds: int | None = Field(
        default=None,
        ge=0,
        description="Default lease duration for secrets in seconds.",
        json_schema_extra={"computed": True},
    )
    max_lease_ttl_seconds: int | None = Field(
        default=None,
        ge=0,
        description="Maximum possible lease duration for secrets in seconds.",
        json_schema_extra={"computed": True},
    )

    diff_suppress: ClassVar[dict[str, Callable[[Any, Any], bool]]] = {
        "path": _suppress_trailing_slash,
    }

    @field_validator("path")
    @classmethod
    def path_has_no_trailing_slash(cls, value: str | None) -> str | None:
        if value is not None and value.endswith("/"):
            raise ValueError("path cannot end in '/'")
        return value

    @model_validator(mode="after")
    def default_path_to_type(self) -> SecretBackendSchema:
        if not self.path:
            self.path = self.type
        return self


def mount_config_input(data: ResourceData) -> dict[str, str]:
    """TTL settings for a mount or tune request, as duration strings."""
    return {
        "default_lease_ttl": to_duration(data.get("default_lease_ttl_seconds")),
        "max_lease_ttl": to_duration(data.get("max_lease_ttl_seconds")),
    }


class SecretBackend(ResourceBlueprint):
    """Vault secret backend mount.

    Only the lease TTLs can change in place; ``type``, ``path`` and
    ``description`` force a new mount (see :class:`SecretBackendSchema`).

    Attributes:
        client: hvac client for the Vault server.
    """

    resource_type = RESOURCE_TYPE
    schema = SecretBackendSchema

    def __init__(self, config: VaultConfig):
        """Initialize the resource with a (shared) hvac client.

        Args:
            config: Validated Vault connection settings.
        """
        self.client = get_client(config)

    def _list_mounts(self) -> dict[str, Any]:
        response = self.client.sys.list_mounted_secrets_engines()
        # Newer servers nest the mount table under "data".
        return response.get("data") or response

    def create(self, data: ResourceData) -> ResourceData:
        """Mount the backend described by *data*.

        Raises:
            MountAlreadyExistsError: If something is already mounted at the path.
            SecretBackendError: If the mount fails for any other reason.
        """
        name = data.get("type")
        path = data.get("path") or name
        description = data.get("description") or ""

        vm_logger.debug(
            f"Mounting '{name}' backend at '{path}'",
            resource=RESOURCE_TYPE, operation="create", path=path,
        )
        try:
            self.client.sys.enable_secrets_engine(
                backend_type=name,
                path=path,
                description=description,
                config=mount_config_input(data),
            )
        except _REMOTE_ERRORS as e:
            message = f"Error mounting '{name}' secret backend to '{path}': {e}"
            if "already in use" in str(e):
                raise MountAlreadyExistsError(message) from e
            raise SecretBackendError(message) from e
        vm_logger.debug(
            f"Mounted '{name}' secret backend at '{path}'",
            resource=RESOURCE_TYPE, operation="create", path=path,
        )
        data.set_id(path)

        return self.read(data)

    def read(self, data: ResourceData) -> ResourceData:
        """Refresh *data* from the mount table.

        A missing mount clears ``data.id`` so the caller recreates it.

        Raises:
            SecretBackendError: If the mount table cannot be read.
        """
        path = data.id

        vm_logger.debug(
            f"Reading backend mount '{path}' from Vault",
            resource=RESOURCE_TYPE, operation="read", path=path,
        )
        try:
            mounts = self._list_mounts()
        except _REMOTE_ERRORS as e:
            raise SecretBackendError(f"Error reading mount '{path}': {e}") from e
        vm_logger.debug(
            f"Read backend mount '{path}' from Vault",
            resource=RESOURCE_TYPE, operation="read", path=path,
        )

        mount = mounts.get(_mount_key(path))
        if mount is None:
            vm_logger.warning(
                f"Mount '{path}' not found, removing backend from state.",
                resource=RESOURCE_TYPE, operation="read", path=path,
            )
            data.set_id("")
            return data

        mount_config = mount.get("config") or {}
        try:
            default_ttl = parse_duration(mount_config.get("default_lease_ttl"))
            max_ttl = parse_duration(mount_config.get("max_lease_ttl"))
        except ValueError as e:
            raise SecretBackendError(f"Error reading mount '{path}': {e}") from e

        data.set("path", path)
        data.set("type", mount.get("type"))
        data.set("description", mount.get("description") or "")
        data.set("default_lease_ttl_seconds", default_ttl)
        data.set("max_lease_ttl_seconds", max_ttl)

        return data

    def update(self, data: ResourceData) -> ResourceData:
        """Tune the lease TTLs of the mount.

        Raises:
            SecretBackendError: If the tune request fails.
        """
        path = data.id
        ttls = mount_config_input(data)

        vm_logger.debug(
            f"Updating lease TTLs for '{path}'",
            resource=RESOURCE_TYPE, operation="update", path=path,
        )
        try:
            self.client.sys.tune_mount_configuration(
                path=path,
                default_lease_ttl=ttls["default_lease_ttl"],
                max_lease_ttl=ttls["max_lease_ttl"],
            )
        except _REMOTE_ERRORS as e:
            raise SecretBackendError(f"Error updating mount TTLs for '{path}': {e}") from e
        vm_logger.debug(
            f"Updated lease TTLs for '{path}'",
            resource=RESOURCE_TYPE, operation="update", path=path,
        )

        return self.read(data)

    def delete(self, data: ResourceData) -> None:
        """Unmount the backend.

        Raises:
            SecretBackendError: If the unmount request fails.
        """
        path = data.id

        vm_logger.debug(
            f"Unmounting secret backend '{path}'",
            resource=RESOURCE_TYPE, operation="delete", path=path,
        )
        try:
            self.client.sys.disable_secrets_engine(path=path)
        except _REMOTE_ERRORS as e:
            raise SecretBackendError(
                f"Error unmounting secret backend from '{path}': {e}"
            ) from e
        vm_logger.debug(
            f"Unmounted secret backend '{path}'",
            resource=RESOURCE_TYPE, operation="delete", path=path,
        )
        data.set_id("")

    def exists(self, data: ResourceData) -> bool:
        """Check the mount table for ``data.id``.

        Raises:
            MountListError: If the mount table cannot be read.  Its
                ``exists`` attribute is ``True``.
        """
        path = data.id
        vm_logger.debug(
            f"Checking if secret backend exists at '{path}'",
            resource=RESOURCE_TYPE, operation="exists", path=path,
        )
        try:
            mounts = self._list_mounts()
        except _REMOTE_ERRORS as e:
            raise MountListError(f"Error retrieving list of mounts: {e}") from e
        vm_logger.debug(
            f"Checked if secret backend exists at '{path}'",
            resource=RESOURCE_TYPE, operation="exists", path=path,
        )

        return _mount_key(path) in mounts
