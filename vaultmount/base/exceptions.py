"""
Vaultmount exception hierarchy.

Every resource has a top-level error that inherits from
:class:`VaultMountError` and sub-exceptions for the common
failure modes of a mount (already-exists, not-found, etc.).
"""


# ── Base ──────────────────────────────────────────────────────────────
class VaultMountError(Exception):
    """Root exception for all vaultmount errors."""


# ── Validation ────────────────────────────────────────────────────────
class AttributeValidationError(VaultMountError):
    """Resource attributes were rejected before any remote call."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors))


# ── Secret backend ────────────────────────────────────────────────────
class SecretBackendError(VaultMountError):
    """Base exception for secret backend mount operations."""


class MountAlreadyExistsError(SecretBackendError):
    """Mount path is already in use."""


class MountNotFoundError(SecretBackendError):
    """Mount not found."""


class MountListError(SecretBackendError):
    """Listing mounts failed while checking existence.

    ``exists`` stays ``True`` so a caller never reads the failure as
    the mount having gone away.
    """

    exists = True
