"""Resource lifecycle blueprint."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from vaultmount.base.exceptions import MountNotFoundError
from vaultmount.base.schema import ResourceDiff, ResourceSchema


class ResourceData:
    """Identity and attributes of one managed resource.

    An empty ``id`` means the resource does not exist remotely.
    """

    def __init__(self, id: str = "", attributes: dict[str, Any] | None = None) -> None:
        self.id = id
        self.attributes: dict[str, Any] = dict(attributes or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.attributes[key] = value

    def set_id(self, id: str) -> None:
        self.id = id

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "attributes": dict(self.attributes)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ResourceData:
        return cls(id=data.get("id", ""), attributes=data.get("attributes"))

    def __repr__(self) -> str:
        return f"ResourceData(id={self.id!r}, attributes={self.attributes!r})"


class ResourceBlueprint(ABC):
    """Abstract interface for a managed resource.

    Subclasses declare their attributes through :attr:`schema` and
    implement the five lifecycle calls.  Import and planning come for free.
    """

    #: Resource type name, e.g. ``vault_secret_backend``.
    resource_type: str
    schema: type[ResourceSchema]

    @abstractmethod
    def create(self, data: ResourceData) -> ResourceData:
        """Create the resource from the attributes in *data*.

        Args:
            data: Desired attributes; the id is set on success.

        Returns:
            *data*, refreshed from the remote side.
        """
        pass

    @abstractmethod
    def read(self, data: ResourceData) -> ResourceData:
        """Refresh *data* from the remote side.

        Clears the id instead of raising when the resource is gone.
        """
        pass

    @abstractmethod
    def update(self, data: ResourceData) -> ResourceData:
        """Apply in-place changes to the resource identified by ``data.id``."""
        pass

    @abstractmethod
    def delete(self, data: ResourceData) -> None:
        """Destroy the resource identified by ``data.id``."""
        pass

    @abstractmethod
    def exists(self, data: ResourceData) -> bool:
        """Return whether the resource identified by ``data.id`` exists."""
        pass

    def validate(self, attributes: dict[str, Any]) -> ResourceSchema:
        """Validate raw attributes against :attr:`schema`."""
        return self.schema.validate_attributes(attributes)

    def import_state(self, resource_id: str) -> ResourceData:
        """Rehydrate full state from the resource id alone.

        Raises:
            MountNotFoundError: If nothing exists under *resource_id*.
        """
        data = self.read(ResourceData(id=resource_id))
        if not data.id:
            raise MountNotFoundError(
                f"Cannot import non-existent remote object '{resource_id}'"
            )
        return data

    def plan(self, data: ResourceData | None, attributes: dict[str, Any]) -> ResourceDiff:
        """Diff *attributes* against the state in *data*."""
        desired = self.validate(attributes)
        return desired.plan(_prior_attributes(data))

    def planned_data(self, data: ResourceData | None, attributes: dict[str, Any]) -> ResourceData:
        """Build the data to pass to :meth:`create` or :meth:`update`.

        Computed attributes left out of *attributes* keep their value from
        *data*, so an update never resets what the caller did not mention.
        """
        desired = self.validate(attributes)
        return ResourceData(
            id=data.id if data is not None else "",
            attributes=desired.merged_attributes(_prior_attributes(data)),
        )


def _prior_attributes(data: ResourceData | None) -> dict[str, Any] | None:
    return data.attributes if data is not None and data.id else None
