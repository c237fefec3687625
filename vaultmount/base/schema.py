"""
Resource schema declarations.

A resource's attributes are declared as a Pydantic model.  Besides the
usual type and validator machinery, each field can be flagged through
``json_schema_extra``:

* ``force_new``: changing the attribute replaces the resource.
* ``computed``: the server fills the attribute in when it is left unset.

:meth:`ResourceSchema.plan` compares a validated configuration against the
attributes recorded in state and reports what would change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar

from pydantic import BaseModel, ConfigDict, ValidationError

from vaultmount.base.exceptions import AttributeValidationError


@dataclass
class ResourceDiff:
    """Attribute changes between recorded state and desired configuration."""

    changes: dict[str, tuple[Any, Any]] = field(default_factory=dict)
    requires_replace: bool = False
    replace_reasons: list[str] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "changes": {k: {"old": old, "new": new} for k, (old, new) in self.changes.items()},
            "requires_replace": self.requires_replace,
            "replace_reasons": list(self.replace_reasons),
        }


def _format_error(error: dict[str, Any]) -> str:
    """Render a pydantic error entry as ``<attribute>: <message>``."""
    loc = ".".join(str(part) for part in error.get("loc", ())) or "attributes"
    msg = str(error.get("msg", "invalid value")).removeprefix("Value error, ")
    return f"{loc}: {msg}"


class ResourceSchema(BaseModel):
    """Base class for resource attribute schemas."""

    model_config = ConfigDict(extra="forbid")

    # attribute name -> fn(old, new) returning True when the change is cosmetic
    diff_suppress: ClassVar[dict[str, Callable[[Any, Any], bool]]] = {}

    @classmethod
    def _has_flag(cls, name: str, flag: str) -> bool:
        extra = cls.model_fields[name].json_schema_extra
        return isinstance(extra, dict) and bool(extra.get(flag))

    @classmethod
    def force_new_attributes(cls) -> list[str]:
        return [name for name in cls.model_fields if cls._has_flag(name, "force_new")]

    @classmethod
    def computed_attributes(cls) -> list[str]:
        return [name for name in cls.model_fields if cls._has_flag(name, "computed")]

    @classmethod
    def validate_attributes(cls, attributes: dict[str, Any]) -> ResourceSchema:
        """Validate raw attributes.

        Raises:
            AttributeValidationError: With one message per invalid attribute.
        """
        try:
            return cls(**attributes)
        except ValidationError as e:
            raise AttributeValidationError([_format_error(err) for err in e.errors()]) from e

    def merged_attributes(self, prior: dict[str, Any] | None) -> dict[str, Any]:
        """Desired attributes, with unset computed ones carried over from *prior*."""
        attributes = self.model_dump()
        if prior is None:
            return attributes
        for name in self.computed_attributes():
            if attributes.get(name) is None:
                attributes[name] = prior.get(name)
        return attributes

    def plan(self, prior: dict[str, Any] | None) -> ResourceDiff:
        """Diff this configuration against *prior* state attributes.

        Args:
            prior: Attributes recorded in state, or ``None`` when the
                resource does not exist yet.

        Returns:
            A :class:`ResourceDiff`.  Replacement is only ever required
            for an existing resource.
        """
        desired = self.model_dump()
        computed = set(self.computed_attributes())
        force_new = set(self.force_new_attributes())
        diff = ResourceDiff()

        for name, new in desired.items():
            if new is None and name in computed:
                continue
            if prior is None:
                diff.changes[name] = (None, new)
                continue
            old = prior.get(name)
            if old == new:
                continue
            suppress = self.diff_suppress.get(name)
            if suppress is not None and old is not None and suppress(old, new):
                continue
            diff.changes[name] = (old, new)
            if name in force_new:
                diff.replace_reasons.append(name)

        diff.requires_replace = bool(diff.replace_reasons)
        return diff
