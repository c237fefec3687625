"""Abstract resource blueprint and core utilities.

Every managed resource inherits from the blueprint defined here.
Import it to type-hint your own code or to add resources of your own.
"""

from .blueprint import ResourceBlueprint, ResourceData
from .schema import ResourceSchema, ResourceDiff
from .supported_resources import existing_resources


__all__ = [
    "ResourceBlueprint",
    "ResourceData",
    "ResourceSchema",
    "ResourceDiff",
    "existing_resources",
]
