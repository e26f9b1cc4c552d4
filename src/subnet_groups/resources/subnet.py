"""Subnet resource model."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field, computed_field, model_validator

from subnet_groups.core.naming import strip_subnet_suffix
from subnet_groups.resources.base import Resource
from subnet_groups.types import SubnetType

__all__ = ["SubnetResource", "SubnetType"]


class SubnetResource(Resource):
    """A subnet placed in exactly one availability zone.

    ``name`` is the last segment of the subnet's path and always reads
    ``<group>Subnet<ordinal>``. The group is stored alongside it; when not
    given it is taken from ``name``. ``subnet_id`` and ``availability_zone``
    are opaque and never inspected.
    """

    resource_type: ClassVar[str] = "aws_subnet"

    name: str = Field(pattern=r"^[^/]+Subnet[0-9]+$")
    scope: str = ""
    group: str = ""
    subnet_id: str
    availability_zone: str
    subnet_type: SubnetType

    @model_validator(mode="before")
    @classmethod
    def _default_group(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("group") and isinstance(data.get("name"), str):
            data = {**data, "group": strip_subnet_suffix(data["name"])}
        return data

    @model_validator(mode="after")
    def _check_group(self) -> SubnetResource:
        if strip_subnet_suffix(self.name) != self.group:
            msg = f"Subnet name {self.name!r} does not belong to group {self.group!r}"
            raise ValueError(msg)
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def path(self) -> str:
        """Full hierarchical path (e.g., 'MyVpc/PublicSubnet1')."""
        return f"{self.scope}/{self.name}" if self.scope else self.name
