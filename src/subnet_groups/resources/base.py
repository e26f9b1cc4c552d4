"""Base resource class."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, computed_field


class Resource(BaseModel):
    """Base class for provisioned resources.

    Resources are pure data and immutable once constructed.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    resource_type: ClassVar[str]

    name: str = Field(pattern=r"^[a-zA-Z0-9_]+$")

    @computed_field
    @property
    def address(self) -> str:
        """Unique address for this resource (e.g., 'aws_subnet.PublicSubnet1')."""
        return f"{self.resource_type}.{self.name}"
