"""Subnet group error types."""

from __future__ import annotations


class SubnetGroupError(Exception):
    """Base exception for subnet group errors."""


class ZoneListEmptyError(SubnetGroupError):
    """Raised when zone assignment is requested without any availability zones."""

    def __init__(self) -> None:
        super().__init__("At least one availability zone is required")


class GroupSizeMismatchError(SubnetGroupError):
    """Raised when a subnet count is not a multiple of the zone count."""

    def __init__(self, count: int, zone_count: int, field: str | None = None) -> None:
        if field is None:
            msg = (
                f"Number of subnets ({count}) must be a multiple of "
                f"number of availability zones ({zone_count})"
            )
        else:
            msg = (
                f"Amount of {field} ({count}) must be a multiple of "
                f"availability zones ({zone_count})."
            )
        super().__init__(msg)
        self.count = count
        self.zone_count = zone_count
        self.field = field


class GroupNamingMismatchError(SubnetGroupError):
    """Raised when subnets sharing a group-sized block disagree on their group name."""

    def __init__(self, names: list[str]) -> None:
        super().__init__(f"Subnets must be grouped by name, got: {names!r}")
        self.names = names


class GroupCountMismatchError(SubnetGroupError):
    """Raised when an explicit name list does not have one entry per group."""

    def __init__(self, field: str, names: list[str], groups: int) -> None:
        super().__init__(
            f"{field} must have an entry for every corresponding subnet group "
            f"({groups}), got: {names!r}"
        )
        self.field = field
        self.names = names
        self.groups = groups


class ExportNotFoundError(SubnetGroupError):
    """Raised when an import reference points at a missing export."""

    def __init__(self, key: str, index: int | None = None) -> None:
        msg = f"No export named {key!r}"
        if index is not None:
            msg = f"Export {key!r} has no value at index {index}"
        super().__init__(msg)
        self.key = key
        self.index = index


class StoreLockError(SubnetGroupError):
    """Raised when the export store lock cannot be acquired or released."""


class InvalidGroupNameError(SubnetGroupError):
    """Raised when a group name cannot form a subnet identifier."""

    def __init__(self, field: str, name: str) -> None:
        super().__init__(
            f"{field} entries must be non-empty and contain no '/', got: {name!r}"
        )
        self.field = field
        self.name = name
