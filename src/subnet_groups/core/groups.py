"""Export/import of subnet groups.

A list of subnets of one type is laid out group-major, zone-minor::

    [ INGRESS_A, INGRESS_B, INGRESS_C, EGRESS_A, EGRESS_B, EGRESS_C, ... ]

so every group holds exactly one subnet per availability zone. Exporting
reduces such a list to the subnet ids plus one name per group; importing
rebuilds an equivalent list from those two lists and a list of zones.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from subnet_groups.core.naming import default_subnet_name, index_range, subnet_id, subnet_name
from subnet_groups.errors import (
    GroupCountMismatchError,
    GroupNamingMismatchError,
    GroupSizeMismatchError,
    InvalidGroupNameError,
    ZoneListEmptyError,
)
from subnet_groups.resources.subnet import SubnetResource

if TYPE_CHECKING:
    from collections.abc import Sequence

    from subnet_groups.resources.subnet import SubnetType

logger = logging.getLogger(__name__)


def pick_zone(zones: Sequence[str], i: int) -> str:
    """Return the availability zone for the subnet at position *i*."""
    if not zones:
        raise ZoneListEmptyError
    return zones[i % len(zones)]


def _group_count(count: int, zone_count: int, field_name: str | None = None) -> int:
    if zone_count < 1:
        raise ZoneListEmptyError
    groups, remainder = divmod(count, zone_count)
    if remainder:
        raise GroupSizeMismatchError(count, zone_count, field_name)
    return groups


@dataclass(frozen=True)
class SubnetGroup:
    """One named group: a subnet in each availability zone, in zone order."""

    name: str
    subnets: tuple[SubnetResource, ...] = field(default_factory=tuple)


def group_subnets(subnets: Sequence[SubnetResource], azs: int) -> list[SubnetGroup]:
    """Partition a flat subnet list into groups of *azs* subnets.

    Raises:
        GroupSizeMismatchError: If the subnet count is not a multiple of *azs*.
        GroupNamingMismatchError: If a block of *azs* subnets mixes group names.
    """
    groups = _group_count(len(subnets), azs)
    net_names = [subnet_name(s) for s in subnets]

    for i, name in enumerate(net_names):
        k = i // azs
        if name != net_names[k * azs]:
            raise GroupNamingMismatchError(net_names)

    return [
        SubnetGroup(name=net_names[g * azs], subnets=tuple(subnets[g * azs : (g + 1) * azs]))
        for g in index_range(groups)
    ]


def flatten(groups: Sequence[SubnetGroup]) -> list[SubnetResource]:
    """Inverse of :func:`group_subnets`."""
    return [s for g in groups for s in g.subnets]


class ExportSubnetGroup:
    """Reduce a subnet list to the ids and group names worth publishing.

    Validation happens in the constructor. Afterwards:

    - ``ids`` is the subnet id of every subnet, or ``None`` when there are
      no subnets at all.
    - ``names`` is one name per group, or ``None`` when the list is a single
      group carrying the default name for its subnet type.
    """

    def __init__(
        self, subnets: Sequence[SubnetResource], subnet_type: SubnetType, azs: int
    ) -> None:
        self.subnet_type = subnet_type
        self.azs = azs
        self.groups = group_subnets(subnets, azs)
        self.ids = self._export_ids(subnets)
        self.names = self._export_names()
        logger.debug(
            "Exported %d %s subnet(s) in %d group(s), names=%s",
            len(subnets),
            subnet_type.value,
            len(self.groups),
            self.names,
        )

    @staticmethod
    def _export_ids(subnets: Sequence[SubnetResource]) -> list[str] | None:
        if not subnets:
            return None
        return [s.subnet_id for s in subnets]

    def _export_names(self) -> list[str] | None:
        """Return the list of group names unless it is just the default."""
        if not self.groups:
            return None
        group_names = [g.name for g in self.groups]
        if len(group_names) == 1 and group_names[0] == default_subnet_name(self.subnet_type):
            return None
        return group_names


class ImportSubnetGroup:
    """Rebuild a subnet list from exported ids, group names and zones.

    Everything is validated and built in the constructor; ``subnets`` then
    holds the rebuilt list, group-major and zone-minor, with paths under
    *scope*. ``id_field`` and ``name_field`` only label error messages.
    """

    def __init__(
        self,
        subnet_ids: Sequence[str] | None,
        names: Sequence[str] | None,
        subnet_type: SubnetType,
        availability_zones: Sequence[str],
        id_field: str,
        name_field: str,
        *,
        scope: str = "",
    ) -> None:
        self.subnet_type = subnet_type
        self.availability_zones = list(availability_zones)
        self.subnet_ids = list(subnet_ids or [])
        self.groups = _group_count(len(self.subnet_ids), len(self.availability_zones), id_field)
        self.names = self._normalize_names(names, default_subnet_name(subnet_type), name_field)
        self.subnets = self._build(scope)

    def _normalize_names(
        self, names: Sequence[str] | None, default_name: str, field_name: str
    ) -> list[str]:
        """Return a name for every group."""
        if self.groups == 0:
            if names:
                logger.debug("Ignoring %s: no subnets to name", field_name)
            return []

        # Not given: every group carries the default name
        if not names:
            return [default_name] * self.groups

        if len(names) != self.groups:
            raise GroupCountMismatchError(field_name, list(names), self.groups)

        for name in names:
            if not name or "/" in name:
                raise InvalidGroupNameError(field_name, name)

        return list(names)

    def pick_az(self, i: int) -> str:
        """Return the i'th availability zone, wrapping around."""
        return pick_zone(self.availability_zones, i)

    def _build(self, scope: str) -> list[SubnetResource]:
        zone_count = len(self.availability_zones)
        subnets = []
        for i in index_range(len(self.subnet_ids)):
            group = self.names[i // zone_count]
            subnet = SubnetResource(
                name=subnet_id(group, i),
                scope=scope,
                group=group,
                subnet_id=self.subnet_ids[i],
                availability_zone=self.pick_az(i),
                subnet_type=self.subnet_type,
            )
            logger.debug("Imported %s in %s", subnet.address, subnet.availability_zone)
            subnets.append(subnet)
        return subnets

    def import_subnets(self) -> list[SubnetResource]:
        """The rebuilt subnets, in the order they were exported."""
        return list(self.subnets)

    def import_groups(self) -> list[SubnetGroup]:
        """Like :meth:`import_subnets`, partitioned into groups."""
        return group_subnets(self.subnets, len(self.availability_zones))
