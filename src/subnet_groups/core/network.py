"""VPC networks: subnet layout, export to a store and re-import."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from subnet_groups.core.groups import ExportSubnetGroup, ImportSubnetGroup, pick_zone
from subnet_groups.core.naming import slugify, subnet_id
from subnet_groups.errors import GroupSizeMismatchError, ZoneListEmptyError
from subnet_groups.resources.subnet import SubnetResource, SubnetType

if TYPE_CHECKING:
    from collections.abc import Sequence

    from subnet_groups.core.store import ExportStore

logger = logging.getLogger(__name__)

# SubnetType -> (export key suffix, field prefix on VpcNetworkRefProps)
_EXPORT_KEYS: dict[SubnetType, tuple[str, str]] = {
    SubnetType.PUBLIC: ("PublicSubnetIDs", "public_subnet"),
    SubnetType.PRIVATE: ("PrivateSubnetIDs", "private_subnet"),
    SubnetType.ISOLATED: ("IsolatedSubnetIDs", "isolated_subnet"),
}


class SubnetConfiguration(BaseModel):
    """A named group of subnets of one type, one subnet id per availability zone."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    type: SubnetType
    subnet_ids: list[str] = Field(default_factory=list)


class VpcNetworkRefProps(BaseModel):
    """Everything a consumer needs to rebuild a VPC's subnet layout.

    Id fields hold store references (or literal ids); name fields are
    ``None`` when the subnets form a single default-named group.
    """

    vpc_id: str
    availability_zones: list[str]
    public_subnet_ids: list[str] | None = None
    public_subnet_names: list[str] | None = None
    private_subnet_ids: list[str] | None = None
    private_subnet_names: list[str] | None = None
    isolated_subnet_ids: list[str] | None = None
    isolated_subnet_names: list[str] | None = None


class VpcNetwork(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    vpc_id: str = Field(min_length=1)
    availability_zones: list[str] = Field(min_length=1)
    public_subnets: list[SubnetResource] = Field(default_factory=list)
    private_subnets: list[SubnetResource] = Field(default_factory=list)
    isolated_subnets: list[SubnetResource] = Field(default_factory=list)

    @classmethod
    def from_subnet_configuration(
        cls,
        name: str,
        vpc_id: str,
        availability_zones: Sequence[str],
        configuration: Sequence[SubnetConfiguration],
    ) -> VpcNetwork:
        """Lay out every configuration entry in order, zones assigned round-robin.

        An entry normally carries one subnet id per zone; each further multiple
        of the zone count adds another group of the same name.
        """
        if not availability_zones:
            raise ZoneListEmptyError
        by_type: dict[SubnetType, list[SubnetResource]] = {t: [] for t in SubnetType}
        for cfg in configuration:
            if len(cfg.subnet_ids) % len(availability_zones):
                raise GroupSizeMismatchError(
                    len(cfg.subnet_ids), len(availability_zones), f"subnet_ids of {cfg.name!r}"
                )
            group = slugify(cfg.name)
            for j, sid in enumerate(cfg.subnet_ids):
                by_type[cfg.type].append(
                    SubnetResource(
                        name=subnet_id(group, j),
                        scope=name,
                        group=group,
                        subnet_id=sid,
                        availability_zone=pick_zone(availability_zones, j),
                        subnet_type=cfg.type,
                    )
                )
        return cls(
            name=name,
            vpc_id=vpc_id,
            availability_zones=list(availability_zones),
            public_subnets=by_type[SubnetType.PUBLIC],
            private_subnets=by_type[SubnetType.PRIVATE],
            isolated_subnets=by_type[SubnetType.ISOLATED],
        )

    def subnets(self, subnet_type: SubnetType) -> list[SubnetResource]:
        return {
            SubnetType.PUBLIC: self.public_subnets,
            SubnetType.PRIVATE: self.private_subnets,
            SubnetType.ISOLATED: self.isolated_subnets,
        }[subnet_type]

    def export(self, store: ExportStore, export_prefix: str | None = None) -> VpcNetworkRefProps:
        """Publish subnet ids to *store* and return the props to hand to consumers.

        Every subnet list is validated before anything is published.
        """
        prefix = slugify(export_prefix if export_prefix is not None else self.name)
        azs = len(self.availability_zones)
        exported = {t: ExportSubnetGroup(self.subnets(t), t, azs) for t in SubnetType}

        fields: dict[str, list[str] | None] = {}
        for subnet_type, group in exported.items():
            key_suffix, field_prefix = _EXPORT_KEYS[subnet_type]
            ids = None
            if group.ids is not None:
                ids = store.publish(prefix + key_suffix, group.ids)
            fields[f"{field_prefix}_ids"] = ids
            fields[f"{field_prefix}_names"] = group.names

        (vpc_ref,) = store.publish(prefix + "VpcId", [self.vpc_id])
        logger.info("Exported VPC %s under prefix %s", self.name, prefix)
        return VpcNetworkRefProps(
            vpc_id=vpc_ref,
            availability_zones=list(self.availability_zones),
            **fields,
        )

    @classmethod
    def import_(
        cls,
        props: VpcNetworkRefProps,
        store: ExportStore | None = None,
        *,
        name: str = "ImportedVpc",
    ) -> VpcNetwork:
        """Rebuild a network from *props*, resolving references against *store*.

        Without a store, every id in *props* must already be literal.
        """
        vpc_id = store.resolve(props.vpc_id) if store is not None else props.vpc_id
        subnets: dict[SubnetType, list[SubnetResource]] = {}
        for subnet_type, (_, field_prefix) in _EXPORT_KEYS.items():
            id_field = f"{field_prefix}_ids"
            name_field = f"{field_prefix}_names"
            ids = getattr(props, id_field)
            if store is not None:
                ids = store.resolve_all(ids)
            group = ImportSubnetGroup(
                ids,
                getattr(props, name_field),
                subnet_type,
                props.availability_zones,
                id_field,
                name_field,
                scope=name,
            )
            subnets[subnet_type] = group.import_subnets()

        logger.info("Imported VPC %s (%s)", name, vpc_id)
        return cls(
            name=name,
            vpc_id=vpc_id,
            availability_zones=list(props.availability_zones),
            public_subnets=subnets[SubnetType.PUBLIC],
            private_subnets=subnets[SubnetType.PRIVATE],
            isolated_subnets=subnets[SubnetType.ISOLATED],
        )
