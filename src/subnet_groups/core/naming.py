"""Identifier helpers for subnets and their groups.

Every subnet identifier looks like ``<group>Subnet<ordinal>``, where the
ordinal is 1-based.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from subnet_groups.types import SubnetType

if TYPE_CHECKING:
    from subnet_groups.resources.subnet import SubnetResource

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")
_SUBNET_SUFFIX = re.compile(r"Subnet(\d+)$")

_DEFAULT_NAMES: dict[SubnetType, str] = {
    SubnetType.PUBLIC: "Public",
    SubnetType.PRIVATE: "Private",
    SubnetType.ISOLATED: "Isolated",
}


def slugify(text: str) -> str:
    """Strip everything but ASCII letters and digits.

    No attempt is made to avoid collisions between different inputs.
    """
    return _NON_ALNUM.sub("", text)


def default_subnet_name(subnet_type: SubnetType) -> str:
    """Default group name for a subnet type."""
    return _DEFAULT_NAMES[SubnetType(subnet_type)]


def strip_subnet_suffix(identifier: str) -> str:
    """Remove a trailing ``Subnet<digits>`` from *identifier*.

    Identifiers without the suffix are returned unchanged.
    """
    stripped = _SUBNET_SUFFIX.sub("", identifier)
    if stripped == identifier:
        logger.debug("Identifier %r has no Subnet<n> suffix", identifier)
    return stripped


def subnet_name(subnet: SubnetResource) -> str:
    """Group name of a subnet."""
    return subnet.group


def subnet_id(name: str, i: int) -> str:
    """Identifier of the subnet at zero-based position *i* of group *name*."""
    return f"{name}Subnet{i + 1}"


def index_range(n: int) -> list[int]:
    """Return ``[0, 1, ..., n - 1]``."""
    return list(range(n))
