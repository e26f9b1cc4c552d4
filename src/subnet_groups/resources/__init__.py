"""Subnet resource definitions."""

from subnet_groups.resources.base import Resource
from subnet_groups.resources.subnet import SubnetResource, SubnetType

__all__ = [
    "Resource",
    "SubnetResource",
    "SubnetType",
]
