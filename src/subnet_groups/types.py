"""Shared enum types."""

from __future__ import annotations

from enum import Enum


class SubnetType(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    ISOLATED = "isolated"
