"""Shared fixtures for unit tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from subnet_groups.config import load
from subnet_groups.core.naming import subnet_id
from subnet_groups.resources.subnet import SubnetResource, SubnetType

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from subnet_groups.config.schema import Config

_ENV_VARS = ("SUBNET_GROUPS_STORE_PATH", "SUBNET_GROUPS_LOG", "NO_COLOR")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove SUBNET_GROUPS_* env vars so unit tests don't leak host config."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., Config]:
    """Factory fixture: write YAML + optional .env, return loaded Config."""

    def _make(yaml_str: str, *, dotenv: str | None = None) -> Config:
        (tmp_path / "config.yaml").write_text(yaml_str)
        if dotenv is not None:
            (tmp_path / ".env").write_text(dotenv)
        return load(tmp_path / "config.yaml")

    return _make


@pytest.fixture
def make_subnets() -> Callable[..., list[SubnetResource]]:
    """Factory fixture: one subnet per entry of *groups*, zones assigned round-robin.

    ``make_subnets(["A", "A", "B", "B"], ["az1", "az2"])`` gives
    ``ASubnet1, ASubnet2, BSubnet1, BSubnet2``.
    """

    def _make(
        groups: Sequence[str],
        zones: Sequence[str],
        subnet_type: SubnetType = SubnetType.PRIVATE,
    ) -> list[SubnetResource]:
        counters: dict[str, int] = {}
        subnets = []
        for i, group in enumerate(groups):
            n = counters.get(group, 0)
            counters[group] = n + 1
            subnets.append(
                SubnetResource(
                    name=subnet_id(group, n),
                    scope="Vpc",
                    subnet_id=f"subnet-{i}",
                    availability_zone=zones[i % len(zones)],
                    subnet_type=subnet_type,
                )
            )
        return subnets

    return _make
