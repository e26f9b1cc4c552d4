"""Configuration models for YAML-described networks."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from subnet_groups.core.naming import slugify
from subnet_groups.core.network import (
    SubnetConfiguration,  # noqa: TC001
    VpcNetwork,
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class StoreSettings(BaseSettings):
    """Export store settings.

    Fields can be set via YAML (constructor kwargs) or environment variables
    with the ``SUBNET_GROUPS_STORE_`` prefix.  Constructor kwargs take precedence.
    """

    model_config = SettingsConfigDict(env_prefix="SUBNET_GROUPS_STORE_")

    path: Path = Path(".subnet-exports.json")


class LogSettings(BaseSettings):
    """Log level taken from ``SUBNET_GROUPS_LOG``; unset leaves logging untouched."""

    model_config = SettingsConfigDict(env_prefix="SUBNET_GROUPS_")

    log: str | None = None

    @field_validator("log")
    @classmethod
    def _known_level(cls, v: str | None) -> str | None:
        if not v:
            return None
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"expected one of {', '.join(LOG_LEVELS)}, got {v!r}")
        return level


def _none_to_list(v: Any) -> Any:
    return v if v is not None else []


class VpcConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    vpc_id: str = Field(min_length=1)
    availability_zones: list[str] = Field(min_length=1)
    subnets: Annotated[list[SubnetConfiguration], BeforeValidator(_none_to_list)] = []

    @model_validator(mode="after")
    def _check_subnets(self) -> VpcConfig:
        seen: dict[str, str] = {}
        for cfg in self.subnets:
            slug = slugify(cfg.name)
            if not slug:
                raise ValueError(f"Subnet name {cfg.name!r} has no letters or digits")
            if slug in seen:
                raise ValueError(
                    f"Duplicate subnet name {cfg.name!r} (collides with {seen[slug]!r})"
                )
            seen[slug] = cfg.name
        return self


class Config(BaseModel):
    """Network configuration, validated straight from YAML."""

    model_config = ConfigDict(extra="forbid")

    store: StoreSettings = Field(default_factory=StoreSettings)
    export_name: str | None = None
    vpc: VpcConfig
    config_dir: Path = Path()

    @property
    def store_path(self) -> Path:
        """Store path, relative paths taken from the config file's directory."""
        if self.store.path.is_absolute():
            return self.store.path
        return self.config_dir / self.store.path

    def network(self) -> VpcNetwork:
        return VpcNetwork.from_subnet_configuration(
            self.vpc.name,
            self.vpc.vpc_id,
            self.vpc.availability_zones,
            self.vpc.subnets,
        )
