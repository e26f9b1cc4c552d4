"""YAML configuration loading and convenience export/import API."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from subnet_groups.config.loader import ConfigError, load_config
from subnet_groups.config.schema import Config, StoreSettings, VpcConfig
from subnet_groups.core.lock import store_lock
from subnet_groups.core.network import VpcNetwork, VpcNetworkRefProps
from subnet_groups.core.store import ExportStore

logger = logging.getLogger(__name__)

__all__ = [
    "Config",
    "ConfigError",
    "StoreSettings",
    "VpcConfig",
    "export",
    "import_network",
    "load",
    "load_config",
    "load_props",
    "save_props",
]


def load(path: Path | str) -> Config:
    """Load a YAML configuration file."""
    return load_config(path)


def export(config: Config) -> VpcNetworkRefProps:
    """Build the configured network and publish it to the export store.

    The store file is read, updated and written back under a lock.
    """
    network = config.network()
    export_name = config.export_name if config.export_name is not None else network.name
    with store_lock(config.store_path) as path:
        store = ExportStore.load_or_create(path)
        props = network.export(store, export_name)
        store.serial += 1
        store.save(path)
    return props


def import_network(
    props: VpcNetworkRefProps, store_path: Path | str | None = None, *, name: str = "ImportedVpc"
) -> VpcNetwork:
    """Rebuild a network from exported props, resolving ids from a store file."""
    store = None
    if store_path is not None:
        store = ExportStore.load(Path(store_path))
    return VpcNetwork.import_(props, store, name=name)


def save_props(props: VpcNetworkRefProps, path: Path | str) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = props.model_dump(mode="json")
    path.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    logger.debug("Props written to %s", path)


def load_props(path: Path | str) -> VpcNetworkRefProps:
    path = Path(path)
    return VpcNetworkRefProps.model_validate_json(path.read_text(encoding="utf-8"))
