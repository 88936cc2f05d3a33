"""Flags and helpers shared by kube-mirror actions."""

from argparse import ArgumentParser
import logging
import pathlib

from kube_mirror.config import read_config
from kube_mirror.store import Store, open_store

_LOGGER = logging.getLogger(__name__)


def add_config_flags(args: ArgumentParser) -> None:
    """Add the flags selecting the configuration file."""
    args.add_argument(
        "--config",
        type=pathlib.Path,
        required=True,
        help="Path to the kube-mirror YAML configuration file",
    )


def open_configured_store(config_path: pathlib.Path) -> Store:
    """Open the store from the configuration and declare its indexes."""
    config = read_config(config_path)
    store = open_store(config)
    _LOGGER.debug("Opened store %s", type(store).__name__)
    store.ensure_indexes()
    return store
