"""Kube-mirror ensure-indexes action."""

from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
import logging
import pathlib
from typing import cast

from .common import add_config_flags, open_configured_store

_LOGGER = logging.getLogger(__name__)


class EnsureIndexesAction:
    """Kube-mirror ensure-indexes action."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "ensure-indexes",
                help="Create the configured indexes in the store",
                description="""Create every index declared in the configuration in
                    the collection of its resource type. Existing indexes are left
                    unchanged.""",
            ),
        )
        add_config_flags(args)
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        config: pathlib.Path,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        open_configured_store(config)
        print("Indexes ensured")
