"""Kube-mirror apply action.

Reads kubernetes objects from YAML files and writes them through to the
configured store, for seeding a mirror or reconciling it by hand.
"""

from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
from collections.abc import Generator
import logging
import pathlib
from typing import cast

import yaml

from kube_mirror.events import EventType, ResourceEvent, apply_events
from kube_mirror.exceptions import InputException
from kube_mirror.resource import Resource

from .common import add_config_flags, open_configured_store

_LOGGER = logging.getLogger(__name__)


def read_resources(paths: list[pathlib.Path]) -> Generator[Resource, None, None]:
    """Read all objects from the multi-document YAML files in order."""
    for path in paths:
        try:
            docs = list(yaml.safe_load_all(path.read_text()))
        except OSError as err:
            raise InputException(f"Unable to read {path}: {err}") from err
        except yaml.YAMLError as err:
            raise InputException(f"`{path}` failed to parse as yaml: {err}") from err
        for doc in docs:
            if doc is None:
                continue
            yield Resource.parse_doc(doc)


class ApplyAction:
    """Kube-mirror apply action."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "apply",
                help="Write kubernetes objects from YAML files to the store",
                description="""Read kubernetes objects from YAML files and apply
                    the same event to each of them, in file order.""",
            ),
        )
        add_config_flags(args)
        args.add_argument(
            "--event",
            choices=[str(event) for event in EventType],
            default=str(EventType.ADD),
            help="The event to apply to each object",
        )
        args.add_argument(
            "paths",
            type=pathlib.Path,
            nargs="+",
            help="YAML files containing kubernetes objects",
        )
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        config: pathlib.Path,
        event: str,
        paths: list[pathlib.Path],
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        event_type = EventType(event)
        resources = list(read_resources(paths))
        store = open_configured_store(config)
        count = apply_events(
            store, (ResourceEvent(event_type, resource) for resource in resources)
        )
        print(f"Applied {count} {event_type} event(s)")
