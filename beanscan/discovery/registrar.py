from __future__ import annotations

import functools
import logging
from typing import Mapping

from beanscan.archive.model import Archive, Node
from beanscan.discovery.consumers import DescriptorRegistry
from beanscan.discovery.location import DescriptorLocation
from beanscan.errors import DescriptorRegistrationError

logger = logging.getLogger(__name__)


def register_descriptors(
    archive: Archive,
    matches: Mapping[str, Node],
    registry: DescriptorRegistry,
    *,
    scheme: str = "archive",
) -> bool:
    """Hand every matched descriptor to ``registry`` as a deferred location.

    Returns ``True`` if ``matches`` contained at least one entry. The first
    registry failure aborts the remaining matches.
    """

    found = False

    for path in matches:
        location = DescriptorLocation(
            archive_name=archive.name,
            path=path,
            # resolved by key on open, never at construction
            opener=functools.partial(archive.open_stream, path),
            scheme=scheme,
        )

        try:
            registry.add_descriptor_location(location)
        except DescriptorRegistrationError:
            raise
        except Exception as exc:
            raise DescriptorRegistrationError(
                f"Error while parsing descriptor location {location.url}: {exc}"
            ) from exc

        logger.debug("Registered descriptor %s", location.url)
        found = True

    return found
