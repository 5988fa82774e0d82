from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from typing import BinaryIO, Dict, List, Protocol

from beanscan.discovery.location import DescriptorLocation

logger = logging.getLogger(__name__)


class DescriptorRegistry(Protocol):
    def add_descriptor_location(self, location: DescriptorLocation) -> None:
        ...


class ClassIndexer(Protocol):
    def scan_class(self, stream: BinaryIO) -> None:
        ...


@dataclass(frozen=True)
class ClassRecord:
    index: int
    size: int
    digest: str


class DescriptorCollector:
    """Registry that keeps every distinct location, in registration order.

    Nested archives are named by file name only, so two libraries with the
    same name can yield the same URL; the first location for a URL is kept.
    """

    def __init__(self) -> None:
        self._locations: Dict[str, DescriptorLocation] = {}

    def add_descriptor_location(self, location: DescriptorLocation) -> None:
        if location.url in self._locations:
            logger.debug("Ignoring duplicate descriptor location %s", location.url)
            return
        self._locations[location.url] = location

    @property
    def locations(self) -> List[DescriptorLocation]:
        return list(self._locations.values())

    @property
    def urls(self) -> List[str]:
        return list(self._locations)

    def __len__(self) -> int:
        return len(self._locations)


class ClassCollector:
    """Indexer that reads each class stream fully and records what it saw."""

    def __init__(self) -> None:
        self.records: List[ClassRecord] = []

    def scan_class(self, stream: BinaryIO) -> None:
        data = stream.read()
        self.records.append(
            ClassRecord(
                index=len(self.records),
                size=len(data),
                digest=hashlib.sha256(data).hexdigest(),
            )
        )

    @property
    def bytes_read(self) -> int:
        return sum(record.size for record in self.records)

    def __len__(self) -> int:
        return len(self.records)
