from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from beanscan.archive.layout import ArchiveLayout
from beanscan.archive.model import Archive, ArchiveAsset, ArchiveKind
from beanscan.config import ScanConfig
from beanscan.discovery.consumers import ClassIndexer, DescriptorRegistry
from beanscan.discovery.feeder import feed_classes
from beanscan.discovery.registrar import register_descriptors
from beanscan.errors import ArchiveError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanStats:
    archives_scanned: int = 0
    descriptors_registered: int = 0
    classes_fed: int = 0

    def __add__(self, other: "ScanStats") -> "ScanStats":
        return ScanStats(
            archives_scanned=self.archives_scanned + other.archives_scanned,
            descriptors_registered=self.descriptors_registered
            + other.descriptors_registered,
            classes_fed=self.classes_fed + other.classes_fed,
        )


class MetaDataDiscovery:
    """Discovers marker descriptors and class files in an in-memory archive.

    Supported kinds are web archives (``.war``) and library archives
    (``.jar``). For a library archive the marker is looked up at
    ``/META-INF/<marker>``; for a web archive at ``/WEB-INF/<marker>`` and at
    ``/WEB-INF/classes/META-INF/<marker>``. When a marker is found every class
    entry of that archive is fed to the indexer. Library archives under
    ``/WEB-INF/lib`` are always scanned on their own, whatever the state of the
    enclosing web archive.

    Enterprise archives and other kinds are not scanned at all.
    """

    def __init__(
        self,
        archive: Archive,
        *,
        registry: DescriptorRegistry,
        indexer: ClassIndexer,
        config: Optional[ScanConfig] = None,
    ) -> None:
        self.archive = archive
        self.registry = registry
        self.indexer = indexer
        self.config = config or ScanConfig()
        self.layout = ArchiveLayout.from_config(self.config)

    def configure(self) -> ScanStats:
        stats = self.scan_archive(self.archive)
        logger.info(
            "Scanned %d archive(s) from %s: %d descriptor(s), %d class(es)",
            stats.archives_scanned,
            self.archive.name,
            stats.descriptors_registered,
            stats.classes_fed,
        )
        return stats

    def scan_archive(self, archive: Archive) -> ScanStats:
        if archive.kind is ArchiveKind.WEB:
            return self._scan_web_archive(archive)
        elif archive.kind is ArchiveKind.LIBRARY:
            return self._scan_library_archive(archive)
        elif archive.kind is ArchiveKind.UNSUPPORTED:
            logger.debug("Skipping unsupported archive %s", archive.name)
            return ScanStats()

        raise ArchiveError(f"Unknown archive kind: {archive.kind!r}")

    def _scan_library_archive(self, archive: Archive) -> ScanStats:
        logger.debug("Scanning library archive %s", archive.name)

        markers = archive.content(self.layout.library_marker_pattern())
        present = self._register(archive, markers)

        classes_fed = self._feed(archive) if present else 0

        return ScanStats(
            archives_scanned=1,
            descriptors_registered=len(markers),
            classes_fed=classes_fed,
        )

    def _scan_web_archive(self, archive: Archive) -> ScanStats:
        logger.debug("Scanning web archive %s", archive.name)

        present = False
        descriptors = 0
        for pattern in self.layout.web_marker_patterns():
            markers = archive.content(pattern)
            present |= self._register(archive, markers)
            descriptors += len(markers)

        # all classes of the unit, not only WEB-INF/classes
        classes_fed = self._feed(archive) if present else 0

        stats = ScanStats(
            archives_scanned=1,
            descriptors_registered=descriptors,
            classes_fed=classes_fed,
        )

        libraries = archive.content(self.layout.web_library_pattern())
        for path, node in libraries.items():
            if not isinstance(node.asset, ArchiveAsset):
                raise ArchiveError(
                    f"Library entry is not an archive: {archive.name}{path}"
                )
            stats = stats + self.scan_archive(node.asset.archive)

        return stats

    def _register(self, archive: Archive, markers: dict) -> bool:
        return register_descriptors(
            archive,
            markers,
            self.registry,
            scheme=self.config.url_scheme,
        )

    def _feed(self, archive: Archive) -> int:
        count = feed_classes(
            archive,
            self.indexer,
            class_pattern=self.layout.class_pattern(),
        )
        logger.info("Fed %d class(es) from %s", count, archive.name)
        return count


def discover(
    archive: Archive,
    *,
    registry: DescriptorRegistry,
    indexer: ClassIndexer,
    config: Optional[ScanConfig] = None,
) -> ScanStats:
    return MetaDataDiscovery(
        archive,
        registry=registry,
        indexer=indexer,
        config=config,
    ).configure()
