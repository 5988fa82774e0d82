from __future__ import annotations

import logging

from beanscan.archive.model import Archive
from beanscan.discovery.consumers import ClassIndexer
from beanscan.errors import ClassScanError

logger = logging.getLogger(__name__)


def feed_classes(
    archive: Archive,
    indexer: ClassIndexer,
    *,
    class_pattern: str = r".*\.class",
) -> int:
    classes = archive.content(class_pattern)

    for path, node in classes.items():
        try:
            with node.open_stream() as stream:
                indexer.scan_class(stream)
        except Exception as exc:
            raise ClassScanError(
                f"Could not scan class {archive.name}{path}: {exc}"
            ) from exc

        logger.debug("Fed class %s%s", archive.name, path)

    return len(classes)
