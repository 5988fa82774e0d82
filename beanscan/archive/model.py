from __future__ import annotations

import io
import re
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Dict, Iterator, Pattern, Union

from beanscan.errors import ArchiveError


class ArchiveKind(str, Enum):
    WEB = "web"
    LIBRARY = "library"
    UNSUPPORTED = "unsupported"

    @classmethod
    def from_name(cls, name: str) -> "ArchiveKind":
        lowered = name.lower()
        if lowered.endswith(".war"):
            return cls.WEB
        if lowered.endswith(".jar"):
            return cls.LIBRARY
        return cls.UNSUPPORTED


@dataclass(frozen=True)
class BytesAsset:
    data: bytes

    def open_stream(self) -> BinaryIO:
        return io.BytesIO(self.data)


@dataclass(frozen=True)
class ArchiveAsset:
    archive: "Archive"

    def open_stream(self) -> BinaryIO:
        raise ArchiveError(
            f"Nested archive has no byte stream: {self.archive.name}"
        )


Asset = Union[BytesAsset, ArchiveAsset]


@dataclass(frozen=True)
class Node:
    path: str
    asset: Asset

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def is_archive(self) -> bool:
        return isinstance(self.asset, ArchiveAsset)

    def open_stream(self) -> BinaryIO:
        return self.asset.open_stream()


class Archive:
    """An in-memory archive: an insertion-ordered mapping of absolute paths to nodes.

    Paths are slash-delimited and always start with ``/``. Lookups by pattern
    use full regular-expression matches against the path, so ``.*\\.class``
    selects every class entry regardless of depth.
    """

    def __init__(self, name: str, kind: ArchiveKind | None = None) -> None:
        if not name:
            raise ArchiveError("Archive name cannot be empty")
        self.name = name
        self.kind = kind if kind is not None else ArchiveKind.from_name(name)
        self._entries: Dict[str, Node] = {}

    def __repr__(self) -> str:
        return f"Archive(name={self.name!r}, kind={self.kind.value}, entries={len(self)})"

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        try:
            return normalize_path(path) in self._entries
        except ArchiveError:
            return False

    def add(self, path: str, asset: Asset) -> Node:
        normalized = normalize_path(path)
        if normalized in self._entries:
            raise ArchiveError(f"Duplicate entry {normalized} in {self.name}")
        node = Node(path=normalized, asset=asset)
        self._entries[normalized] = node
        return node

    def add_bytes(self, path: str, data: bytes) -> Node:
        return self.add(path, BytesAsset(data))

    def add_archive(self, path: str, archive: "Archive") -> Node:
        return self.add(path, ArchiveAsset(archive))

    def get(self, path: str) -> Node:
        normalized = normalize_path(path)
        try:
            return self._entries[normalized]
        except KeyError:
            raise ArchiveError(
                f"No entry {normalized} in archive {self.name}"
            ) from None

    def open_stream(self, path: str) -> BinaryIO:
        return self.get(path).open_stream()

    def content(self, pattern: Union[str, Pattern[str]]) -> Dict[str, Node]:
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        return {
            path: node
            for path, node in self._entries.items()
            if regex.fullmatch(path)
        }


def normalize_path(path: str) -> str:
    parts = [part for part in path.replace("\\", "/").split("/") if part]
    if not parts:
        raise ArchiveError(f"Invalid archive path: {path!r}")
    return "/" + "/".join(parts)
