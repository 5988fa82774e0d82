"""
Shared fixtures for the discovery tests.

Archives are built in memory; class entries carry their own name as content
so the order in which they reach an indexer can be asserted on directly.
"""

import io
import zipfile
import zlib
from pathlib import Path
from typing import BinaryIO, Dict, List

import pytest

from beanscan.archive.model import Archive
from beanscan.discovery.location import DescriptorLocation


class RecordingRegistry:
    def __init__(self) -> None:
        self.locations: List[DescriptorLocation] = []

    def add_descriptor_location(self, location: DescriptorLocation) -> None:
        self.locations.append(location)

    @property
    def urls(self) -> List[str]:
        return [location.url for location in self.locations]


class RecordingIndexer:
    def __init__(self) -> None:
        self.fed: List[bytes] = []

    def scan_class(self, stream: BinaryIO) -> None:
        self.fed.append(stream.read())


class CountingAsset:
    """Leaf asset that counts how often its stream is opened."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.opened = 0

    def open_stream(self) -> BinaryIO:
        self.opened += 1
        return io.BytesIO(self.data)


@pytest.fixture
def registry() -> RecordingRegistry:
    return RecordingRegistry()


@pytest.fixture
def indexer() -> RecordingIndexer:
    return RecordingIndexer()


@pytest.fixture
def library_jar() -> Archive:
    jar = Archive("lib.jar")
    jar.add_bytes("/META-INF/beans.xml", b"<beans/>")
    jar.add_bytes("/com/acme/x.class", b"x.class")
    return jar


@pytest.fixture
def web_war() -> Archive:
    war = Archive("app.war")
    war.add_bytes("/WEB-INF/beans.xml", b"<beans/>")
    war.add_bytes("/WEB-INF/classes/com/acme/a.class", b"a.class")
    war.add_bytes("/WEB-INF/classes/com/acme/b.class", b"b.class")
    war.add_bytes("/index.html", b"<html/>")
    return war


def write_zip(path: Path, entries: Dict[str, bytes]) -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return path


def zip_bytes(entries: Dict[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return buffer.getvalue()


def corrupt_deflate_zip(name: str, payload: bytes) -> bytes:
    data = bytearray(zip_bytes_deflated({name: payload}))
    compressor = zlib.compressobj(zlib.Z_DEFAULT_COMPRESSION, zlib.DEFLATED, -15)
    compressed = compressor.compress(payload) + compressor.flush()
    offset = bytes(data).index(compressed)
    # reserved block type, rejected by the inflater
    data[offset] = 0xFF
    return bytes(data)


def zip_bytes_deflated(entries: Dict[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return buffer.getvalue()
