from __future__ import annotations

from dataclasses import dataclass, field
from typing import BinaryIO, Callable


@dataclass(frozen=True)
class DescriptorLocation:
    """Logical location of a discovered descriptor.

    The byte stream is produced on demand by ``opener``; building a location
    never touches the underlying entry. Each ``open_stream`` call returns a
    fresh stream owned by the caller.
    """

    archive_name: str
    path: str
    opener: Callable[[], BinaryIO] = field(repr=False, compare=False)
    scheme: str = "archive"

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.archive_name}{self.path}"

    def open_stream(self) -> BinaryIO:
        return self.opener()

    def read_bytes(self) -> bytes:
        with self.open_stream() as stream:
            return stream.read()

    def __str__(self) -> str:
        return self.url
