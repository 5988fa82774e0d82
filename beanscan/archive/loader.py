from __future__ import annotations

import io
import logging
import zipfile
import zlib
from pathlib import Path
from typing import BinaryIO, Union

from beanscan.archive.model import Archive, ArchiveKind
from beanscan.errors import ArchiveError

logger = logging.getLogger(__name__)

NESTED_ARCHIVE_SUFFIXES = (".jar", ".war", ".ear")


def load_archive(path: Union[Path, str]) -> Archive:
    """Read a zip-based archive from disk into an in-memory ``Archive`` tree.

    Entries whose names end in one of ``NESTED_ARCHIVE_SUFFIXES`` and that hold
    a zip are read as nested archives; everything else becomes leaf content.
    Directory entries are skipped. Unreadable entries raise ``ArchiveError``.
    """

    archive_path = Path(path)

    if not archive_path.exists():
        raise ArchiveError(f"Archive does not exist: {archive_path}")
    if not archive_path.is_file():
        raise ArchiveError(f"Archive is not a file: {archive_path}")

    try:
        with archive_path.open("rb") as fh:
            return _read_archive(archive_path.name, fh)
    except OSError as exc:
        raise ArchiveError(
            f"Failed to read archive: {archive_path}"
        ) from exc


def load_archive_bytes(name: str, data: bytes) -> Archive:
    return _read_archive(name, io.BytesIO(data))


def _read_archive(name: str, source: BinaryIO) -> Archive:
    archive = Archive(name, ArchiveKind.from_name(name))

    try:
        with zipfile.ZipFile(source) as zf:
            for info in zf.infolist():
                if info.is_dir():
                    continue

                data = _read_entry(zf, info, name)
                entry_name = info.filename.rsplit("/", 1)[-1]

                if _is_nested_archive(entry_name, data):
                    logger.debug("Reading nested archive %s!/%s", name, info.filename)
                    archive.add_archive(
                        info.filename,
                        _read_archive(entry_name, io.BytesIO(data)),
                    )
                else:
                    archive.add_bytes(info.filename, data)
    except zipfile.BadZipFile as exc:
        raise ArchiveError(f"Not a valid zip archive: {name}") from exc

    logger.debug("Loaded %s (%s) with %d entries", name, archive.kind.value, len(archive))
    return archive


def _read_entry(zf: zipfile.ZipFile, info: zipfile.ZipInfo, name: str) -> bytes:
    try:
        return zf.read(info)
    except (zipfile.BadZipFile, zlib.error, RuntimeError, NotImplementedError, OSError) as exc:
        raise ArchiveError(
            f"Failed to read entry {info.filename} from {name}: {exc}"
        ) from exc


def _is_nested_archive(entry_name: str, data: bytes) -> bool:
    # resources that merely carry an archive suffix stay leaf content
    if not entry_name.lower().endswith(NESTED_ARCHIVE_SUFFIXES):
        return False
    return zipfile.is_zipfile(io.BytesIO(data))
