# ABOUTME: OCF container access: opens the EPUB zip and finds the package document.
# ABOUTME: Archive wraps zipfile.ZipFile; locate_package_path reads META-INF/container.xml.

import io
import logging
import os
import zipfile
import zlib
from pathlib import Path

from ebooklib.epub import NAMESPACES
from lxml import etree

from lexepub.errors import (
    ArchiveCorruptError,
    EpubIOError,
    MalformedContainerError,
    MissingEntryError,
)
from lexepub.formats.xmlutil import parse_xml

logger = logging.getLogger(__name__)

CONTAINER_PATH = "META-INF/container.xml"
MIMETYPE_PATH = "mimetype"
EPUB_MIMETYPE = "application/epub+zip"

# Errors zipfile raises while decompressing a damaged or encrypted entry
_ENTRY_READ_ERRORS = (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError, RuntimeError)


class Archive:
    """A read-only EPUB zip archive.

    Created by :func:`open_archive` or :meth:`Archive.from_bytes`. The
    archive owns its file handle (or in-memory buffer) until :meth:`close`.
    """

    def __init__(self, zip_file: zipfile.ZipFile, source: str) -> None:
        self._zip = zip_file
        self.source = source

    @classmethod
    def from_bytes(cls, data: bytes, source: str = "<bytes>") -> "Archive":
        """Open an archive held entirely in memory.

        Raises:
            ArchiveCorruptError: If the data is not a readable zip archive.
        """
        return cls(_open_zip(io.BytesIO(data), source), source)

    @property
    def closed(self) -> bool:
        return self._zip.fp is None

    def names(self) -> list[str]:
        """Entry names in central-directory order."""
        return self._zip.namelist()

    def has(self, name: str) -> bool:
        """Whether an entry with this exact name exists."""
        try:
            self._zip.getinfo(_entry_name(name))
        except KeyError:
            return False
        return True

    def read(self, name: str) -> bytes:
        """Return the decompressed bytes of an entry.

        Raises:
            MissingEntryError: If no entry has this name.
            ArchiveCorruptError: If the entry data cannot be decompressed.
        """
        entry = _entry_name(name)
        try:
            info = self._zip.getinfo(entry)
        except KeyError as exc:
            raise MissingEntryError(f"Entry not found in {self.source}: {entry}") from exc

        try:
            return self._zip.read(info)
        except _ENTRY_READ_ERRORS as exc:
            raise ArchiveCorruptError(
                f"Cannot read entry {entry} from {self.source}: {exc}"
            ) from exc

    def close(self) -> None:
        """Release the underlying file handle. Safe to call more than once."""
        self._zip.close()

    def __enter__(self) -> "Archive":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<Archive {self.source!r} ({state})>"


def _entry_name(name: str) -> str:
    """Zip entry names never carry a leading slash."""
    return name.lstrip("/")


def _open_zip(file: "str | io.BytesIO", source: str) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(file)
    except (zipfile.BadZipFile, EOFError, ValueError) as exc:
        raise ArchiveCorruptError(f"Not a valid zip archive: {source}: {exc}") from exc


def open_archive(path: str | os.PathLike[str]) -> Archive:
    """Open an EPUB file as a zip archive.

    Args:
        path: Path to the EPUB file.

    Returns:
        An open Archive.

    Raises:
        EpubIOError: If the file cannot be read.
        ArchiveCorruptError: If the zip central directory cannot be parsed.
    """
    source = str(Path(path))
    try:
        zip_file = _open_zip(source, source)
    except OSError as exc:
        raise EpubIOError(f"Cannot read EPUB file: {source}: {exc}") from exc
    archive = Archive(zip_file, source)
    logger.debug("Opened %s (%d entries)", source, len(archive.names()))
    return archive


def check_mimetype(archive: Archive) -> bool:
    """Check the OCF ``mimetype`` entry, logging a warning when it is off.

    A wrong or missing mimetype never stops extraction; many real-world
    EPUBs get it wrong.
    """
    if not archive.has(MIMETYPE_PATH):
        logger.warning("%s has no mimetype entry", archive.source)
        return False

    try:
        value = archive.read(MIMETYPE_PATH).decode("ascii", errors="replace").strip()
    except ArchiveCorruptError:
        logger.warning("%s has an unreadable mimetype entry", archive.source)
        return False

    if value != EPUB_MIMETYPE:
        logger.warning("%s declares mimetype %r, expected %r", archive.source, value, EPUB_MIMETYPE)
        return False
    return True


def locate_package_path(archive: Archive) -> str:
    """Find the package (OPF) document path declared in container.xml.

    The first ``rootfile`` element wins, matching readers that ignore
    alternate renditions.

    Raises:
        MalformedContainerError: If container.xml is missing, not well-formed,
            or has no rootfile with a full-path attribute.
        ArchiveCorruptError: If container.xml cannot be decompressed.
    """
    try:
        data = archive.read(CONTAINER_PATH)
    except MissingEntryError as exc:
        raise MalformedContainerError(f"{CONTAINER_PATH} missing from {archive.source}") from exc

    try:
        root = parse_xml(data)
    except etree.XMLSyntaxError as exc:
        raise MalformedContainerError(
            f"{CONTAINER_PATH} is not well-formed in {archive.source}: {exc}"
        ) from exc

    rootfile = next(
        root.iter(f"{{{NAMESPACES['CONTAINERNS']}}}rootfile", "rootfile"),
        None,
    )
    if rootfile is None:
        raise MalformedContainerError(f"No rootfile element in {CONTAINER_PATH}")

    full_path = (rootfile.get("full-path") or "").strip()
    if not full_path:
        raise MalformedContainerError(f"rootfile in {CONTAINER_PATH} has no full-path")

    return full_path
