# ABOUTME: EpubDocument, the aggregate that runs the whole extraction pipeline once.
# ABOUTME: Counts and metadata are computed eagerly at construction and cached for reads.

import logging
import os
from collections.abc import Callable, Mapping

from lexepub.config import DEFAULT_SETTINGS, ExtractorSettings
from lexepub.core.counter import count
from lexepub.errors import DocumentClosedError
from lexepub.formats.container import Archive, check_mimetype, locate_package_path, open_archive
from lexepub.formats.content import (
    ChapterText,
    ContentExtraction,
    SkippedItem,
    extract_content,
)
from lexepub.formats.package import ManifestEntry, PackageDocument, SpineItem, parse_package
from lexepub.metadata.types import EpubInfo

logger = logging.getLogger(__name__)


class EpubDocument:
    """An EPUB that has been opened and fully processed.

    Use :meth:`open` or :meth:`from_bytes`; both read the container, parse
    the package, extract every spine item and count words and characters
    before returning. The results never change afterwards. After
    :meth:`close` every accessor raises :class:`DocumentClosedError`.

    Example:
        with EpubDocument.open("book.epub") as doc:
            print(doc.title, doc.word_count, doc.char_count)
    """

    def __init__(
        self,
        archive: Archive,
        package: PackageDocument,
        extraction: ContentExtraction,
    ) -> None:
        self._archive: Archive | None = archive
        self._package: PackageDocument | None = package
        self._extraction: ContentExtraction | None = extraction
        self._text = extraction.text
        counts = count(self._text)
        self._word_count = counts.word_count
        self._char_count = counts.char_count

    @classmethod
    def open(
        cls,
        path: str | os.PathLike[str],
        settings: ExtractorSettings | None = None,
    ) -> "EpubDocument":
        """Open and process an EPUB file.

        Raises:
            EpubIOError: If the file cannot be read.
            ArchiveCorruptError: If the file is not a valid zip archive.
            MalformedContainerError: If container.xml is missing or invalid.
            MalformedPackageError: If the package document is invalid.
        """
        return cls._build(lambda: open_archive(path), settings)

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        settings: ExtractorSettings | None = None,
    ) -> "EpubDocument":
        """Process an EPUB held in memory. Raises the same errors as :meth:`open`."""
        return cls._build(lambda: Archive.from_bytes(data), settings)

    @classmethod
    def _build(
        cls,
        opener: Callable[[], Archive],
        settings: ExtractorSettings | None,
    ) -> "EpubDocument":
        settings = settings or DEFAULT_SETTINGS
        archive = opener()
        try:
            check_mimetype(archive)
            package_path = locate_package_path(archive)
            package = parse_package(archive, package_path)
            extraction = extract_content(archive, package, settings)
        except Exception:
            archive.close()
            raise

        document = cls(archive, package, extraction)
        logger.debug(
            "Processed %s: %d words, %d characters, %d skipped items",
            archive.source,
            document._word_count,
            document._char_count,
            len(extraction.skipped),
        )
        return document

    def _require_open(self) -> None:
        if self._archive is None:
            raise DocumentClosedError("EpubDocument has been closed")

    @property
    def closed(self) -> bool:
        return self._archive is None

    @property
    def word_count(self) -> int:
        """Total words across all extracted spine items."""
        self._require_open()
        return self._word_count

    @property
    def char_count(self) -> int:
        """Total Unicode characters across all extracted spine items."""
        self._require_open()
        return self._char_count

    @property
    def info(self) -> EpubInfo:
        self._require_open()
        return self._package.info

    @property
    def title(self) -> str | None:
        return self.info.title

    @property
    def author(self) -> str | None:
        return self.info.author

    @property
    def text(self) -> str:
        """The concatenated plain text the counts were taken from."""
        self._require_open()
        return self._text

    @property
    def chapters(self) -> tuple[ChapterText, ...]:
        self._require_open()
        return self._extraction.chapters

    @property
    def skipped(self) -> tuple[SkippedItem, ...]:
        """Spine items left out of the counts, with the reason for each."""
        self._require_open()
        return self._extraction.skipped

    @property
    def spine(self) -> tuple[SpineItem, ...]:
        self._require_open()
        return self._package.spine

    @property
    def manifest(self) -> Mapping[str, ManifestEntry]:
        self._require_open()
        return self._package.manifest

    @property
    def package_path(self) -> str:
        self._require_open()
        return self._package.path

    def close(self) -> None:
        """Release the archive and drop all extracted buffers.

        Calling close() on a closed document does nothing.
        """
        if self._archive is None:
            return
        self._archive.close()
        self._archive = None
        self._package = None
        self._extraction = None
        self._text = ""

    def __enter__(self) -> "EpubDocument":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        if self._archive is None:
            return "<EpubDocument (closed)>"
        return (
            f"<EpubDocument {self._archive.source!r} "
            f"words={self._word_count} chars={self._char_count}>"
        )
