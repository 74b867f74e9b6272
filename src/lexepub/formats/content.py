# ABOUTME: Content document extraction: decodes spine items and strips markup to plain text.
# ABOUTME: Problems with a single item are logged and recorded as skips, never raised.

import codecs
import logging
import posixpath
import warnings
from collections.abc import Iterable
from dataclasses import dataclass

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning

from lexepub.config import (
    BLOCK_TAGS,
    CONTENT_SUFFIXES,
    DEFAULT_SETTINGS,
    EXCLUDED_TAGS,
    FALLBACK_ENCODING,
    ExtractorSettings,
)
from lexepub.core.counter import count
from lexepub.errors import ArchiveCorruptError, ContentEncodingError, MissingEntryError
from lexepub.formats.container import Archive
from lexepub.formats.package import ManifestEntry, PackageDocument

logger = logging.getLogger(__name__)

# XHTML content documents are parsed with the HTML parser on purpose. The
# filter only covers warnings attributed to bs4 or to this package.
warnings.filterwarnings(
    "ignore",
    category=XMLParsedAsHTMLWarning,
    module=r"(bs4|lexepub)(\.|$)",
)

_UTF16_BOMS = (codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)


@dataclass(frozen=True)
class ChapterText:
    """Plain text recovered from one spine item, with its own counts."""

    idref: str
    path: str
    text: str
    word_count: int
    char_count: int


@dataclass(frozen=True)
class SkippedItem:
    """A spine item left out of the counts, and why."""

    idref: str
    path: str
    reason: str


@dataclass(frozen=True)
class ContentExtraction:
    """Ordered result of extracting every spine item."""

    chapters: tuple[ChapterText, ...]
    skipped: tuple[SkippedItem, ...]

    @property
    def text(self) -> str:
        """All chapter texts in spine order, one space between items."""
        return join_texts(chapter.text for chapter in self.chapters)


def join_texts(texts: Iterable[str]) -> str:
    """Join per-item texts with a single space, ignoring empty ones."""
    return " ".join(text for text in texts if text)


def decode_content(data: bytes, fallback_encoding: str = FALLBACK_ENCODING) -> str:
    """Decode a content document.

    UTF-16 is used when the data starts with a UTF-16 byte order mark.
    Otherwise UTF-8 is tried first (a UTF-8 BOM is dropped), then
    ``fallback_encoding``.

    Raises:
        ContentEncodingError: If no codec can decode the data.
    """
    if data.startswith(_UTF16_BOMS):
        try:
            return data.decode("utf-16")
        except UnicodeDecodeError:
            pass

    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        logger.debug("UTF-8 decoding failed (%s), trying %s", exc.reason, fallback_encoding)

    try:
        return data.decode(fallback_encoding)
    except UnicodeDecodeError as exc:
        raise ContentEncodingError(
            f"Content is neither UTF-8 nor {fallback_encoding}: {exc.reason}"
        ) from exc


def strip_markup(
    markup: str,
    excluded_tags: Iterable[str] = EXCLUDED_TAGS,
    block_tags: Iterable[str] = BLOCK_TAGS,
) -> str:
    """Recover plain text from an (X)HTML document.

    Tags and attributes are removed and entity references resolved. The
    boundaries of elements in ``block_tags`` become a space, so
    ``<p>a</p><p>b</p>`` gives ``a b``, while inline markup joins its text:
    ``un<b>believ</b>able`` stays one word. Elements in ``excluded_tags``
    are dropped with their content. Whitespace runs collapse to one space
    and the result is trimmed.
    """
    soup = BeautifulSoup(markup, "html.parser")

    excluded = sorted(excluded_tags)
    if excluded:
        for element in soup.find_all(excluded):
            element.extract()

    blocks = sorted(block_tags)
    if blocks:
        for element in soup.find_all(blocks):
            element.insert_before(" ")
            element.insert_after(" ")

    return " ".join(soup.get_text().split())


def is_content_document(
    entry: ManifestEntry, settings: ExtractorSettings = DEFAULT_SETTINGS
) -> bool:
    """Whether a manifest entry is an XHTML/HTML document worth counting.

    Entries without a media-type are judged by their file suffix.
    """
    if entry.media_type:
        return settings.is_content_type(entry.media_type)
    return posixpath.splitext(entry.path)[1].lower() in CONTENT_SUFFIXES


def _read_text(archive: Archive, entry: ManifestEntry, settings: ExtractorSettings) -> str:
    data = archive.read(entry.path)
    markup = decode_content(data, settings.fallback_encoding)
    return strip_markup(markup, settings.excluded_tags, settings.block_tags)


def extract_content(
    archive: Archive,
    package: PackageDocument,
    settings: ExtractorSettings = DEFAULT_SETTINGS,
) -> ContentExtraction:
    """Extract plain text from every spine item, in spine order.

    Missing entries, damaged entries, unsupported media types and
    undecodable documents are skipped; the remaining items are still
    extracted.

    Args:
        archive: The open EPUB archive.
        package: The parsed package document.
        settings: Extraction settings.

    Returns:
        A ContentExtraction with one ChapterText per extracted item and one
        SkippedItem per skipped item.
    """
    chapters: list[ChapterText] = []
    skipped: list[SkippedItem] = []

    for position, item in enumerate(package.spine, start=1):
        entry = package.entry_for(item)

        if not is_content_document(entry, settings):
            reason = f"unsupported media type: {entry.media_type or 'none'}"
            logger.info("Skipping spine item %d (%s): %s", position, entry.path, reason)
            skipped.append(SkippedItem(idref=item.idref, path=entry.path, reason=reason))
            continue

        try:
            text = _read_text(archive, entry, settings)
        except (MissingEntryError, ArchiveCorruptError, ContentEncodingError) as exc:
            logger.warning("Skipping spine item %d (%s): %s", position, entry.path, exc)
            skipped.append(SkippedItem(idref=item.idref, path=entry.path, reason=str(exc)))
            continue

        counts = count(text)
        chapters.append(
            ChapterText(
                idref=item.idref,
                path=entry.path,
                text=text,
                word_count=counts.word_count,
                char_count=counts.char_count,
            )
        )

    logger.debug(
        "Extracted %d of %d spine items from %s",
        len(chapters),
        len(package.spine),
        archive.source,
    )
    return ContentExtraction(chapters=tuple(chapters), skipped=tuple(skipped))
