# ABOUTME: Handle-style boundary functions for callers that want create/query/destroy semantics.
# ABOUTME: create() returns None on any fatal extraction error instead of raising.

import logging
import os

from lexepub.config import ExtractorSettings
from lexepub.core.document import EpubDocument
from lexepub.errors import LexEpubError
from lexepub.metadata.types import EpubInfo

logger = logging.getLogger(__name__)


def create(
    path: str | os.PathLike[str],
    settings: ExtractorSettings | None = None,
) -> EpubDocument | None:
    """Open and fully process one EPUB file.

    Args:
        path: Path to the EPUB file.
        settings: Optional extraction settings.

    Returns:
        The processed document, or None when the file cannot be read, is not
        a zip archive, or has an invalid container or package document. The
        reason is logged.
    """
    try:
        return EpubDocument.open(path, settings)
    except LexEpubError as exc:
        logger.warning("Could not process EPUB %s: %s", path, exc)
        return None


def get_total_word_count(handle: EpubDocument) -> int:
    """Cached total word count of a document returned by create()."""
    return handle.word_count


def get_total_char_count(handle: EpubDocument) -> int:
    """Cached total character count of a document returned by create()."""
    return handle.char_count


def get_info(handle: EpubDocument) -> EpubInfo:
    """Title and author of a document returned by create(); absent fields are None."""
    return handle.info


def destroy(handle: EpubDocument) -> None:
    """Release everything the document owns. The handle must not be used afterwards."""
    handle.close()
