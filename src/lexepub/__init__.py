# ABOUTME: lexepub: word and character counts plus title/author for EPUB e-books.
# ABOUTME: Exports EpubDocument, the handle-style API functions, settings, and error types.

from lexepub.api import create, destroy, get_info, get_total_char_count, get_total_word_count
from lexepub.config import DEFAULT_SETTINGS, ExtractorSettings
from lexepub.core.counter import LexicalCounts, count
from lexepub.core.document import EpubDocument
from lexepub.errors import (
    ArchiveCorruptError,
    ContentEncodingError,
    DocumentClosedError,
    EpubIOError,
    LexEpubError,
    MalformedContainerError,
    MalformedPackageError,
    MissingEntryError,
)
from lexepub.metadata.types import EpubInfo

__all__ = [
    "DEFAULT_SETTINGS",
    "ArchiveCorruptError",
    "ContentEncodingError",
    "DocumentClosedError",
    "EpubDocument",
    "EpubIOError",
    "EpubInfo",
    "ExtractorSettings",
    "LexEpubError",
    "LexicalCounts",
    "MalformedContainerError",
    "MalformedPackageError",
    "MissingEntryError",
    "count",
    "create",
    "destroy",
    "get_info",
    "get_total_char_count",
    "get_total_word_count",
]
