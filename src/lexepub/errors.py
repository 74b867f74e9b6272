# ABOUTME: Exception hierarchy for EPUB extraction failures.
# ABOUTME: Fatal errors abort document construction; per-item errors only skip a spine item.


class LexEpubError(Exception):
    """Base class for every error raised by lexepub."""


class EpubIOError(LexEpubError, OSError):
    """Raised when the EPUB file itself cannot be read from disk."""


class ArchiveCorruptError(LexEpubError):
    """Raised when the zip structure of the EPUB is invalid or damaged."""


class MalformedContainerError(LexEpubError):
    """Raised when META-INF/container.xml is missing or does not name a package."""


class MalformedPackageError(LexEpubError):
    """Raised when the OPF package document lacks required manifest/spine structure."""


class MissingEntryError(LexEpubError):
    """Raised when a named entry is not present in the archive."""


class ContentEncodingError(LexEpubError, UnicodeError):
    """Raised when a content document cannot be decoded, even with the fallback codec."""


class DocumentClosedError(LexEpubError, ValueError):
    """Raised when a closed EpubDocument is used."""
