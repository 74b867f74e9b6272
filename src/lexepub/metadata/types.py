# ABOUTME: Bibliographic metadata carried alongside the lexical counts.
# ABOUTME: EpubInfo holds title and author, each None when the package does not declare it.

from dataclasses import dataclass


@dataclass(frozen=True)
class EpubInfo:
    """Title and author of an EPUB.

    A field is None when the package document does not declare it. An
    empty string is never used to mean "absent".
    """

    title: str | None = None
    author: str | None = None
