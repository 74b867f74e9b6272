# ABOUTME: Extraction settings and their defaults.
# ABOUTME: ExtractorSettings is passed down the pipeline; DEFAULT_SETTINGS is used when none is given.

from dataclasses import dataclass, field

# Media types of spine items whose text is counted
CONTENT_MEDIA_TYPES: frozenset[str] = frozenset({"application/xhtml+xml", "text/html"})

# Suffixes used to guess a content document when the manifest omits media-type
CONTENT_SUFFIXES: frozenset[str] = frozenset({".xhtml", ".html", ".htm"})

# Codec tried after UTF-8 fails
FALLBACK_ENCODING = "latin-1"

# Elements removed together with their text before counting
EXCLUDED_TAGS: frozenset[str] = frozenset({"head", "script", "style"})

# Elements whose boundaries separate words; inline elements join their text
BLOCK_TAGS: frozenset[str] = frozenset({
    "address", "article", "aside", "blockquote", "body", "br", "dd", "div",
    "dl", "dt", "figcaption", "figure", "footer", "h1", "h2", "h3", "h4",
    "h5", "h6", "header", "hr", "li", "nav", "ol", "p", "pre", "section",
    "table", "td", "th", "tr", "ul",
})


@dataclass(frozen=True)
class ExtractorSettings:
    """Tunables for the content extraction stage."""

    content_media_types: frozenset[str] = field(default=CONTENT_MEDIA_TYPES)
    fallback_encoding: str = FALLBACK_ENCODING
    excluded_tags: frozenset[str] = field(default=EXCLUDED_TAGS)
    block_tags: frozenset[str] = field(default=BLOCK_TAGS)

    def __post_init__(self) -> None:
        # bytes-to-bytes codecs such as base64 fail here as well as unknown names
        try:
            b"".decode(self.fallback_encoding)
        except LookupError as exc:
            raise ValueError(
                f"Unknown fallback encoding: {self.fallback_encoding} ({exc})"
            ) from exc

    def is_content_type(self, media_type: str) -> bool:
        """Whether a manifest media type names a countable content document.

        Parameters such as ``; charset=utf-8`` are ignored, and the
        comparison is case-insensitive.
        """
        base = media_type.split(";", 1)[0].strip().lower()
        return base in self.content_media_types


DEFAULT_SETTINGS = ExtractorSettings()
