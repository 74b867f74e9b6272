# ABOUTME: Shared pytest fixtures for lexepub tests.
# ABOUTME: Provides EPUBs built with ebooklib plus a zip factory for hand-crafted and malformed books.

import zipfile
from pathlib import Path

import pytest
from ebooklib import epub

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="{opf_path}" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

OPF_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="uid">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:identifier id="uid">urn:uuid:0b7c4a52-lexepub-test</dc:identifier>
    {title}
    {author}
    <dc:language>en</dc:language>
  </metadata>
  <manifest>
{items}
  </manifest>
  <spine>
{itemrefs}
  </spine>
</package>
"""

XHTML_TEMPLATE = """<?xml version="1.0" encoding="utf-8"?>
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml">
<head><title>{title}</title></head>
<body>{body}</body>
</html>
"""


class EpubFactory:
    """Writes EPUB zip files entry by entry so tests control every byte."""

    def __init__(self, root: Path) -> None:
        self.root = root

    @staticmethod
    def container(opf_path: str = "OEBPS/content.opf") -> str:
        return CONTAINER_XML.format(opf_path=opf_path)

    @staticmethod
    def opf(
        items: list[tuple[str, str, str]],
        spine: list[str],
        *,
        title: str | None = "Test Book",
        author: str | None = "Test Author",
    ) -> str:
        """Build a package document.

        ``items`` are (id, href, media-type) triples; ``spine`` lists idrefs,
        where an idref ending in ``!`` is written with ``linear="no"``.
        """
        item_lines = "\n".join(
            f'    <item id="{item_id}" href="{href}" media-type="{media_type}"/>'
            for item_id, href, media_type in items
        )
        itemref_lines = "\n".join(
            f'    <itemref idref="{idref[:-1]}" linear="no"/>'
            if idref.endswith("!")
            else f'    <itemref idref="{idref}"/>'
            for idref in spine
        )
        return OPF_TEMPLATE.format(
            title=f"<dc:title>{title}</dc:title>" if title is not None else "",
            author=f"<dc:creator>{author}</dc:creator>" if author is not None else "",
            items=item_lines,
            itemrefs=itemref_lines,
        )

    @staticmethod
    def xhtml(body: str, title: str = "Chapter") -> str:
        return XHTML_TEMPLATE.format(title=title, body=body)

    def write(
        self,
        name: str,
        files: dict[str, str | bytes],
        *,
        mimetype: str | None = "application/epub+zip",
    ) -> Path:
        """Write a zip with a stored mimetype entry followed by ``files``."""
        path = self.root / name
        with zipfile.ZipFile(path, "w") as zf:
            if mimetype is not None:
                zf.writestr("mimetype", mimetype, compress_type=zipfile.ZIP_STORED)
            for entry, data in files.items():
                zf.writestr(entry, data, compress_type=zipfile.ZIP_DEFLATED)
        return path

    def book(
        self,
        name: str,
        bodies: list[str],
        *,
        title: str | None = "Test Book",
        author: str | None = "Test Author",
    ) -> Path:
        """A well-formed EPUB with one XHTML document per body, in spine order."""
        items = [
            (f"ch{i}", f"text/ch{i}.xhtml", "application/xhtml+xml")
            for i in range(1, len(bodies) + 1)
        ]
        files: dict[str, str | bytes] = {
            "META-INF/container.xml": self.container(),
            "OEBPS/content.opf": self.opf(
                items, [item_id for item_id, _, _ in items], title=title, author=author
            ),
        }
        for i, body in enumerate(bodies, start=1):
            files[f"OEBPS/text/ch{i}.xhtml"] = self.xhtml(body)
        return self.write(name, files)


@pytest.fixture
def epub_factory(tmp_path: Path) -> EpubFactory:
    """Factory for hand-built EPUB files under tmp_path."""
    return EpubFactory(tmp_path)


@pytest.fixture
def hello_epub(epub_factory: EpubFactory) -> Path:
    """One spine document whose body is <p>Hello world.</p>."""
    return epub_factory.book("hello.epub", ["<p>Hello world.</p>"])


@pytest.fixture
def sample_epub(tmp_path: Path) -> Path:
    """A two-chapter EPUB written by ebooklib with known metadata and text."""
    book = epub.EpubBook()

    book.set_identifier("test-isbn-978-0-123456-47-2")
    book.set_title("The Name of the Rose")
    book.set_language("en")
    book.add_author("Umberto Eco")

    chapter1 = epub.EpubHtml(title="Chapter 1", file_name="chap01.xhtml", lang="en")
    chapter1.content = b"<html><body><h1>First Day</h1><p>Prime.</p></body></html>"
    chapter2 = epub.EpubHtml(title="Chapter 2", file_name="chap02.xhtml", lang="en")
    chapter2.content = b"<html><body><p>It was a beautiful morning.</p></body></html>"
    book.add_item(chapter1)
    book.add_item(chapter2)

    book.toc = [
        epub.Link("chap01.xhtml", "Chapter 1", "chap01"),
        epub.Link("chap02.xhtml", "Chapter 2", "chap02"),
    ]
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = [chapter1, chapter2]

    filepath = tmp_path / "name_of_the_rose.epub"
    epub.write_epub(str(filepath), book)
    return filepath


@pytest.fixture
def minimal_epub(tmp_path: Path) -> Path:
    """An ebooklib EPUB with a title but no author."""
    book = epub.EpubBook()
    book.set_identifier("minimal-id")
    book.set_title("Untitled Book")
    book.set_language("en")

    chapter = epub.EpubHtml(title="Content", file_name="content.xhtml", lang="en")
    chapter.content = b"<html><body><p>Minimal content.</p></body></html>"
    book.add_item(chapter)

    book.toc = [epub.Link("content.xhtml", "Content", "content")]
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = [chapter]

    filepath = tmp_path / "minimal.epub"
    epub.write_epub(str(filepath), book)
    return filepath


@pytest.fixture
def corrupt_epub(tmp_path: Path) -> Path:
    """A file that is not a zip archive at all."""
    filepath = tmp_path / "corrupt.epub"
    filepath.write_text("this is not a valid epub file")
    return filepath


@pytest.fixture
def truncated_epub(hello_epub: Path, tmp_path: Path) -> Path:
    """A valid EPUB cut off halfway, losing its central directory."""
    data = hello_epub.read_bytes()
    filepath = tmp_path / "truncated.epub"
    filepath.write_bytes(data[: len(data) // 2])
    return filepath
