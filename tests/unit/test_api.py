# ABOUTME: Unit tests for the create/query/destroy boundary functions.
# ABOUTME: Tests that fatal errors become None, queries are stable, and destroyed handles are unusable.

import logging
from pathlib import Path

import pytest

import lexepub
from lexepub import (
    DocumentClosedError,
    EpubInfo,
    create,
    destroy,
    get_info,
    get_total_char_count,
    get_total_word_count,
)


class TestCreate:
    """Tests for create()."""

    def test_returns_document(self, hello_epub: Path) -> None:
        """A valid EPUB yields a usable handle."""
        handle = create(hello_epub)
        assert handle is not None
        destroy(handle)

    def test_missing_file_returns_none(self, tmp_path: Path) -> None:
        """A path that does not exist yields None."""
        assert create(tmp_path / "missing.epub") is None

    def test_non_zip_returns_none(self, corrupt_epub: Path) -> None:
        """A file that is not a zip yields None."""
        assert create(corrupt_epub) is None

    def test_truncated_zip_returns_none(self, truncated_epub: Path) -> None:
        """A truncated archive yields None."""
        assert create(truncated_epub) is None

    def test_unknown_idref_returns_none(self, epub_factory) -> None:
        """A spine referencing an unknown manifest id yields None."""
        files = {
            "META-INF/container.xml": epub_factory.container(),
            "OEBPS/content.opf": epub_factory.opf([], ["nowhere"]),
        }
        path = epub_factory.write("bad.epub", files)
        assert create(path) is None

    def test_failure_is_logged(
        self, corrupt_epub: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """The reason for a None result is logged as a warning."""
        with caplog.at_level(logging.WARNING, logger="lexepub"):
            create(corrupt_epub)
        assert "Could not process EPUB" in caplog.text
        assert "corrupt.epub" in caplog.text


class TestQueries:
    """Tests for the query functions."""

    def test_word_and_char_counts(self, hello_epub: Path) -> None:
        """Counts match the single paragraph."""
        handle = create(hello_epub)
        assert handle is not None
        try:
            assert get_total_word_count(handle) == 2
            assert get_total_char_count(handle) == 12
        finally:
            destroy(handle)

    def test_info(self, hello_epub: Path) -> None:
        """get_info() returns title and author."""
        handle = create(hello_epub)
        assert handle is not None
        try:
            assert get_info(handle) == EpubInfo(title="Test Book", author="Test Author")
        finally:
            destroy(handle)

    def test_info_without_title(self, epub_factory) -> None:
        """A book without dc:title reports title None."""
        path = epub_factory.book("untitled.epub", ["<p>x</p>"], title=None)
        handle = create(path)
        assert handle is not None
        try:
            info = get_info(handle)
            assert info.title is None
            assert info.author == "Test Author"
        finally:
            destroy(handle)

    def test_queries_are_idempotent(self, hello_epub: Path) -> None:
        """Repeated queries return identical values."""
        handle = create(hello_epub)
        assert handle is not None
        try:
            results = {
                (get_total_word_count(handle), get_total_char_count(handle), get_info(handle))
                for _ in range(3)
            }
            assert len(results) == 1
        finally:
            destroy(handle)

    def test_two_spine_documents(self, epub_factory) -> None:
        """Words split across two documents are joined with one space."""
        path = epub_factory.book("split.epub", ["<p>Hello</p>", "<p>world.</p>"])
        handle = create(path)
        assert handle is not None
        try:
            assert get_total_word_count(handle) == 2
            assert get_total_char_count(handle) == 12
        finally:
            destroy(handle)


class TestDestroy:
    """Tests for destroy()."""

    def test_queries_fail_after_destroy(self, hello_epub: Path) -> None:
        """A destroyed handle cannot be queried."""
        handle = create(hello_epub)
        assert handle is not None
        destroy(handle)
        with pytest.raises(DocumentClosedError):
            get_total_word_count(handle)
        with pytest.raises(DocumentClosedError):
            get_info(handle)

    def test_destroy_twice_is_harmless(self, hello_epub: Path) -> None:
        """Destroying an already destroyed handle does nothing."""
        handle = create(hello_epub)
        assert handle is not None
        destroy(handle)
        destroy(handle)
        assert handle.closed


class TestPublicNames:
    """Tests for the package's exported names."""

    def test_all_names_resolve(self) -> None:
        """Everything in __all__ is importable from the package."""
        for name in lexepub.__all__:
            assert hasattr(lexepub, name)
