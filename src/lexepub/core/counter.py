# ABOUTME: Word and character counting over extracted plain text.
# ABOUTME: Words are maximal runs of non-whitespace; characters are Unicode code points.

from typing import NamedTuple


class LexicalCounts(NamedTuple):
    """Word and character totals for a piece of text."""

    word_count: int
    char_count: int


def count_words(text: str) -> int:
    """Number of maximal non-whitespace runs, split on Unicode whitespace.

    A run made only of punctuation still counts as a word.
    """
    return len(text.split())


def count_chars(text: str) -> int:
    """Number of Unicode scalar values, whitespace included."""
    return len(text)


def count(text: str) -> LexicalCounts:
    """Count words and characters in plain text."""
    return LexicalCounts(word_count=count_words(text), char_count=count_chars(text))
