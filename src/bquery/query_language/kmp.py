"""Knuth-Morris-Pratt substring search.

A :class:`StringMatcher` is built once per literal pattern and can then be
asked whether the pattern occurs anywhere in an arbitrary text. Search runs
in ``O(len(pattern) + len(text))`` time and never backtracks over the text.
"""

from __future__ import annotations

from dataclasses import dataclass


def build_failure_table(pattern: str) -> tuple[int, ...]:
    """Compute the prefix-overlap table for a pattern.

    Entry ``i`` is the length of the longest proper prefix of
    ``pattern[: i + 1]`` that is also a suffix of it.

    Args:
        pattern: Non-empty pattern to preprocess

    Returns:
        Tuple of overlap lengths, one per pattern character

    Raises:
        ValueError: If pattern is empty
    """
    if not pattern:
        raise ValueError("Pattern must not be empty")

    table = [0] * len(pattern)
    overlap = 0
    for index in range(1, len(pattern)):
        while overlap > 0 and pattern[index] != pattern[overlap]:
            overlap = table[overlap - 1]
        if pattern[index] == pattern[overlap]:
            overlap += 1
        table[index] = overlap
    return tuple(table)


@dataclass(frozen=True, slots=True)
class StringMatcher:
    """Precompiled containment test for a single pattern."""

    pattern: str
    table: tuple[int, ...]

    @classmethod
    def from_pattern(cls, pattern: str) -> StringMatcher:
        """Build a matcher, computing the failure table once."""
        return cls(pattern, build_failure_table(pattern))

    def contains(self, text: str) -> bool:
        """Return whether the pattern occurs as a contiguous substring of text."""
        pattern = self.pattern
        table = self.table
        pattern_length = len(pattern)
        text_length = len(text)

        matched = 0
        for index, char in enumerate(text):
            # Not enough text left to complete a match from the current state.
            if text_length - index < pattern_length - matched:
                return False
            while matched > 0 and char != pattern[matched]:
                matched = table[matched - 1]
            if char == pattern[matched]:
                matched += 1
                if matched == pattern_length:
                    return True
        return False
