"""Shared fixtures for the Pincel test-suite."""

from __future__ import annotations

import pytest

from pincel import PatternRegistry, PatternRegistryBuilder


def build_c_like() -> PatternRegistry:
    """A small C-flavoured rule table.

    Comment delimiters come first so they win ties against anything else
    starting on the same column.
    """
    return (
        PatternRegistryBuilder()
        .add_bounded("comment", "/*", "*/", escapable=False)
        .add_keyword("comment", r"//.*$")
        .add_interpolating("string", '"', '"', "{", "}")
        .add_keyword("keyword", r"\b(fn|let|return)\b")
        .add_keyword("digit", r"\b\d+\b")
        .build()
    )


@pytest.fixture
def c_like() -> PatternRegistry:
    return build_c_like()


@pytest.fixture
def comment_and_fn() -> PatternRegistry:
    """The registry of the two-line end-to-end example."""
    return (
        PatternRegistryBuilder()
        .add_keyword("keyword", "fn")
        .add_bounded("comment", "/*", "*/", escapable=False)
        .build()
    )
