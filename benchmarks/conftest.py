"""Benchmark fixtures and configuration."""

from __future__ import annotations

import pytest

from pincel import PatternRegistry, PatternRegistryBuilder


@pytest.fixture
def c_like() -> PatternRegistry:
    """A C-flavoured rule table comparable to a small editor syntax file."""
    return (
        PatternRegistryBuilder()
        .add_bounded("comment", "/*", "*/", escapable=False)
        .add_keyword("comment", r"//.*$")
        .add_interpolating("string", '"', '"', "{", "}")
        .add_keyword("keyword", r"\b(fn|let|return|if|else|while|for|struct)\b")
        .add_keyword("function", r"\b([a-z_]\w*)\s*\(")
        .add_keyword("digit", r"\b\d+(\.\d+)?\b")
        .add_keyword("type", r"\b[A-Z]\w*\b")
        .build()
    )


@pytest.fixture
def large_document() -> list[str]:
    """Generate a large source document (~5000 lines)."""
    lines: list[str] = []
    for i in range(500):
        lines.extend(
            [
                f"/* Section {i}",
                "   spans several lines */",
                f"fn handler_{i}(req: Request) -> Response {{",
                f'    let name = "user {{req.id}} #{i}";',
                "    // single line comment",
                f"    if req.size > {i}.5 {{",
                "        return respond(name, 200);",
                "    }",
                "}",
                "",
            ]
        )
    return lines
