"""Pytest configuration and shared fixtures for the ast2jats test suite.

This module provides shared fixtures, test configuration, and helpers
that are used across the entire test suite.
"""

import os
from datetime import date
from typing import Any

import pytest

from ast2jats.ast import Document, Header, Paragraph, Str

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    # Register custom Hypothesis profiles
    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")


@pytest.fixture
def fixed_today() -> date:
    """Provide a fixed fallback publication date.

    Returns
    -------
    date
        2024-03-05, used wherever the current date would leak into output.

    """
    return date(2024, 3, 5)


@pytest.fixture
def intro_document() -> Document:
    """Provide the two-block document ``# Intro`` / ``Hi``.

    Returns
    -------
    Document
        Header followed by a paragraph.

    """
    return Document(
        children=[
            Header(level=1, content=[Str(content="Intro")]),
            Paragraph(content=[Str(content="Hi")]),
        ]
    )


@pytest.fixture
def article_metadata() -> dict[str, Any]:
    """Provide a metadata tree with all three groups populated.

    Returns
    -------
    dict
        Metadata as loaded from YAML front matter.

    """
    return {
        "title": "Cells & Tissues",
        "author": ["Jane Doe", "John Roe"],
        "journal": {"title": "Journal of Things", "pissn": "1234-5678", "publisher-id": "jot"},
        "article": {"doi": "10.1000/xyz", "pub-date": "2024-01-15", "heading": "Research"},
        "copyright": {"statement": "Copyright 2024", "year": 2024, "holder": "The Authors"},
    }
