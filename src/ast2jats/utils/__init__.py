#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Utility helpers shared across the ast2jats package."""

from ast2jats.utils.escape import escape_xml, format_attributes, has_token
from ast2jats.utils.footnotes import FootnoteRegistry, RenderContext
from ast2jats.utils.metadata import flatten_metadata, load_metadata

__all__ = [
    "escape_xml",
    "format_attributes",
    "has_token",
    "FootnoteRegistry",
    "RenderContext",
    "flatten_metadata",
    "load_metadata",
]
