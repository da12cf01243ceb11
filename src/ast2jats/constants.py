#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the ast2jats library.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Rendering Defaults - Markup separators and reserved tokens
3. Template Defaults - Template names and lookup locations
4. Metadata Defaults - Fallback values for the JATS front matter
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

Alignment = Literal["left", "center", "right", "default"]
QuoteType = Literal["single", "double"]
MathType = Literal["inline", "display"]

# =============================================================================
# Rendering Defaults
# =============================================================================

DEFAULT_BLOCK_SEPARATOR = "\n\n"

# Whole-word token in a header id / div class that marks the bibliography
REFERENCES_TOKEN = "references"
DEFAULT_REFERENCES_TITLE = "References"

# Raw blocks/inlines in these formats are already JATS and pass through verbatim
DEFAULT_RAW_PASSTHROUGH_FORMATS: tuple[str, ...] = ("jats", "xml")

# Start of the first reference entry anchor in the rendered body
BACK_MATTER_MARKER = "<ref-"

FOOTNOTE_BACKLINK_GLYPH = "&#8617;"

# =============================================================================
# Template Defaults
# =============================================================================

DEFAULT_TEMPLATE_NAME = "default.jats"
DEFAULT_TEMPLATE_SEARCH_PATHS: tuple[str, ...] = (".", "templates")
FALLBACK_TEMPLATE = "$body$"

# =============================================================================
# Metadata Defaults
# =============================================================================

DEFAULT_ARTICLE_TYPE = "research-article"
DEFAULT_ARTICLE_HEADING = "Other"
DEFAULT_ELOCATION_ID = "Other"
DEFAULT_ARTICLE_TITLE = "Other"
ISO_DATE_LENGTH = 10

# Any one of these identifies the article; otherwise art-access-id is forced empty
ARTICLE_ID_FIELDS: tuple[str, ...] = ("publisher-id", "doi", "pmid", "pmcid", "art-access-id")
JOURNAL_ISSN_FIELDS: tuple[str, ...] = ("pissn", "eissn")
JOURNAL_ID_FIELDS: tuple[str, ...] = ("publisher-id", "nlm-ta", "pmc")
