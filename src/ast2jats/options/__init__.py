#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for ast2jats parsers and renderers.

Options are frozen dataclasses; use ``create_updated`` to derive a modified
copy.
"""

from __future__ import annotations

from ast2jats.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from ast2jats.options.jats import JatsRendererOptions
from ast2jats.options.pandoc_json import PandocJsonParserOptions

__all__ = [
    "CloneFrozenMixin",
    "BaseParserOptions",
    "BaseRendererOptions",
    "JatsRendererOptions",
    "PandocJsonParserOptions",
]
