#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for decoding Pandoc JSON."""

from __future__ import annotations

from dataclasses import dataclass, field

from ast2jats.options.base import BaseParserOptions


# src/ast2jats/options/pandoc_json.py
@dataclass(frozen=True)
class PandocJsonParserOptions(BaseParserOptions):
    """Configuration options for decoding ``pandoc -t json`` output.

    Parameters
    ----------
    implicit_figures : bool, default True
        Treat a paragraph holding only an image whose title starts with
        ``fig:`` as a captioned figure (the convention of Pandoc < 3).

    """

    implicit_figures: bool = field(
        default=True,
        metadata={"help": "Decode 'fig:'-titled lone images as captioned figures", "importance": "advanced"},
    )
