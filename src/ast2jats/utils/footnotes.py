#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ast2jats/utils/footnotes.py
"""Per-render state: footnote registry and section bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ast2jats.constants import FOOTNOTE_BACKLINK_GLYPH


@dataclass
class FootnoteRegistry:
    """Ordered, append-only store of rendered ``<fn>`` elements.

    Numbering is sequential from 1 in registration order, which equals
    document order under the renderer's single-pass walk.
    """

    _entries: List[str] = field(default_factory=list, init=False, repr=False)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    @property
    def entries(self) -> list[str]:
        """Rendered footnotes in registration order (a copy)."""
        return list(self._entries)

    def register(self, body: str) -> int:
        """Register a rendered footnote body and return its number.

        A back-reference link is inserted right before the final closing
        tag of ``body`` (or appended nothing, when ``body`` holds no tags).

        Parameters
        ----------
        body : str
            Rendered footnote content, e.g. ``<p>text</p>``

        Returns
        -------
        int
            The footnote number, starting at 1

        """
        number = len(self._entries) + 1
        backlink = f' <a href="#fnref{number}">{FOOTNOTE_BACKLINK_GLYPH}</a>'
        last_close = body.rfind("</")
        if last_close >= 0:
            body = body[:last_close] + backlink + body[last_close:]
        self._entries.append(f'<fn id="fn{number}">{body}</fn>')
        return number


@dataclass
class RenderContext:
    """Mutable state scoped to exactly one document render pass.

    A fresh context is created for each document so numbering never leaks
    between renders.
    """

    footnotes: FootnoteRegistry = field(default_factory=FootnoteRegistry)
    sections_opened: int = 0


__all__ = ["FootnoteRegistry", "RenderContext"]
