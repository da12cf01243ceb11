#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ast2jats/ast/nodes.py
"""AST node classes for document representation.

This module defines the node hierarchy consumed by the JATS renderer. It
mirrors the Pandoc document model: a document is a sequence of block nodes,
and blocks hold inline nodes (or further blocks).

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.

Block-level nodes:
    - Plain, Paragraph, Header, CodeBlock, BlockQuote, RawBlock
    - Table, BulletList, OrderedList, DefinitionList
    - Div, HorizontalRule, CaptionedImage

Inline nodes:
    - Str, Space, LineBreak
    - Emph, Strong, Strikeout, Superscript, Subscript, SmallCaps
    - Quoted, Cite, Code, Math, RawInline
    - Link, Image, Note, Span

Nodes the input decoder does not recognize are carried as UnknownNode so the
renderer can report them instead of failing.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from ast2jats.constants import Alignment, MathType, QuoteType


class Node(ABC):
    """Base class for all AST nodes.

    All document nodes inherit from this base class and support the visitor
    pattern for traversal and rendering.

    """

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


class Block(Node, ABC):
    """Marker base class for block-level nodes."""


class Inline(Node, ABC):
    """Marker base class for inline nodes."""


# ============================================================================
# Document
# ============================================================================


@dataclass
class Document(Node):
    """Root document node.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the document
    metadata : dict, default = empty dict
        Document metadata tree. Leaves may be plain values or lists of
        inline/block nodes (as decoded from Pandoc ``MetaInlines``).

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_document(self)``."""
        return visitor.visit_document(self)


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Plain(Block):
    """Inline content not wrapped in a paragraph (tight lists, table cells).

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes

    """

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_plain(self)``."""
        return visitor.visit_plain(self)


@dataclass
class Paragraph(Block):
    """Paragraph node containing inline content.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes representing paragraph content

    """

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_paragraph(self)``."""
        return visitor.visit_paragraph(self)


@dataclass
class Header(Block):
    """Section header.

    Parameters
    ----------
    level : int
        Header level, 1 being the outermost. JATS sections are emitted flat,
        so the level does not affect nesting.
    content : list of Node, default = empty list
        Inline nodes representing the header text
    attributes : dict, default = empty dict
        Attributes; ``id`` tags the opened section

    """

    level: int
    content: list[Node] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate the header level is positive."""
        if self.level < 1:
            raise ValueError(f"Header level must be >= 1, got {self.level}")

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_header(self)``."""
        return visitor.visit_header(self)


@dataclass
class CodeBlock(Block):
    """Literal code block.

    Parameters
    ----------
    content : str
        Code text (raw, unescaped)
    attributes : dict, default = empty dict
        Attributes (language classes etc.)

    """

    content: str
    attributes: dict[str, str] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_code_block(self)``."""
        return visitor.visit_code_block(self)


@dataclass
class BlockQuote(Block):
    """Block quote containing other block elements."""

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_block_quote(self)``."""
        return visitor.visit_block_quote(self)


@dataclass
class RawBlock(Block):
    """Raw block in a named output format.

    Parameters
    ----------
    format : str
        Format name (``html``, ``latex``, ``jats``, ...)
    content : str
        Raw content

    """

    format: str
    content: str

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_raw_block(self)``."""
        return visitor.visit_raw_block(self)


@dataclass
class HorizontalRule(Block):
    """Horizontal rule."""

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_horizontal_rule(self)``."""
        return visitor.visit_horizontal_rule(self)


@dataclass
class Table(Block):
    """Simple (column-oriented) table.

    Parameters
    ----------
    caption : list of Node, default = empty list
        Inline caption content
    alignments : list of Alignment, default = empty list
        Per-column alignment; missing entries are treated as ``default``
    widths : list of float, default = empty list
        Per-column width as a fraction of the text width; 0 means unspecified
    headers : list of list of Node, default = empty list
        One block list per header cell
    rows : list of list of list of Node, default = empty list
        Rows of cells, each cell a block list

    """

    caption: list[Node] = field(default_factory=list)
    alignments: list[Alignment] = field(default_factory=list)
    widths: list[float] = field(default_factory=list)
    headers: list[list[Node]] = field(default_factory=list)
    rows: list[list[list[Node]]] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_table(self)``."""
        return visitor.visit_table(self)


@dataclass
class BulletList(Block):
    """Unordered list; each item is a list of blocks."""

    items: list[list[Node]] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_bullet_list(self)``."""
        return visitor.visit_bullet_list(self)


@dataclass
class OrderedList(Block):
    """Ordered list; each item is a list of blocks.

    Parameters
    ----------
    items : list of list of Node, default = empty list
        List items
    start : int, default = 1
        Starting number

    """

    items: list[list[Node]] = field(default_factory=list)
    start: int = 1

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_ordered_list(self)``."""
        return visitor.visit_ordered_list(self)


@dataclass
class DefinitionItem:
    """One term of a definition list with its definitions.

    Parameters
    ----------
    term : list of Node
        Inline nodes of the term
    definitions : list of list of Node
        One block list per definition

    """

    term: list[Node] = field(default_factory=list)
    definitions: list[list[Node]] = field(default_factory=list)


@dataclass
class DefinitionList(Block):
    """Definition list, an ordered sequence of (term, definitions) pairs."""

    items: list[DefinitionItem] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_definition_list(self)``."""
        return visitor.visit_definition_list(self)


@dataclass
class Div(Block):
    """Generic block container.

    Parameters
    ----------
    children : list of Node, default = empty list
        Contained blocks
    attributes : dict, default = empty dict
        Attributes; a ``class`` containing ``references`` marks a bibliography

    """

    children: list[Node] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_div(self)``."""
        return visitor.visit_div(self)


@dataclass
class CaptionedImage(Block):
    """Figure: an image with a block-level caption.

    Parameters
    ----------
    src : str
        Image URI
    title : str, default = ""
        Image title
    caption : list of Node, default = empty list
        Inline caption content
    attributes : dict, default = empty dict
        Attributes

    """

    src: str
    title: str = ""
    caption: list[Node] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_captioned_image(self)``."""
        return visitor.visit_captioned_image(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Str(Inline):
    """Plain text (raw, unescaped)."""

    content: str

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_str(self)``."""
        return visitor.visit_str(self)


@dataclass
class Space(Inline):
    """Inter-word space."""

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_space(self)``."""
        return visitor.visit_space(self)


@dataclass
class LineBreak(Inline):
    """Hard line break."""

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_line_break(self)``."""
        return visitor.visit_line_break(self)


@dataclass
class Emph(Inline):
    """Emphasized (italic) text."""

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_emph(self)``."""
        return visitor.visit_emph(self)


@dataclass
class Strong(Inline):
    """Strongly emphasized (bold) text."""

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_strong(self)``."""
        return visitor.visit_strong(self)


@dataclass
class Strikeout(Inline):
    """Struck-out text."""

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_strikeout(self)``."""
        return visitor.visit_strikeout(self)


@dataclass
class Superscript(Inline):
    """Superscripted text."""

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_superscript(self)``."""
        return visitor.visit_superscript(self)


@dataclass
class Subscript(Inline):
    """Subscripted text."""

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_subscript(self)``."""
        return visitor.visit_subscript(self)


@dataclass
class SmallCaps(Inline):
    """Small caps text."""

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_small_caps(self)``."""
        return visitor.visit_small_caps(self)


@dataclass
class Quoted(Inline):
    """Quoted text.

    Parameters
    ----------
    quote_type : {'single', 'double'}
        Quotation mark style
    content : list of Node, default = empty list
        Quoted inline content

    """

    quote_type: QuoteType
    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_quoted(self)``."""
        return visitor.visit_quoted(self)


@dataclass
class Cite(Inline):
    """Citation.

    Parameters
    ----------
    content : list of Node, default = empty list
        Rendered citation text
    citations : list of str, default = empty list
        Cited keys

    """

    content: list[Node] = field(default_factory=list)
    citations: list[str] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_cite(self)``."""
        return visitor.visit_cite(self)


@dataclass
class Code(Inline):
    """Inline code (raw, unescaped)."""

    content: str
    attributes: dict[str, str] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_code(self)``."""
        return visitor.visit_code(self)


@dataclass
class Math(Inline):
    """TeX math.

    Parameters
    ----------
    math_type : {'inline', 'display'}
        Inline or display math
    content : str
        TeX source (raw, unescaped)

    """

    math_type: MathType
    content: str

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_math(self)``."""
        return visitor.visit_math(self)


@dataclass
class RawInline(Inline):
    """Raw inline content in a named output format."""

    format: str
    content: str

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_raw_inline(self)``."""
        return visitor.visit_raw_inline(self)


@dataclass
class Link(Inline):
    """Hyperlink.

    Parameters
    ----------
    content : list of Node
        Link text
    target : str
        Target URI (raw, unescaped)
    title : str, default = ""
        Link title
    attributes : dict, default = empty dict
        Attributes

    """

    content: list[Node]
    target: str
    title: str = ""
    attributes: dict[str, str] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_link(self)``."""
        return visitor.visit_link(self)


@dataclass
class Image(Inline):
    """Inline image; its content is the caption.

    Parameters
    ----------
    content : list of Node
        Caption (alt text) inlines
    src : str
        Image URI (raw, unescaped)
    title : str, default = ""
        Image title
    attributes : dict, default = empty dict
        Attributes

    """

    content: list[Node]
    src: str
    title: str = ""
    attributes: dict[str, str] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_image(self)``."""
        return visitor.visit_image(self)


@dataclass
class Note(Inline):
    """Footnote; holds the note body as blocks."""

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_note(self)``."""
        return visitor.visit_note(self)


@dataclass
class Span(Inline):
    """Generic inline container carrying attributes."""

    content: list[Node] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_span(self)``."""
        return visitor.visit_span(self)


# ============================================================================
# Unrecognized content
# ============================================================================


@dataclass
class UnknownNode(Node):
    """Element the input decoder had no node type for.

    Parameters
    ----------
    kind : str
        Source element type name (e.g. ``Underline``)
    payload : Any, default = None
        Undecoded source content, kept for diagnostics

    """

    kind: str
    payload: Optional[Any] = None

    def accept(self, visitor: Any) -> Any:
        """Return ``visitor.visit_unknown(self)``."""
        return visitor.visit_unknown(self)


__all__ = [
    "Node",
    "Block",
    "Inline",
    "Document",
    "Plain",
    "Paragraph",
    "Header",
    "CodeBlock",
    "BlockQuote",
    "RawBlock",
    "HorizontalRule",
    "Table",
    "BulletList",
    "OrderedList",
    "DefinitionItem",
    "DefinitionList",
    "Div",
    "CaptionedImage",
    "Str",
    "Space",
    "LineBreak",
    "Emph",
    "Strong",
    "Strikeout",
    "Superscript",
    "Subscript",
    "SmallCaps",
    "Quoted",
    "Cite",
    "Code",
    "Math",
    "RawInline",
    "Link",
    "Image",
    "Note",
    "Span",
    "UnknownNode",
]
