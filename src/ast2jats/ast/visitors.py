#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ast2jats/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

Each node's ``accept`` calls exactly one ``visit_*`` method, so dispatch over
the node variants is exhaustive: a concrete visitor must implement every
abstract method below. ``visit_unknown`` is the single default branch for
content the input decoder could not map to a node type.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from ast2jats.ast.nodes import (
    BlockQuote,
    BulletList,
    CaptionedImage,
    Cite,
    Code,
    CodeBlock,
    DefinitionList,
    Div,
    Document,
    Emph,
    Header,
    HorizontalRule,
    Image,
    LineBreak,
    Link,
    Math,
    Note,
    OrderedList,
    Paragraph,
    Plain,
    Quoted,
    RawBlock,
    RawInline,
    SmallCaps,
    Space,
    Span,
    Str,
    Strikeout,
    Strong,
    Subscript,
    Superscript,
    Table,
    UnknownNode,
)

logger = logging.getLogger(__name__)


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement one ``visit_*`` method per node type. Visit methods
    return Any: ``None`` for side-effect visitors, or a result for
    transforming visitors (the JATS renderer returns markup strings).

    Examples
    --------
    Collecting all text from a document:

        >>> class TextCollector(NodeVisitor):
        ...     def visit_str(self, node):
        ...         return node.content
        ...     # ... remaining visit_* methods ...

    """

    # Document

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node."""

    # Blocks

    @abstractmethod
    def visit_plain(self, node: Plain) -> Any:
        """Visit a Plain node."""

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""

    @abstractmethod
    def visit_header(self, node: Header) -> Any:
        """Visit a Header node."""

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock node."""

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote node."""

    @abstractmethod
    def visit_raw_block(self, node: RawBlock) -> Any:
        """Visit a RawBlock node."""

    @abstractmethod
    def visit_horizontal_rule(self, node: HorizontalRule) -> Any:
        """Visit a HorizontalRule node."""

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""

    @abstractmethod
    def visit_bullet_list(self, node: BulletList) -> Any:
        """Visit a BulletList node."""

    @abstractmethod
    def visit_ordered_list(self, node: OrderedList) -> Any:
        """Visit an OrderedList node."""

    @abstractmethod
    def visit_definition_list(self, node: DefinitionList) -> Any:
        """Visit a DefinitionList node."""

    @abstractmethod
    def visit_div(self, node: Div) -> Any:
        """Visit a Div node."""

    @abstractmethod
    def visit_captioned_image(self, node: CaptionedImage) -> Any:
        """Visit a CaptionedImage node."""

    # Inlines

    @abstractmethod
    def visit_str(self, node: Str) -> Any:
        """Visit a Str node."""

    @abstractmethod
    def visit_space(self, node: Space) -> Any:
        """Visit a Space node."""

    @abstractmethod
    def visit_line_break(self, node: LineBreak) -> Any:
        """Visit a LineBreak node."""

    @abstractmethod
    def visit_emph(self, node: Emph) -> Any:
        """Visit an Emph node."""

    @abstractmethod
    def visit_strong(self, node: Strong) -> Any:
        """Visit a Strong node."""

    @abstractmethod
    def visit_strikeout(self, node: Strikeout) -> Any:
        """Visit a Strikeout node."""

    @abstractmethod
    def visit_superscript(self, node: Superscript) -> Any:
        """Visit a Superscript node."""

    @abstractmethod
    def visit_subscript(self, node: Subscript) -> Any:
        """Visit a Subscript node."""

    @abstractmethod
    def visit_small_caps(self, node: SmallCaps) -> Any:
        """Visit a SmallCaps node."""

    @abstractmethod
    def visit_quoted(self, node: Quoted) -> Any:
        """Visit a Quoted node."""

    @abstractmethod
    def visit_cite(self, node: Cite) -> Any:
        """Visit a Cite node."""

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        """Visit a Code node."""

    @abstractmethod
    def visit_math(self, node: Math) -> Any:
        """Visit a Math node."""

    @abstractmethod
    def visit_raw_inline(self, node: RawInline) -> Any:
        """Visit a RawInline node."""

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a Link node."""

    @abstractmethod
    def visit_image(self, node: Image) -> Any:
        """Visit an Image node."""

    @abstractmethod
    def visit_note(self, node: Note) -> Any:
        """Visit a Note node."""

    @abstractmethod
    def visit_span(self, node: Span) -> Any:
        """Visit a Span node."""

    # Fallback

    def visit_unknown(self, node: UnknownNode) -> Any:
        """Visit content with no node type.

        The default logs a warning and returns None; renderers override it
        to supply a format-appropriate empty result.

        Parameters
        ----------
        node : UnknownNode
            The unrecognized element

        """
        logger.warning("Undefined visit for node kind '%s' in %s", node.kind, type(self).__name__)
        return None


__all__ = ["NodeVisitor"]
