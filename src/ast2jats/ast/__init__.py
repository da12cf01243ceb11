#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ast2jats/ast/__init__.py
"""Abstract Syntax Tree (AST) module for document representation.

The AST mirrors the Pandoc document model so that documents decoded from
``pandoc -t json`` (see :mod:`ast2jats.parsers.pandoc_json`) or built by hand
can be rendered to JATS.

- nodes: AST node classes representing document structure
- visitors: Visitor pattern implementation for AST traversal

Examples
--------
    >>> from ast2jats.ast import Document, Header, Paragraph, Str
    >>> doc = Document(children=[
    ...     Header(level=1, content=[Str(content="Intro")]),
    ...     Paragraph(content=[Str(content="Hi")]),
    ... ])

"""

from ast2jats.ast.nodes import (
    Block,
    BlockQuote,
    BulletList,
    CaptionedImage,
    Cite,
    Code,
    CodeBlock,
    DefinitionItem,
    DefinitionList,
    Div,
    Document,
    Emph,
    Header,
    HorizontalRule,
    Image,
    Inline,
    LineBreak,
    Link,
    Math,
    Node,
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
from ast2jats.ast.visitors import NodeVisitor

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
    "NodeVisitor",
]
