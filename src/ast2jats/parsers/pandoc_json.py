#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ast2jats/parsers/pandoc_json.py
"""Pandoc JSON to Document decoder.

This module decodes the JSON serialization of the Pandoc AST (the output of
``pandoc -t json``) into ast2jats nodes.

Every Pandoc element is an object ``{"t": <type>, "c": <contents>}``. Block
and inline types the renderer knows are mapped to their node classes;
anything else becomes an :class:`~ast2jats.ast.nodes.UnknownNode`, which the
renderer reports and skips.

Tables
------
Both table encodings are accepted: the five-field form of pandoc-types
< 1.21 and the six-field form (attr, caption, colspecs, head, bodies, foot)
used since. The latter is reduced to the simple column model: the first head
row supplies the header cells, and the remaining head rows, all body rows and
the foot rows become body rows. Row and column spans are not represented.

"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import IO, Any, Callable, Optional, Union

from ast2jats.ast import (
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
from ast2jats.exceptions import ParsingError
from ast2jats.options.pandoc_json import PandocJsonParserOptions
from ast2jats.parsers.base import BaseParser
from ast2jats.utils.io_utils import read_text_input

logger = logging.getLogger(__name__)

IMPLICIT_FIGURE_PREFIX = "fig:"

_ALIGNMENTS = {
    "AlignLeft": "left",
    "AlignRight": "right",
    "AlignCenter": "center",
    "AlignDefault": "default",
}


def _type_of(element: Any) -> Optional[str]:
    if isinstance(element, dict):
        return element.get("t")
    return None


def _decode_attr(attr: Any) -> dict[str, str]:
    """Convert a Pandoc ``[id, [classes], [[key, value]]]`` triple."""
    if not isinstance(attr, list) or len(attr) != 3:
        return {}
    identifier, classes, pairs = attr
    attributes: dict[str, str] = {}
    if identifier:
        attributes["id"] = identifier
    if classes:
        attributes["class"] = " ".join(classes)
    for key, value in pairs:
        attributes[key] = value
    return attributes


def _decode_alignment(alignment: Any) -> str:
    return _ALIGNMENTS.get(_type_of(alignment) or "", "default")


class PandocJsonParser(BaseParser):
    """Decode ``pandoc -t json`` output into a Document.

    Parameters
    ----------
    options : PandocJsonParserOptions or None
        Parser options

    Examples
    --------
    Parse a file written by ``pandoc paper.md -t json -o paper.json``:

        >>> from ast2jats.parsers import PandocJsonParser
        >>> doc = PandocJsonParser().parse("paper.json")

    Parse raw bytes:

        >>> doc = PandocJsonParser().parse(
        ...     b'{"pandoc-api-version": [1, 23], "meta": {}, '
        ...     b'"blocks": [{"t": "Para", "c": [{"t": "Str", "c": "Hi"}]}]}'
        ... )

    """

    def __init__(self, options: PandocJsonParserOptions | None = None):
        """Initialize the Pandoc JSON parser."""
        BaseParser._validate_options_type(options, PandocJsonParserOptions, "pandoc_json")
        options = options or PandocJsonParserOptions()
        super().__init__(options)
        self.options: PandocJsonParserOptions = options

        self._block_decoders: dict[str, Callable[[Any], Optional[Node]]] = {
            "Plain": lambda c: Plain(content=self._inlines(c)),
            "Para": self._decode_para,
            "LineBlock": self._decode_line_block,
            "CodeBlock": lambda c: CodeBlock(content=c[1], attributes=_decode_attr(c[0])),
            "RawBlock": lambda c: RawBlock(format=c[0], content=c[1]),
            "BlockQuote": lambda c: BlockQuote(children=self._blocks(c)),
            "OrderedList": lambda c: OrderedList(items=[self._blocks(item) for item in c[1]], start=c[0][0]),
            "BulletList": lambda c: BulletList(items=[self._blocks(item) for item in c]),
            "DefinitionList": self._decode_definition_list,
            "Header": lambda c: Header(level=c[0], content=self._inlines(c[2]), attributes=_decode_attr(c[1])),
            "HorizontalRule": lambda c: HorizontalRule(),
            "Table": self._decode_table,
            "Figure": self._decode_figure,
            "Div": lambda c: Div(children=self._blocks(c[1]), attributes=_decode_attr(c[0])),
            "Null": lambda c: None,
        }
        self._inline_decoders: dict[str, Callable[[Any], Optional[Node]]] = {
            "Str": lambda c: Str(content=c),
            "Space": lambda c: Space(),
            "SoftBreak": lambda c: Space(),
            "LineBreak": lambda c: LineBreak(),
            "Emph": lambda c: Emph(content=self._inlines(c)),
            "Strong": lambda c: Strong(content=self._inlines(c)),
            "Strikeout": lambda c: Strikeout(content=self._inlines(c)),
            "Superscript": lambda c: Superscript(content=self._inlines(c)),
            "Subscript": lambda c: Subscript(content=self._inlines(c)),
            "SmallCaps": lambda c: SmallCaps(content=self._inlines(c)),
            "Quoted": self._decode_quoted,
            "Cite": lambda c: Cite(
                content=self._inlines(c[1]), citations=[citation.get("citationId", "") for citation in c[0]]
            ),
            "Code": lambda c: Code(content=c[1], attributes=_decode_attr(c[0])),
            "Math": lambda c: Math(
                math_type="display" if _type_of(c[0]) == "DisplayMath" else "inline", content=c[1]
            ),
            "RawInline": lambda c: RawInline(format=c[0], content=c[1]),
            "Link": lambda c: Link(
                content=self._inlines(c[1]), target=c[2][0], title=c[2][1], attributes=_decode_attr(c[0])
            ),
            "Image": lambda c: Image(
                content=self._inlines(c[1]), src=c[2][0], title=c[2][1], attributes=_decode_attr(c[0])
            ),
            "Note": lambda c: Note(children=self._blocks(c)),
            "Span": lambda c: Span(content=self._inlines(c[1]), attributes=_decode_attr(c[0])),
        }

    def parse(self, input_data: Union[str, Path, IO[bytes], IO[str], bytes]) -> Document:
        """Parse Pandoc JSON input into a Document.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], IO[str], or bytes
            A path to a JSON file, a file-like object, or raw JSON bytes

        Returns
        -------
        Document
            AST Document node

        Raises
        ------
        ParsingError
            If the input is not valid JSON or not a Pandoc document

        """
        try:
            data = json.loads(read_text_input(input_data))
        except json.JSONDecodeError as e:
            raise ParsingError(f"Invalid Pandoc JSON: {e}", parsing_stage="json_parsing", original_error=e) from e
        except (OSError, UnicodeDecodeError, TypeError) as e:
            raise ParsingError(f"Failed to read Pandoc JSON: {e}", parsing_stage="input", original_error=e) from e

        if not isinstance(data, dict) or not isinstance(data.get("blocks"), list):
            raise ParsingError(
                "Invalid Pandoc JSON: expected an object with a 'blocks' list", parsing_stage="ast_validation"
            )

        api_version = data.get("pandoc-api-version")
        logger.debug("Decoding Pandoc JSON (api version %s)", api_version)

        try:
            children = self._blocks(data["blocks"])
            metadata = self.extract_metadata(data) if self.options.extract_metadata else {}
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
            raise ParsingError(
                f"Malformed Pandoc element: {e}", parsing_stage="ast_decoding", original_error=e
            ) from e

        return Document(children=children, metadata=metadata)

    def extract_metadata(self, document: Any) -> dict[str, Any]:
        """Decode the ``meta`` object of a Pandoc document.

        ``MetaInlines`` and ``MetaBlocks`` values become node lists, which the
        renderer turns into markup; the other value types become plain
        Python values.
        """
        meta = document.get("meta") if isinstance(document, dict) else None
        if not isinstance(meta, dict):
            return {}
        return {key: self._decode_meta(value) for key, value in meta.items()}

    # ------------------------------------------------------------------
    # Element sequences
    # ------------------------------------------------------------------

    def _blocks(self, elements: list[Any]) -> list[Node]:
        nodes = []
        for element in elements:
            node = self._decode(element, self._block_decoders)
            if node is not None:
                nodes.append(node)
        return nodes

    def _inlines(self, elements: list[Any]) -> list[Node]:
        nodes = []
        for element in elements:
            node = self._decode(element, self._inline_decoders)
            if node is not None:
                nodes.append(node)
        return nodes

    @staticmethod
    def _decode(element: Any, decoders: dict[str, Callable[[Any], Optional[Node]]]) -> Optional[Node]:
        element_type = _type_of(element)
        decoder = decoders.get(element_type or "")
        if decoder is None:
            logger.debug("No node type for Pandoc element %r", element_type)
            return UnknownNode(kind=str(element_type), payload=element)
        return decoder(element.get("c"))

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def _decode_para(self, contents: list[Any]) -> Node:
        content = self._inlines(contents)
        if self.options.implicit_figures and len(content) == 1 and isinstance(content[0], Image):
            image = content[0]
            if image.title.startswith(IMPLICIT_FIGURE_PREFIX):
                return CaptionedImage(
                    src=image.src,
                    title=image.title[len(IMPLICIT_FIGURE_PREFIX) :],
                    caption=image.content,
                    attributes=image.attributes,
                )
        return Paragraph(content=content)

    def _decode_line_block(self, lines: list[list[Any]]) -> Node:
        content: list[Node] = []
        for index, line in enumerate(lines):
            if index:
                content.append(LineBreak())
            content.extend(self._inlines(line))
        return Paragraph(content=content)

    def _decode_definition_list(self, items: list[Any]) -> Node:
        return DefinitionList(
            items=[
                DefinitionItem(term=self._inlines(term), definitions=[self._blocks(d) for d in definitions])
                for term, definitions in items
            ]
        )

    def _caption_inlines(self, caption: Any) -> list[Node]:
        """Flatten a ``[short, blocks]`` caption to one inline run."""
        blocks = caption[1] if isinstance(caption, list) and len(caption) == 2 else []
        inlines: list[Node] = []
        for block in blocks:
            if _type_of(block) not in ("Plain", "Para"):
                continue
            if inlines:
                inlines.append(Space())
            inlines.extend(self._inlines(block["c"]))
        return inlines

    def _decode_figure(self, contents: list[Any]) -> Node:
        attr, caption, body = contents
        attributes = _decode_attr(attr)
        blocks = self._blocks(body)
        if len(blocks) == 1 and isinstance(blocks[0], (Plain, Paragraph)):
            inlines = blocks[0].content
            if len(inlines) == 1 and isinstance(inlines[0], Image):
                image = inlines[0]
                return CaptionedImage(
                    src=image.src,
                    title=image.title,
                    caption=self._caption_inlines(caption) or image.content,
                    attributes={**image.attributes, **attributes},
                )
        logger.debug("Figure does not hold a single image; decoding it as a div")
        return Div(children=blocks, attributes=attributes)

    def _decode_table(self, contents: list[Any]) -> Node:
        if len(contents) == 5:
            caption, aligns, widths, headers, rows = contents
            return Table(
                caption=self._inlines(caption),
                alignments=[_decode_alignment(a) for a in aligns],
                widths=[float(w) for w in widths],
                headers=[self._blocks(cell) for cell in headers],
                rows=[[self._blocks(cell) for cell in row] for row in rows],
            )

        _attr, caption, colspecs, head, bodies, foot = contents
        alignments = [_decode_alignment(spec[0]) for spec in colspecs]
        widths = [float(spec[1]["c"]) if _type_of(spec[1]) == "ColWidth" else 0.0 for spec in colspecs]

        head_rows = head[1]
        body_rows: list[Any] = list(head_rows[1:])
        for body in bodies:
            body_rows.extend(body[2])
            body_rows.extend(body[3])
        body_rows.extend(foot[1])

        return Table(
            caption=self._caption_inlines(caption),
            alignments=alignments,
            widths=widths,
            headers=self._row_cells(head_rows[0]) if head_rows else [],
            rows=[self._row_cells(row) for row in body_rows],
        )

    def _row_cells(self, row: list[Any]) -> list[list[Node]]:
        """Return the block content of each ``[attr, align, rows, cols, blocks]`` cell."""
        return [self._blocks(cell[4]) for cell in row[1]]

    # ------------------------------------------------------------------
    # Inlines
    # ------------------------------------------------------------------

    def _decode_quoted(self, contents: list[Any]) -> Node:
        quote_type = "single" if _type_of(contents[0]) == "SingleQuote" else "double"
        return Quoted(quote_type=quote_type, content=self._inlines(contents[1]))

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def _decode_meta(self, value: Any) -> Any:
        meta_type = _type_of(value)
        contents = value.get("c") if isinstance(value, dict) else None
        if meta_type == "MetaMap":
            return {key: self._decode_meta(item) for key, item in contents.items()}
        if meta_type == "MetaList":
            return [self._decode_meta(item) for item in contents]
        if meta_type in ("MetaBool", "MetaString"):
            return contents
        if meta_type == "MetaInlines":
            return self._inlines(contents)
        if meta_type == "MetaBlocks":
            return self._blocks(contents)
        logger.warning("Ignoring metadata value of unknown type %r", meta_type)
        return None


__all__ = ["PandocJsonParser"]
