#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ast2jats/renderers/jats.py
"""JATS rendering from AST.

This module provides the JatsRenderer class which converts AST nodes to
JATS-flavoured article XML. The renderer walks the tree bottom-up with the
visitor pattern: child nodes are rendered to markup strings before the
parent wraps them.

Sections
--------
JATS wants nested ``<sec>`` elements but the document model is a flat run of
blocks. Each header therefore renders as ``</sec>\\n<sec>`` plus its title:
it closes whatever section is open and opens the next one. The document
assembler supplies the outermost ``<sec>`` and the final ``</sec>``, which
balances the sequence.

Footnotes
---------
Footnote bodies are collected in a per-render
:class:`~ast2jats.utils.footnotes.FootnoteRegistry` and replaced in the text
by a numbered back-linked reference. The collected ``<fn>`` elements are
handed to the template as the ``footnotes`` list.

"""

from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import Path
from typing import IO, Any, Mapping, Optional, Sequence, Union

from ast2jats.assembler import TemplateLookup, assemble_document
from ast2jats.ast.nodes import (
    Block,
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
from ast2jats.constants import REFERENCES_TOKEN
from ast2jats.exceptions import RenderingError
from ast2jats.options.jats import JatsRendererOptions
from ast2jats.renderers.base import BaseRenderer
from ast2jats.templates.loader import TemplateLoader
from ast2jats.utils.escape import escape_xml, format_attributes, has_token
from ast2jats.utils.footnotes import RenderContext

logger = logging.getLogger(__name__)

# A caption that starts with bold text followed by whitespace gets that text
# promoted to a <title>; the caption is prefixed with <p> before matching.
_CAPTION_TITLE_PATTERN = re.compile(r"^<p><bold>(.*?)</bold>\s", re.DOTALL)
_REFERENCE_ENTRY_PATTERN = re.compile(r"<p>(.*?)</p>", re.DOTALL)

_CELL_ALIGNMENTS = {"right": "right", "center": "center"}


def _strip_paragraph(markup: str) -> str:
    """Remove the wrapper of markup that is exactly one ``<p>`` element."""
    if markup.startswith("<p>") and markup.endswith("</p>") and markup.count("<p>") == 1:
        return markup[3:-4]
    return markup


def _promote_caption_title(caption: str) -> str:
    """Open a caption paragraph, promoting a leading bold run to ``<title>``.

    The result starts a ``<p>`` that the caller is expected to close.
    """
    return _CAPTION_TITLE_PATTERN.sub(r"<title>\1</title>\n<p>", "<p>" + caption, count=1)


def _cell_alignment(alignments: Sequence[str], index: int) -> str:
    if index < len(alignments):
        return _CELL_ALIGNMENTS.get(alignments[index], "left")
    return "left"


class JatsRenderer(NodeVisitor, BaseRenderer):
    """Render AST nodes to JATS XML.

    Parameters
    ----------
    options : JatsRendererOptions or None, default = None
        JATS rendering options
    template_loader : callable, optional
        Resolves a template name to template text. Defaults to a
        :class:`~ast2jats.templates.loader.TemplateLoader` over
        ``options.template_search_paths``.

    Examples
    --------
    Rendering a body fragment:

        >>> from ast2jats.ast import Document, Header, Paragraph, Str
        >>> from ast2jats.options import JatsRendererOptions
        >>> doc = Document(children=[
        ...     Header(level=1, content=[Str(content="Intro")]),
        ...     Paragraph(content=[Str(content="Hi")]),
        ... ])
        >>> renderer = JatsRenderer(JatsRendererOptions(standalone=False))
        >>> print(renderer.render_to_string(doc))
        </sec>
        <sec>
        <title>Intro</title>
        <BLANKLINE>
        <p>Hi</p>

    Notes
    -----
    Per-render state (the footnote registry and the section count) lives in
    a :class:`RenderContext` created by each :meth:`render_to_string` call.
    The context is bound to a short-lived renderer for that call only, so
    one instance can be shared between threads.

    """

    def __init__(
        self,
        options: JatsRendererOptions | None = None,
        template_loader: Optional[TemplateLookup] = None,
        *,
        context: Optional[RenderContext] = None,
    ):
        """Initialize the JATS renderer with options.

        ``context`` binds the renderer to a single render pass and is
        normally left unset; see :meth:`render_node`.
        """
        BaseRenderer._validate_options_type(options, JatsRendererOptions, "jats")
        options = options or JatsRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: JatsRendererOptions = options
        self.template_loader: TemplateLookup = template_loader or TemplateLoader(options.template_search_paths)
        self._context = context

    def _bind(self, context: RenderContext) -> JatsRenderer:
        """Return a renderer sharing this one's configuration, bound to ``context``."""
        return JatsRenderer(self.options, self.template_loader, context=context)

    @property
    def _pass_context(self) -> RenderContext:
        if self._context is None:
            raise RenderingError(
                "Footnotes and sections need a render pass; use render_node() or render_to_string()",
                rendering_stage="visit",
            )
        return self._context

    def render_to_string(self, document: Document, today: Optional[date] = None) -> str:
        """Render a document AST to JATS.

        Parameters
        ----------
        document : Document
            The document node to render
        today : date, optional
            Fallback publication date used during assembly

        Returns
        -------
        str
            The complete article, or only the body fragment when
            ``options.standalone`` is False

        """
        context = RenderContext()
        render_pass = self._bind(context)
        body = render_pass.render_node(document)
        if not self.options.standalone:
            return body

        metadata = render_pass.render_metadata(document.metadata)
        logger.debug(
            "Rendered body with %d section(s) and %d footnote(s)",
            context.sections_opened,
            len(context.footnotes),
        )
        return assemble_document(
            body,
            metadata,
            self.options.variables,
            footnotes=context.footnotes.entries,
            template_loader=self.template_loader,
            template_name=self.options.template_name,
            today=today,
        )

    def render(self, doc: Document, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render AST to JATS and write to output.

        Parameters
        ----------
        doc : Document
            AST Document node to render
        output : str, Path, IO[bytes] or IO[str]
            Output destination (file path or file-like object)

        """
        jats_text = self.render_to_string(doc)
        self.write_text_output(jats_text, output)

    def render_node(self, node: Any, context: Optional[RenderContext] = None) -> str:
        """Render a single node, tolerating values that are not nodes.

        Parameters
        ----------
        node : Node
            Node to render
        context : RenderContext, optional
            Render pass to record footnotes and sections in. An unbound
            renderer starts a fresh one when none is given.

        Returns
        -------
        str
            Rendered markup

        """
        if context is not None or self._context is None:
            return self._bind(context or RenderContext()).render_node(node)
        if isinstance(node, Node):
            return node.accept(self) or ""
        logger.warning("Cannot render value of type %s; emitting nothing", type(node).__name__)
        return ""

    def render_metadata(self, metadata: Any, context: Optional[RenderContext] = None) -> Any:
        """Convert a metadata tree into template-ready markup.

        Node lists are rendered with this visitor (inline runs joined
        directly, block runs with the block separator), plain strings are
        escaped and dates become ISO strings. Mappings and lists keep their
        shape; booleans, numbers and None pass through. ``context`` works as
        in :meth:`render_node`.
        """
        if context is not None or self._context is None:
            return self._bind(context or RenderContext()).render_metadata(metadata)
        if isinstance(metadata, Node):
            return self.render_node(metadata)
        if isinstance(metadata, str):
            return escape_xml(metadata)
        if isinstance(metadata, date):
            return metadata.isoformat()
        if isinstance(metadata, Mapping):
            return {key: self.render_metadata(value) for key, value in metadata.items()}
        if isinstance(metadata, (list, tuple)):
            if metadata and all(isinstance(item, Node) for item in metadata):
                if any(isinstance(item, Block) for item in metadata):
                    return self._blocks(metadata)
                return self._inlines(metadata)
            return [self.render_metadata(item) for item in metadata]
        return metadata

    def _inlines(self, nodes: Sequence[Node]) -> str:
        return "".join(self.render_node(node) for node in nodes)

    def _blocks(self, nodes: Sequence[Node]) -> str:
        return self.options.block_separator.join(self.render_node(node) for node in nodes)

    def _raw(self, raw_format: str, content: str) -> str:
        if raw_format.lower() in {fmt.lower() for fmt in self.options.raw_passthrough_formats}:
            return content
        return f"<preformat>{escape_xml(content)}</preformat>"

    def _figure(self, src: str, caption: str) -> str:
        return (
            "<fig>\n"
            f"<caption>\n{_promote_caption_title(caption)}</p>\n</caption>\n"
            f"<graphic mimetype='image' xlink:href='{escape_xml(src)}' xlink:type='simple'/>\n"
            "</fig>"
        )

    def _list(self, list_type: str, items: Sequence[Sequence[Node]]) -> str:
        rendered = [f"<list-item><p>{_strip_paragraph(self._blocks(item))}</p></list-item>" for item in items]
        return f'<list list-type="{list_type}">\n' + "\n".join(rendered) + "\n</list>"

    def visit_document(self, node: Document) -> str:
        """Render the document's blocks."""
        return self._blocks(node.children)

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def visit_plain(self, node: Plain) -> str:
        """Render inline content without a wrapper."""
        return self._inlines(node.content)

    def visit_paragraph(self, node: Paragraph) -> str:
        """Render a paragraph."""
        return f"<p>{self._inlines(node.content)}</p>"

    def visit_header(self, node: Header) -> str:
        """Close the open section and start a new one titled by the header.

        A header whose id carries the ``references`` token renders to
        nothing; the reference list that follows supplies its own title.
        """
        header_id = node.attributes.get("id")
        if has_token(header_id, REFERENCES_TOKEN):
            return ""
        title = self._inlines(node.content)
        self._pass_context.sections_opened += 1
        return f"</sec>\n<sec{format_attributes({'id': header_id})}>\n<title>{title}</title>"

    def visit_code_block(self, node: CodeBlock) -> str:
        """Render a code block as preformatted text."""
        return f"<preformat>{escape_xml(node.content)}</preformat>"

    def visit_block_quote(self, node: BlockQuote) -> str:
        """Render a block quote as boxed text."""
        return f"<boxed-text>\n{self._blocks(node.children)}\n</boxed-text>"

    def visit_raw_block(self, node: RawBlock) -> str:
        """Pass JATS through; show any other raw format as preformatted text."""
        return self._raw(node.format, node.content)

    def visit_horizontal_rule(self, node: HorizontalRule) -> str:
        """Render a rule (JATS only allows it inside table cells)."""
        return "<hr/>"

    def visit_table(self, node: Table) -> str:
        """Render a table inside a ``<table-wrap>``.

        Column widths are emitted when any width is nonzero. The header row
        is dropped when every header cell is empty. Cells whose content is a
        single paragraph lose the paragraph wrapper.
        """
        lines = ["<table-wrap>"]
        caption = self._inlines(node.caption)
        if caption:
            lines.append(f"<caption>\n{_promote_caption_title(caption)}</p>\n</caption>")
        lines.append("<table>")

        if any(node.widths):
            lines.extend(f'<col width="{int(round(width * 100))}%" />' for width in node.widths)

        headers = [_strip_paragraph(self._blocks(cell)) for cell in node.headers]
        if any(headers):
            lines.append("<tr>")
            lines.extend(
                f'<th align="{_cell_alignment(node.alignments, i)}">{cell}</th>' for i, cell in enumerate(headers)
            )
            lines.append("</tr>")

        for row in node.rows:
            lines.append("<tr>")
            for i, cell in enumerate(row):
                content = _strip_paragraph(self._blocks(cell))
                lines.append(f'<td align="{_cell_alignment(node.alignments, i)}">{content}</td>')
            lines.append("</tr>")

        lines.append("</table>\n</table-wrap>")
        return "\n".join(lines)

    def visit_bullet_list(self, node: BulletList) -> str:
        """Render a bullet list."""
        return self._list("bullet", node.items)

    def visit_ordered_list(self, node: OrderedList) -> str:
        """Render an ordered list; the start number is not representable."""
        return self._list("order", node.items)

    def visit_definition_list(self, node: DefinitionList) -> str:
        """Render a definition list, one ``<def-item>`` per term."""
        items = []
        for item in node.items:
            definitions = "</def>\n<def>".join(self._blocks(definition) for definition in item.definitions)
            items.append(
                f"<def-item>\n<term>{self._inlines(item.term)}</term>\n<def>{definitions}</def>\n</def-item>"
            )
        return "<def-list>\n" + "\n".join(items) + "\n</def-list>"

    def visit_div(self, node: Div) -> str:
        """Render a div; a ``references`` div becomes the reference list.

        Every paragraph of a reference div becomes a numbered
        ``<ref id="ref-N">`` entry. Other divs render their content only.
        """
        content = self._blocks(node.children)
        if not has_token(node.attributes.get("class"), REFERENCES_TOKEN):
            return content

        counter = 0

        def to_reference(match: re.Match[str]) -> str:
            nonlocal counter
            counter += 1
            return f'<ref id="ref-{counter}">\n<mixed-citation>{match.group(1)}</mixed-citation>\n</ref>'

        references = _REFERENCE_ENTRY_PATTERN.sub(to_reference, content)
        logger.debug("Rendered reference list with %d entries", counter)
        title = escape_xml(self.options.references_title)
        return f"<ref-list>\n<title>{title}</title>\n{references}\n</ref-list>"

    def visit_captioned_image(self, node: CaptionedImage) -> str:
        """Render a figure."""
        return self._figure(node.src, self._inlines(node.caption))

    # ------------------------------------------------------------------
    # Inlines
    # ------------------------------------------------------------------

    def visit_str(self, node: Str) -> str:
        """Render escaped text."""
        return escape_xml(node.content)

    def visit_space(self, node: Space) -> str:
        """Render a space."""
        return " "

    def visit_line_break(self, node: LineBreak) -> str:
        """Render a hard line break."""
        return "<br/>"

    def visit_emph(self, node: Emph) -> str:
        """Render emphasis."""
        return f"<italic>{self._inlines(node.content)}</italic>"

    def visit_strong(self, node: Strong) -> str:
        """Render strong emphasis."""
        return f"<bold>{self._inlines(node.content)}</bold>"

    def visit_strikeout(self, node: Strikeout) -> str:
        """Render struck-out text."""
        return f"<strike>{self._inlines(node.content)}</strike>"

    def visit_superscript(self, node: Superscript) -> str:
        """Render superscript."""
        return f"<sup>{self._inlines(node.content)}</sup>"

    def visit_subscript(self, node: Subscript) -> str:
        """Render subscript."""
        return f"<sub>{self._inlines(node.content)}</sub>"

    def visit_small_caps(self, node: SmallCaps) -> str:
        """Render small caps."""
        return f"<sc>{self._inlines(node.content)}</sc>"

    def visit_quoted(self, node: Quoted) -> str:
        """Render quoted text with literal quote characters."""
        quote = "'" if node.quote_type == "single" else '"'
        return f"{quote}{self._inlines(node.content)}{quote}"

    def visit_cite(self, node: Cite) -> str:
        """Render a citation as a bibliography cross-reference."""
        return f'<xref ref-type="bibr">{self._inlines(node.content)}</xref>'

    def visit_code(self, node: Code) -> str:
        """Render inline code."""
        return f"<preformat>{escape_xml(node.content)}</preformat>"

    def visit_math(self, node: Math) -> str:
        """Render TeX math as an escaped formula."""
        tag = "disp-formula" if node.math_type == "display" else "inline-formula"
        return f"<{tag}>{escape_xml(node.content)}</{tag}>"

    def visit_raw_inline(self, node: RawInline) -> str:
        """Pass JATS through; show any other raw format as preformatted text."""
        return self._raw(node.format, node.content)

    def visit_link(self, node: Link) -> str:
        """Render a link as an external URI link."""
        return (
            f'<ext-link ext-link-type="uri" xlink:href="{escape_xml(node.target)}" xlink:type="simple">'
            f"{self._inlines(node.content)}</ext-link>"
        )

    def visit_image(self, node: Image) -> str:
        """Render an inline image as a figure captioned by its alt text."""
        return self._figure(node.src, self._inlines(node.content))

    def visit_note(self, node: Note) -> str:
        """Collect the footnote body and return its numbered reference."""
        number = self._pass_context.footnotes.register(self._blocks(node.children))
        return f'<a id="fnref{number}" href="#fn{number}"><sup>{number}</sup></a>'

    def visit_span(self, node: Span) -> str:
        """Render a span's content only."""
        return self._inlines(node.content)

    def visit_unknown(self, node: UnknownNode) -> str:
        """Warn about an unrecognized element and render nothing.

        Raises
        ------
        RenderingError
            If ``options.fail_on_unknown_nodes`` is set

        """
        if self.options.fail_on_unknown_nodes:
            raise RenderingError(f"No JATS rendering for element type {node.kind!r}", rendering_stage="visit")
        logger.warning("No JATS rendering for element type %r; emitting nothing", node.kind)
        return ""


__all__ = ["JatsRenderer"]
