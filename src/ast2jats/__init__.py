"""ast2jats - Render a Pandoc-style document AST as JATS article XML.

ast2jats walks a document AST with a visitor and emits JATS-flavoured XML:
headers open flat ``<sec>`` elements, footnotes are collected into an
``<fn-group>``, a ``references`` div becomes the ``<ref-list>`` back matter,
and tables, lists and figures map to their JATS counterparts. The rendered
body is then wrapped in a full article by a small ``$var$`` template
language.

Examples
--------
Converting Pandoc JSON:

    >>> from ast2jats import to_jats
    >>> jats = to_jats("paper.json", metadata="paper.yaml")

Rendering an AST built in code:

    >>> from ast2jats.ast import Document, Header, Paragraph, Str
    >>> doc = Document(
    ...     children=[Header(level=1, content=[Str(content="Intro")]), Paragraph(content=[Str(content="Hi")])],
    ...     metadata={"title": "An Article", "journal": {"title": "A Journal"}},
    ... )
    >>> jats = to_jats(doc)

See Also
--------
ast2jats.ast : AST node definitions
ast2jats.templates : Template language used for document assembly

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "ast2jats requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from ast2jats.api import to_jats
from ast2jats.assembler import assemble_document
from ast2jats.exceptions import (
    Ast2JatsError,
    InvalidOptionsError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from ast2jats.options import JatsRendererOptions, PandocJsonParserOptions
from ast2jats.parsers import PandocJsonParser
from ast2jats.renderers import JatsRenderer
from ast2jats.templates import TemplateLoader, render_template

__all__ = [
    "__version__",
    "to_jats",
    "assemble_document",
    "render_template",
    "TemplateLoader",
    "JatsRenderer",
    "JatsRendererOptions",
    "PandocJsonParser",
    "PandocJsonParserOptions",
    "Ast2JatsError",
    "ValidationError",
    "InvalidOptionsError",
    "ParsingError",
    "RenderingError",
    "OutputWriteError",
]
