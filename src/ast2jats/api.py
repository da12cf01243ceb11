#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ast2jats/api.py
"""Public conversion entry point.

:func:`to_jats` accepts either a ready-made :class:`~ast2jats.ast.Document`
or a Pandoc JSON source, renders it with a fresh
:class:`~ast2jats.renderers.jats.JatsRenderer` and returns (or writes) the
result.

"""

from __future__ import annotations

import logging
from dataclasses import fields
from datetime import date
from pathlib import Path
from typing import IO, Any, Mapping, Optional, Union

from ast2jats.ast import Document
from ast2jats.options.jats import JatsRendererOptions
from ast2jats.options.pandoc_json import PandocJsonParserOptions
from ast2jats.parsers.pandoc_json import PandocJsonParser
from ast2jats.renderers.jats import JatsRenderer
from ast2jats.utils.metadata import load_metadata

logger = logging.getLogger(__name__)

MetadataSource = Union[Mapping[str, Any], str, Path, IO[bytes], IO[str], bytes]


def _split_kwargs(kwargs: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split kwargs between parser and renderer options by field name.

    Returns
    -------
    tuple[dict, dict]
        (parser_kwargs, renderer_kwargs)

    """
    parser_fields = {f.name for f in fields(PandocJsonParserOptions)}
    renderer_fields = {f.name for f in fields(JatsRendererOptions)}

    parser_kwargs = {}
    renderer_kwargs = {}
    unmatched = []
    for k, v in kwargs.items():
        if k in parser_fields:
            parser_kwargs[k] = v
        elif k in renderer_fields:
            renderer_kwargs[k] = v
        else:
            unmatched.append(k)

    if unmatched:
        logger.warning("Ignoring options that match no parser or renderer field: %s", unmatched)

    return parser_kwargs, renderer_kwargs


def _merge_metadata(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = _merge_metadata(current, value)
        else:
            merged[key] = value
    return merged


def to_jats(
    source: Union[Document, str, Path, IO[bytes], IO[str], bytes],
    *,
    metadata: Optional[MetadataSource] = None,
    parser_options: Optional[PandocJsonParserOptions] = None,
    renderer_options: Optional[JatsRendererOptions] = None,
    output: Union[str, Path, IO[bytes], IO[str], None] = None,
    today: Optional[date] = None,
    **kwargs: Any,
) -> Union[str, None]:
    """Convert a document AST to JATS.

    Parameters
    ----------
    source : Document, str, Path, IO, or bytes
        An AST Document, or Pandoc JSON given as a file path, a file-like
        object or raw bytes (as written by ``pandoc -t json``).
    metadata : Mapping, str, Path, IO, or bytes, optional
        Additional metadata merged over the document's own metadata. Mappings
        are used as-is; anything else is read as YAML (a plain YAML file or
        a ``---`` front matter block).
    parser_options : PandocJsonParserOptions, optional
        Options for decoding Pandoc JSON.
    renderer_options : JatsRendererOptions, optional
        Options for rendering and document assembly.
    output : str, Path, IO, or None, default None
        Where to write the result. When None the result is returned.
    today : date, optional
        Fallback publication date; defaults to the current date.
    kwargs : Any
        Individual option fields. They override the matching fields of
        ``parser_options`` or ``renderer_options``.

    Returns
    -------
    str or None
        The JATS text, or None when written to ``output``.

    Raises
    ------
    ParsingError
        If the Pandoc JSON or the YAML metadata cannot be decoded
    InvalidOptionsError
        If an options object of the wrong class is given
    OutputWriteError
        If ``output`` cannot be written

    Examples
    --------
        >>> from ast2jats import to_jats
        >>> jats = to_jats("paper.json", metadata="paper.yaml")
        >>> fragment = to_jats("paper.json", standalone=False)

    """
    parser_kwargs, renderer_kwargs = _split_kwargs(kwargs)

    if isinstance(source, Document):
        document = source
    else:
        parser_opts = parser_options or PandocJsonParserOptions()
        if parser_kwargs:
            parser_opts = parser_opts.create_updated(**parser_kwargs)
        document = PandocJsonParser(parser_opts).parse(source)

    if metadata is not None:
        extra = metadata if isinstance(metadata, Mapping) else load_metadata(metadata)
        document = Document(children=document.children, metadata=_merge_metadata(document.metadata, extra))

    renderer_opts = renderer_options or JatsRendererOptions()
    if renderer_kwargs:
        renderer_opts = renderer_opts.create_updated(**renderer_kwargs)

    renderer = JatsRenderer(renderer_opts)
    result = renderer.render_to_string(document, today=today)
    if output is None:
        return result

    renderer.write_text_output(result, output)
    return None


__all__ = ["to_jats"]
