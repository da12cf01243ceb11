#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for JATS rendering.

This module defines options for rendering the AST to JATS XML, including
document assembly and template lookup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from ast2jats.constants import (
    DEFAULT_BLOCK_SEPARATOR,
    DEFAULT_RAW_PASSTHROUGH_FORMATS,
    DEFAULT_REFERENCES_TITLE,
    DEFAULT_TEMPLATE_NAME,
    DEFAULT_TEMPLATE_SEARCH_PATHS,
)
from ast2jats.options.base import BaseRendererOptions


# src/ast2jats/options/jats.py
@dataclass(frozen=True)
class JatsRendererOptions(BaseRendererOptions):
    """Configuration options for rendering AST to JATS.

    Parameters
    ----------
    standalone : bool, default True
        Assemble a complete document through the template. If False, only the
        rendered body fragment is returned.
    template_name : str, default "default.jats"
        Name of the template used for document assembly.
    template_search_paths : tuple of str, default (".", "templates")
        Directories searched, in order, for ``template_name`` before the
        templates bundled with the package.
    block_separator : str, default "\\n\\n"
        String placed between consecutive rendered blocks.
    references_title : str, default "References"
        Title of the generated ``<ref-list>``.
    raw_passthrough_formats : tuple of str, default ("jats", "xml")
        Raw block/inline formats emitted verbatim. Raw content in any other
        format is escaped inside ``<preformat>``.
    variables : Mapping[str, Any], default {}
        Extra template variables. They override metadata of the same name
        and are inserted verbatim, so markup must already be escaped.

    """

    standalone: bool = field(
        default=True,
        metadata={
            "help": "Assemble a full document through the template (False returns the body fragment)",
            "importance": "core",
        },
    )
    template_name: str = field(
        default=DEFAULT_TEMPLATE_NAME,
        metadata={"help": "Template used for document assembly", "importance": "core"},
    )
    template_search_paths: tuple[str, ...] = field(
        default=DEFAULT_TEMPLATE_SEARCH_PATHS,
        metadata={"help": "Directories searched for the template before the bundled ones", "importance": "advanced"},
    )
    block_separator: str = field(
        default=DEFAULT_BLOCK_SEPARATOR,
        metadata={"help": "Separator placed between rendered blocks", "importance": "advanced"},
    )
    references_title: str = field(
        default=DEFAULT_REFERENCES_TITLE,
        metadata={"help": "Title of the generated reference list", "importance": "core"},
    )
    raw_passthrough_formats: tuple[str, ...] = field(
        default=DEFAULT_RAW_PASSTHROUGH_FORMATS,
        metadata={"help": "Raw content formats emitted verbatim", "importance": "advanced"},
    )
    variables: Mapping[str, Any] = field(
        default_factory=dict,
        metadata={"help": "Extra template variables, inserted verbatim (not escaped)", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate field values.

        Raises
        ------
        ValueError
            If the template name is empty.

        """
        if not self.template_name:
            raise ValueError("template_name must be a non-empty string")
