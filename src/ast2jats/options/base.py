#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Base classes for parser and renderer options.

This module defines the foundation classes for the options used throughout
the ast2jats conversion pipeline.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options.

    Parameters
    ----------
    fail_on_unknown_nodes : bool, default=False
        Whether to raise RenderingError when a node has no rendering.
        If False (default), a warning is logged and the node renders empty.

    Notes
    -----
    Subclasses should define format-specific rendering options as frozen dataclass fields.

    """

    fail_on_unknown_nodes: bool = field(
        default=False,
        metadata={
            "help": "Raise RenderingError on nodes without a rendering instead of logging warnings",
            "importance": "advanced",
        },
    )


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for all parser options.

    Parsers decode an external AST serialization into ast2jats nodes.

    Parameters
    ----------
    extract_metadata : bool
        Whether to decode document metadata

    """

    extract_metadata: bool = field(
        default=True,
        metadata={"help": "Decode document metadata into Document.metadata", "importance": "core"},
    )
