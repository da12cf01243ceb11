"""Test utilities for the ast2jats test suite.

This module provides builders for AST fragments and Pandoc JSON documents
shared by several test modules.
"""

import json

from ast2jats.ast import Space, Str


def words(value: str) -> list:
    """Build the inline run for a plain string, one Str per word."""
    nodes: list = []
    for index, word in enumerate(value.split(" ")):
        if index:
            nodes.append(Space())
        nodes.append(Str(content=word))
    return nodes


def pandoc_str(value: str) -> list:
    """Build Pandoc JSON inlines for a plain string."""
    nodes: list = []
    for index, word in enumerate(value.split(" ")):
        if index:
            nodes.append({"t": "Space"})
        nodes.append({"t": "Str", "c": word})
    return nodes


def pandoc_json(blocks: list, meta: dict | None = None) -> bytes:
    """Serialize blocks and metadata as ``pandoc -t json`` would."""
    return json.dumps({"pandoc-api-version": [1, 23, 1], "meta": meta or {}, "blocks": blocks}).encode("utf-8")
