#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Decoders from external AST serializations to ast2jats nodes."""

from ast2jats.parsers.base import BaseParser
from ast2jats.parsers.pandoc_json import PandocJsonParser

__all__ = ["BaseParser", "PandocJsonParser"]
