#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ast2jats/parsers/base.py
"""Base classes for AST decoders.

A parser in ast2jats does not read authoring formats; it decodes an AST that
some other tool already produced (such as ``pandoc -t json`` output) into
ast2jats nodes.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any, Union

from ast2jats.ast import Document
from ast2jats.exceptions import InvalidOptionsError
from ast2jats.options.base import BaseParserOptions


class BaseParser(ABC):
    """Abstract base class for AST decoders.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Notes
    -----
    The parse() method should handle all supported input types:
    - str or Path: File path to read
    - IO[bytes] or IO[str]: File-like object
    - bytes: Raw serialized AST

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: Union[str, Path, IO[bytes], IO[str], bytes]) -> Document:
        """Decode the input into a Document.

        Raises
        ------
        ParsingError
            If the input is not a valid serialized AST

        """
        raise NotImplementedError

    @abstractmethod
    def extract_metadata(self, document: Any) -> dict[str, Any]:
        """Decode the metadata tree of a loaded source document."""
        raise NotImplementedError
