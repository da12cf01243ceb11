#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ast2jats/utils/io_utils.py
"""I/O utilities for handling input sources and output destinations."""

from __future__ import annotations

import io
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Union, cast


def read_text_input(source: Union[str, Path, IO[bytes], IO[str], bytes]) -> str:
    """Read text from a path, raw bytes, or a file-like object.

    Parameters
    ----------
    source : str, Path, IO[bytes], IO[str], or bytes
        Input source. Strings are treated as file paths.

    Returns
    -------
    str
        Decoded UTF-8 text

    Raises
    ------
    TypeError
        If the source type is not supported

    """
    if isinstance(source, bytes):
        return source.decode("utf-8")
    if isinstance(source, (str, Path)):
        return Path(source).read_text(encoding="utf-8")
    if hasattr(source, "read"):
        raw = source.read()
        return raw.decode("utf-8") if isinstance(raw, bytes) else str(raw)
    raise TypeError(f"Unsupported input type: {type(source)}")


def write_content(content: str, output: Union[str, Path, IO[bytes], IO[str], None]) -> Union[StringIO, None]:
    """Write text content to an output destination or return it as a file-like object.

    Parameters
    ----------
    content : str
        Text to write
    output : str, Path, IO[bytes], IO[str], or None
        Output destination. Can be:
        - None: Returns content as StringIO
        - str or Path: Writes content to file at that path
        - IO[bytes]: Writes UTF-8 encoded content to a binary stream
        - IO[str]: Writes content to a text stream

    Returns
    -------
    StringIO or None
        StringIO when ``output`` is None, otherwise None

    Raises
    ------
    TypeError
        If output type is not supported

    Examples
    --------
        >>> result = write_content("<article/>", None)
        >>> result.read()
        '<article/>'

    """
    if output is None:
        return StringIO(content)

    if isinstance(output, (str, Path)):
        Path(output).write_text(content, encoding="utf-8")
        return None

    if hasattr(output, "write"):
        # Detect binary vs text mode, concrete types first
        if isinstance(output, BytesIO):
            is_binary_mode = True
        elif isinstance(output, StringIO):
            is_binary_mode = False
        elif isinstance(output, io.TextIOBase):
            is_binary_mode = False
        elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
            is_binary_mode = True
        elif hasattr(output, "mode"):
            mode = getattr(output, "mode", "")
            is_binary_mode = isinstance(mode, str) and "b" in mode
        else:
            is_binary_mode = False

        if is_binary_mode:
            cast(IO[bytes], output).write(content.encode("utf-8"))
        else:
            cast(IO[str], output).write(content)
        return None

    raise TypeError(f"Unsupported output type: {type(output)}")


__all__ = ["read_text_input", "write_content"]
