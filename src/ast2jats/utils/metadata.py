#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ast2jats/utils/metadata.py

"""Metadata loading and flattening utilities for ast2jats.

Document metadata arrives as a nested mapping (typically YAML front matter)
with three distinguished groups: ``article``, ``journal`` and ``copyright``.
Templates address nested values through ``_``-joined composite keys, so the
tree is flattened before template rendering.
"""

import logging
from pathlib import Path
from typing import IO, Any, Dict, Mapping, Optional, Tuple, Union

import yaml

from ast2jats.exceptions import ParsingError
from ast2jats.utils.io_utils import read_text_input

logger = logging.getLogger(__name__)

FRONT_MATTER_DELIMITER = "---"


def _is_positional(mapping: Mapping[Any, Any]) -> bool:
    """Return True when the mapping's keys form the dense range 1..N."""
    if not mapping:
        return False
    keys = list(mapping.keys())
    if not all(isinstance(k, int) and not isinstance(k, bool) for k in keys):
        return False
    return sorted(keys) == list(range(1, len(keys) + 1))


def flatten_metadata(metadata: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Flatten a nested metadata tree into composite ``_``-joined keys.

    Only associative mappings are flattened. Lists, and mappings whose keys
    are the positional range 1..N, are kept whole under their own key (the
    latter converted to a list in key order).

    Parameters
    ----------
    metadata : Mapping or None
        Nested metadata tree

    Returns
    -------
    dict
        Flat mapping of composite keys to values

    Examples
    --------
        >>> flatten_metadata({"journal": {"title": "J", "issn": {"print": "1"}}})
        {'journal_title': 'J', 'journal_issn_print': '1'}
        >>> flatten_metadata({"authors": {1: "A", 2: "B"}})
        {'authors': ['A', 'B']}

    """
    result: Dict[str, Any] = {}

    def _flatten(mapping: Mapping[Any, Any], prefix: Optional[str]) -> None:
        for key, value in mapping.items():
            composite = f"{prefix}_{key}" if prefix else str(key)
            if isinstance(value, Mapping):
                if _is_positional(value):
                    result[composite] = [value[index] for index in sorted(value)]
                else:
                    _flatten(value, composite)
            else:
                result[composite] = value

    if metadata:
        _flatten(metadata, None)
    return result


def split_front_matter(text: str) -> Tuple[str, str]:
    """Split a ``---`` delimited YAML front matter block from ``text``.

    Returns
    -------
    tuple[str, str]
        (yaml_text, remaining_text). ``yaml_text`` is empty when the text
        has no front matter block.

    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        return "", text

    for index in range(1, len(lines)):
        if lines[index].strip() in (FRONT_MATTER_DELIMITER, "..."):
            return "".join(lines[1:index]), "".join(lines[index + 1 :])

    return "", text


def load_metadata(source: Union[str, Path, IO[bytes], IO[str], bytes]) -> Dict[str, Any]:
    """Load a metadata tree from a YAML file or a front matter block.

    Parameters
    ----------
    source : str, Path, IO, or bytes
        Path to a YAML (or front-matter-bearing) file, or its raw content

    Returns
    -------
    dict
        The metadata tree; empty when the document holds no mapping

    Raises
    ------
    ParsingError
        If the YAML is malformed

    """
    text = read_text_input(source)
    front_matter, _ = split_front_matter(text)
    yaml_text = front_matter or text

    try:
        data = yaml.safe_load(yaml_text)
    except yaml.YAMLError as e:
        raise ParsingError(f"Invalid YAML metadata: {e}", parsing_stage="metadata", original_error=e) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Metadata is a %s, not a mapping; ignoring it", type(data).__name__)
        return {}
    return data


__all__ = ["flatten_metadata", "load_metadata", "split_front_matter"]
