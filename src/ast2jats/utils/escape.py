#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ast2jats/utils/escape.py
"""XML text escaping and attribute serialization.

Every raw string that ends up in JATS output (text content, attribute values,
URIs) passes through :func:`escape_xml` exactly once.

"""

from __future__ import annotations

import html
from typing import Mapping, Optional


def escape_xml(text: str) -> str:
    """Escape the five XML reserved characters.

    Parameters
    ----------
    text : str
        Raw text to escape

    Returns
    -------
    str
        Text safe for XML content and attribute values

    Examples
    --------
        >>> escape_xml("<&>\\"'")
        '&lt;&amp;&gt;&quot;&#39;'

    Notes
    -----
    The function is not idempotent: escaping already-escaped text
    double-escapes ``&``. Callers escape each raw value exactly once.

    """
    if not text:
        return text
    # html.escape emits the HTML5 form &#x27; for apostrophes
    return html.escape(text, quote=True).replace("&#x27;", "&#39;")


def format_attributes(attributes: Mapping[str, Optional[str]]) -> str:
    """Serialize an attribute mapping for inclusion in an XML start tag.

    Parameters
    ----------
    attributes : Mapping[str, str or None]
        Attribute names to values. Absent (None) and empty values are skipped.

    Returns
    -------
    str
        Attribute string with a leading space per attribute, in mapping order

    Examples
    --------
        >>> format_attributes({"id": "sec-1", "class": ""})
        ' id="sec-1"'

    """
    parts = []
    for name, value in attributes.items():
        if value is None or value == "":
            continue
        parts.append(f' {name}="{escape_xml(str(value))}"')
    return "".join(parts)


def has_token(value: Optional[str], token: str) -> bool:
    """Return True when ``token`` appears as a whole word in ``value``.

    Used for ``id``/``class`` attribute checks, where several space-separated
    words may share one attribute.
    """
    if not value:
        return False
    return f" {token} " in f" {value} "


__all__ = ["escape_xml", "format_attributes", "has_token"]
