#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ast2jats/templates/engine.py
"""Minimal dollar-delimited template language.

Syntax
------
``$name$``
    Replaced by the stringified value of ``name`` (empty when absent).
    Values are inserted as-is; callers pre-escape anything that is not
    already markup.
``$if(name)$ ... $endif$``
    Body kept when ``name`` is truthy (not None, False, ``""`` or an empty
    collection), dropped otherwise.
``$for(name)$ ... $endfor$``
    Body rendered once per element of the list ``name``, with ``name``
    rebound to the element inside the body.

Names match ``[A-Za-z_][A-Za-z0-9_.]*``; a dotted name is looked up as a
literal key first, then as a path through nested mappings. A single newline
directly after ``$if(...)$`` or ``$for(...)$`` belongs to the tag.

After blocks are resolved, any run of whitespace ending in a newline in the
template text collapses to one newline, so removed blocks leave no blank
lines behind. Substituted values are never touched by this normalization.

Malformed or unbalanced tags are kept as literal text; rendering never raises.

"""

from __future__ import annotations

import logging
import re
from collections import ChainMap
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)

_NAME_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_.]*")
_BLANK_RUN_PATTERN = re.compile(r"[ \t\n]+\n")


# ============================================================================
# Tokens
# ============================================================================


@dataclass(frozen=True)
class _Token:
    """A template tag, with the exact source text it was read from."""

    kind: str  # "var", "if", "endif", "for", "endfor"
    source: str
    name: Optional[str] = None


def _read_name(template: str, pos: int) -> Tuple[Optional[str], int]:
    match = _NAME_PATTERN.match(template, pos)
    if match is None:
        return None, pos
    return match.group(0), match.end()


def _match_tag(template: str, start: int) -> Optional[_Token]:
    """Try to read a tag starting at the ``$`` at ``start``."""
    pos = start + 1

    for keyword in ("endif", "endfor"):
        if template.startswith(keyword + "$", pos):
            end = pos + len(keyword) + 1
            return _Token(kind=keyword, source=template[start:end])

    for keyword in ("if", "for"):
        if template.startswith(keyword + "(", pos):
            name, name_end = _read_name(template, pos + len(keyword) + 1)
            if name is not None and template.startswith(")$", name_end):
                end = name_end + 2
                if template.startswith("\n", end):
                    end += 1
                return _Token(kind=keyword, source=template[start:end], name=name)
            return None

    name, name_end = _read_name(template, pos)
    if name is not None and template.startswith("$", name_end):
        return _Token(kind="var", source=template[start : name_end + 1], name=name)
    return None


def tokenize(template: str) -> Iterator[Union[str, _Token]]:
    """Split a template into literal strings and tag tokens.

    Parameters
    ----------
    template : str
        Template source

    Yields
    ------
    str or _Token
        Literal text chunks and recognized tags, in source order

    """
    pos = 0
    literal_start = 0
    length = len(template)
    while pos < length:
        dollar = template.find("$", pos)
        if dollar < 0:
            break
        token = _match_tag(template, dollar)
        if token is None:
            pos = dollar + 1
            continue
        if dollar > literal_start:
            yield template[literal_start:dollar]
        yield token
        pos = dollar + len(token.source)
        literal_start = pos
    if literal_start < length:
        yield template[literal_start:]


# ============================================================================
# Parse tree
# ============================================================================


@dataclass
class Text:
    """Literal template text."""

    content: str


@dataclass
class Variable:
    """``$name$`` substitution."""

    name: str


@dataclass
class Conditional:
    """``$if(name)$`` block."""

    name: str
    body: List["TemplateNode"] = field(default_factory=list)


@dataclass
class Loop:
    """``$for(name)$`` block."""

    name: str
    body: List["TemplateNode"] = field(default_factory=list)


TemplateNode = Union[Text, Variable, Conditional, Loop]

_CLOSERS = {"endif": "if", "endfor": "for"}


def parse_template(template: str) -> List[TemplateNode]:
    """Parse template source into a tree of template nodes.

    Blocks nest freely. An opening tag without its closer, or a closer
    without its opener, is kept as literal text.

    Parameters
    ----------
    template : str
        Template source

    Returns
    -------
    list of TemplateNode
        Top-level template nodes

    """
    root: List[TemplateNode] = []
    stack: List[Tuple[Optional[_Token], List[TemplateNode]]] = [(None, root)]

    for item in tokenize(template):
        children = stack[-1][1]
        if isinstance(item, str):
            children.append(Text(item))
        elif item.kind == "var":
            children.append(Variable(item.name or ""))
        elif item.kind in ("if", "for"):
            stack.append((item, []))
        else:
            opener = stack[-1][0]
            if opener is None or opener.kind != _CLOSERS[item.kind]:
                logger.debug("Unbalanced template tag %r kept as text", item.source)
                children.append(Text(item.source))
                continue
            stack.pop()
            block_cls = Conditional if opener.kind == "if" else Loop
            stack[-1][1].append(block_cls(name=opener.name or "", body=children))

    while len(stack) > 1:
        opener, children = stack.pop()
        source = opener.source if opener is not None else ""
        logger.debug("Unclosed template tag %r kept as text", source)
        stack[-1][1].extend([Text(source), *children])

    return root


# ============================================================================
# Evaluation
# ============================================================================


def lookup(data: Mapping[str, Any], name: str) -> Any:
    """Resolve a template name against ``data``.

    A literal key wins; otherwise a dotted name walks nested mappings.
    """
    if name in data:
        return data[name]
    if "." not in name:
        return None
    value: Any = data
    for part in name.split("."):
        if not isinstance(value, Mapping) or part not in value:
            return None
        value = value[part]
    return value


def is_truthy(value: Any) -> bool:
    """Return the template truth value of ``value``."""
    if value is None or value is False:
        return False
    if isinstance(value, (str, list, tuple, Mapping)):
        return len(value) > 0
    return True


def stringify(value: Any) -> str:
    """Convert a data value to substitution text."""
    if value is None or value is False:
        return ""
    if value is True:
        return "true"
    if isinstance(value, (list, tuple)):
        return "".join(stringify(item) for item in value)
    if isinstance(value, Mapping):
        return "true" if value else ""
    return str(value)


# Output segments: (is_value, text). Values are exempt from whitespace normalization.
_Segment = Tuple[bool, str]


def _evaluate(nodes: List[TemplateNode], scope: Mapping[str, Any], out: List[_Segment]) -> None:
    for node in nodes:
        if isinstance(node, Text):
            out.append((False, node.content))
        elif isinstance(node, Variable):
            out.append((True, stringify(lookup(scope, node.name))))
        elif isinstance(node, Conditional):
            if is_truthy(lookup(scope, node.name)):
                _evaluate(node.body, scope, out)
        else:
            items = lookup(scope, node.name)
            if not isinstance(items, (list, tuple)):
                continue
            for item in items:
                _evaluate(node.body, ChainMap({node.name: item}, scope), out)


def _join_segments(segments: List[_Segment]) -> str:
    parts: List[str] = []
    literal_run: List[str] = []
    for is_value, text in segments:
        if is_value:
            if literal_run:
                parts.append(_BLANK_RUN_PATTERN.sub("\n", "".join(literal_run)))
                literal_run = []
            parts.append(text)
        else:
            literal_run.append(text)
    if literal_run:
        parts.append(_BLANK_RUN_PATTERN.sub("\n", "".join(literal_run)))
    return "".join(parts)


def render_template(template: Union[str, List[TemplateNode]], data: Mapping[str, Any]) -> str:
    """Render a template against a data mapping.

    Parameters
    ----------
    template : str or list of TemplateNode
        Template source, or a tree from :func:`parse_template`
    data : Mapping[str, Any]
        Template variables. Values are substituted verbatim.

    Returns
    -------
    str
        Rendered text

    Examples
    --------
        >>> render_template("$if(x)$A$endif$", {"x": "yes"})
        'A'
        >>> render_template("$for(x)$$x$$endfor$", {"x": ["a", "b", "c"]})
        'abc'

    """
    nodes = parse_template(template) if isinstance(template, str) else template
    segments: List[_Segment] = []
    _evaluate(nodes, data, segments)
    return _join_segments(segments)


__all__ = [
    "Text",
    "Variable",
    "Conditional",
    "Loop",
    "TemplateNode",
    "tokenize",
    "parse_template",
    "render_template",
    "lookup",
    "is_truthy",
    "stringify",
]
