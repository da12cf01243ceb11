#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ast2jats/assembler.py
"""Whole-document assembly.

The assembler receives the rendered body, the metadata tree and the template
variables, and produces the final document:

1. The body is split at the first reference entry anchor; everything from
   there on is back matter.
2. The body is wrapped in the outermost ``<sec>``, which closes the section
   left open by the last header.
3. Normalized front-matter fields are derived from the ``article``,
   ``journal`` and ``copyright`` metadata groups.
4. The named template is loaded and rendered with the assembled data.

All inputs are expected to be markup already: nothing is escaped here.

"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from ast2jats.constants import (
    ARTICLE_ID_FIELDS,
    BACK_MATTER_MARKER,
    DEFAULT_ARTICLE_HEADING,
    DEFAULT_ARTICLE_TITLE,
    DEFAULT_ARTICLE_TYPE,
    DEFAULT_ELOCATION_ID,
    DEFAULT_TEMPLATE_NAME,
    ISO_DATE_LENGTH,
    JOURNAL_ID_FIELDS,
    JOURNAL_ISSN_FIELDS,
)
from ast2jats.templates.engine import render_template
from ast2jats.templates.loader import TemplateLoader
from ast2jats.utils.metadata import flatten_metadata

logger = logging.getLogger(__name__)

TemplateLookup = Callable[[str], str]

_ISO_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_YEAR_PATTERN = re.compile(r"(?<!\d)(\d{4})(?!\d)")

# (metadata key, template field) pairs copied verbatim when present
_ARTICLE_FIELDS: tuple[tuple[str, str], ...] = (
    ("publisher-id", "article_publisher_id"),
    ("doi", "article_doi"),
    ("pmid", "article_pmid"),
    ("pmcid", "article_pmcid"),
    ("art-access-id", "article_art_access_id"),
    ("category", "article_category"),
)
_JOURNAL_FIELDS: tuple[tuple[str, str], ...] = (
    ("pissn", "journal_pissn"),
    ("eissn", "journal_eissn"),
    ("publisher-id", "journal_publisher_id"),
    ("nlm-ta", "journal_nlm_ta"),
    ("pmc", "journal_pmc"),
)


def _present(group: Mapping[str, Any], key: str) -> bool:
    value = group.get(key)
    return value is not None and value is not False and value != ""


def _group(metadata: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = metadata.get(name)
    return value if isinstance(value, Mapping) else {}


def _author_names(authors: Any) -> List[str]:
    """Return display names for plain-string or ``name``-keyed authors."""
    if isinstance(authors, (str, Mapping)):
        authors = [authors]
    if not isinstance(authors, (list, tuple)):
        return []
    names = []
    for author in authors:
        name = author.get("name") if isinstance(author, Mapping) else author
        if name is None or name is False or name == "":
            logger.debug("Skipping author without a name: %r", author)
            continue
        names.append(str(name))
    return names


def split_back_matter(body: str) -> Tuple[str, str]:
    """Split ``body`` at the first reference entry anchor.

    Returns
    -------
    tuple[str, str]
        (body, back). ``back`` is empty when the body has no references.

    """
    offset = body.find(BACK_MATTER_MARKER)
    if offset < 0:
        return body, ""
    logger.debug("Back matter starts at offset %d", offset)
    return body[:offset], body[offset:]


def wrap_body(body: str) -> str:
    """Wrap the body in the untitled outermost section.

    Each rendered header begins with ``</sec>``; this wrap supplies the
    ``<sec>`` that the first header closes and the ``</sec>`` that closes
    the last one.
    """
    return f"<sec>\n<title/>{body}</sec>\n"


def _resolve_pub_date(article: Mapping[str, Any], today: date) -> str:
    value = article.get("pub-date")
    if isinstance(value, date):
        value = value.isoformat()
    if isinstance(value, str) and len(value) == ISO_DATE_LENGTH:
        return value
    if value is not None:
        logger.debug("Ignoring pub-date %r that is not an ISO 8601 date", value)
    return today.isoformat()


def derive_fields(metadata: Mapping[str, Any], today: Optional[date] = None) -> Dict[str, Any]:
    """Derive the normalized front-matter template fields.

    Some fields are forced to ``""`` when none of their alternative
    identifiers are present, so that templates can always emit the
    corresponding element.

    Parameters
    ----------
    metadata : Mapping
        Metadata tree with optional ``article`` and ``journal`` groups
    today : date, optional
        Date used when no ISO ``pub-date`` is given; defaults to today

    Returns
    -------
    dict
        Template fields (``article_*``, ``journal_*`` and ``author_names``)

    """
    article = _group(metadata, "article")
    journal = _group(metadata, "journal")
    today = today or date.today()

    fields: Dict[str, Any] = {}
    for key, name in _ARTICLE_FIELDS:
        if _present(article, key):
            fields[name] = article[key]
    for key, name in _JOURNAL_FIELDS:
        if _present(journal, key):
            fields[name] = journal[key]

    if not any(_present(article, key) for key in ARTICLE_ID_FIELDS):
        fields["article_art_access_id"] = ""
    if not any(_present(journal, key) for key in JOURNAL_ISSN_FIELDS):
        fields["journal_eissn"] = ""
    if not any(_present(journal, key) for key in JOURNAL_ID_FIELDS):
        fields["journal_publisher_id"] = ""

    fields["journal_title"] = journal.get("title") or ""
    fields["article_type"] = article.get("type") or DEFAULT_ARTICLE_TYPE
    fields["article_heading"] = article.get("heading") or DEFAULT_ARTICLE_HEADING
    fields["article_elocation_id"] = article.get("elocation-id") or article.get("doi") or DEFAULT_ELOCATION_ID
    fields["article_title"] = metadata.get("title") or DEFAULT_ARTICLE_TITLE
    fields["author_names"] = _author_names(metadata.get("author"))

    pub_date = _resolve_pub_date(article, today)
    fields["article_pub_date"] = pub_date
    match = _ISO_DATE_PATTERN.match(pub_date)
    if match:
        fields["article_pub_year"], fields["article_pub_month"], fields["article_pub_day"] = match.groups()
    else:
        year = _YEAR_PATTERN.search(pub_date)
        fields["article_pub_year"] = year.group(1) if year else str(today.year)

    return fields


def assemble_document(
    body: str,
    metadata: Optional[Mapping[str, Any]] = None,
    variables: Optional[Mapping[str, Any]] = None,
    *,
    footnotes: Iterable[str] = (),
    template_loader: Optional[TemplateLookup] = None,
    template_name: str = DEFAULT_TEMPLATE_NAME,
    today: Optional[date] = None,
) -> str:
    """Assemble the final document from the rendered body.

    Parameters
    ----------
    body : str
        Rendered body markup
    metadata : Mapping, optional
        Metadata tree whose leaves are markup strings (already escaped)
    variables : Mapping, optional
        Extra template variables; they override flattened metadata keys
    footnotes : iterable of str, default ()
        Rendered ``<fn>`` elements, exposed to the template as ``footnotes``
    template_loader : callable, optional
        Resolves a template name to its text; defaults to a TemplateLoader
    template_name : str, default "default.jats"
        Template to render
    today : date, optional
        Fallback publication date; defaults to today

    Returns
    -------
    str
        The final document

    Examples
    --------
        >>> assemble_document("<p>Hi</p>", template_loader=lambda name: "$body$")
        '<sec>\\n<title/><p>Hi</p></sec>\\n'

    """
    metadata = metadata or {}
    main, back = split_back_matter(body)

    data: Dict[str, Any] = flatten_metadata(metadata)
    data.update(variables or {})
    data["body"] = wrap_body(main)
    data["back"] = back
    data["footnotes"] = list(footnotes)
    data.update(derive_fields(metadata, today))

    loader = template_loader or TemplateLoader()
    return render_template(loader(template_name), data)


__all__ = ["assemble_document", "derive_fields", "split_back_matter", "wrap_body"]
