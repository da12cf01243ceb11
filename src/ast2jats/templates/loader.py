#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ast2jats/templates/loader.py
"""Template lookup.

A template name is resolved against each search directory in turn (by
default the working directory, then ``templates/``), then against the
templates bundled with the package. When nothing matches, the identity
template ``$body$`` is used.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from ast2jats.constants import DEFAULT_TEMPLATE_SEARCH_PATHS, FALLBACK_TEMPLATE

logger = logging.getLogger(__name__)

BUILTIN_TEMPLATE_DIR = Path(__file__).parent


class TemplateLoader:
    """Resolve template names to template text.

    Parameters
    ----------
    search_paths : iterable of str or Path, default (".", "templates")
        Directories searched in order. Relative paths resolve against the
        working directory at lookup time.
    include_builtin : bool, default True
        Whether to fall back to the templates bundled with ast2jats.

    Examples
    --------
        >>> loader = TemplateLoader(search_paths=["my_templates"])
        >>> text = loader.load("default.jats")

    """

    def __init__(
        self,
        search_paths: Iterable[Union[str, Path]] = DEFAULT_TEMPLATE_SEARCH_PATHS,
        include_builtin: bool = True,
    ):
        """Initialize the loader with its search directories."""
        self.search_paths = [Path(p) for p in search_paths]
        self.include_builtin = include_builtin

    def _candidates(self, name: str) -> list[Path]:
        candidates = [directory / name for directory in self.search_paths]
        if self.include_builtin:
            candidates.append(BUILTIN_TEMPLATE_DIR / name)
        return candidates

    def find(self, name: str) -> Optional[Path]:
        """Return the path of the first matching template file, or None."""
        for candidate in self._candidates(name):
            if candidate.is_file():
                return candidate
        return None

    def load(self, name: str) -> str:
        """Return the text of template ``name``.

        Parameters
        ----------
        name : str
            Template file name, e.g. ``default.jats``

        Returns
        -------
        str
            Template text, or ``$body$`` when no template is found or the
            found file cannot be read

        """
        path = self.find(name)
        if path is None:
            logger.warning("Template '%s' not found; using the identity template", name)
            return FALLBACK_TEMPLATE
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read template %s: %s; using the identity template", path, e)
            return FALLBACK_TEMPLATE
        logger.debug("Loaded template '%s' from %s", name, path)
        return text

    __call__ = load


__all__ = ["TemplateLoader", "BUILTIN_TEMPLATE_DIR"]
