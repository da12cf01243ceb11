#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Template language and template lookup for document assembly."""

from ast2jats.templates.engine import parse_template, render_template
from ast2jats.templates.loader import TemplateLoader

__all__ = ["parse_template", "render_template", "TemplateLoader"]
