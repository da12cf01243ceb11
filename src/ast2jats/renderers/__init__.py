#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers from the ast2jats AST to output formats."""

from ast2jats.renderers.base import BaseRenderer
from ast2jats.renderers.jats import JatsRenderer

__all__ = ["BaseRenderer", "JatsRenderer"]
