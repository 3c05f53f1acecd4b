"""Bullet MCP Server.

Validate and improve bullet point lists using evidence-based readability
research: list length, hierarchy, line length, serial position, parallel
structure, first words and formatting.
"""

__version__ = "0.1.0"

from .core import analyze

__all__ = ["analyze"]
