"""Bullet MCP Server.

FastMCP server with a single ``bullet`` tool that scores bullet lists against
evidence-based readability rules.
Run: bullet-mcp
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from mcp.types import ToolAnnotations

from .config import load_config
from .core import AnalysisError, BulletConfig, analyze
from .display import format_report

logger = logging.getLogger(__name__)

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=False)

_config: Optional[BulletConfig] = None


def get_config() -> BulletConfig:
    global _config
    if _config is None:
        _config = load_config()
    return _config


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Configure logging and resolve configuration from the environment."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    config = get_config()
    logger.info(
        "Bullet server ready (strict mode: %s, research citations: %s)",
        config.validation.strict_mode,
        config.validation.enable_research_citations,
    )
    yield


mcp = FastMCP(
    "Bullet",
    instructions="Score bullet lists against research on working memory, typography and scanning, "
    "and get ranked, actionable fixes before you finalize a summary.",
    lifespan=lifespan,
)


@mcp.tool(annotations=READ_ONLY)
async def bullet(
    items: Optional[list[dict[str, Any]]] = None,
    sections: Optional[list[dict[str, Any]]] = None,
    context: Optional[str] = None,
    title: Optional[str] = None,
    description: Optional[str] = None,
    intro: Optional[str] = None,
) -> dict:
    """Validate a bullet list against evidence-based readability research.

    Scores the list from 0-100 with a letter grade, per-rule breakdown,
    issues grouped by severity (with research citations) and the top three
    improvements to make.

    Rules: 3-7 items per list (5 optimal), at most 2 levels of nesting,
    high-importance items first or last, 45-75 characters per line,
    parallel grammatical structure, distinctive first two words, and
    consistent punctuation and capitalization.

    Use ``items`` for a flat list, or ``sections`` for a long document; the
    two are mutually exclusive. Each section is scored on its own, so the
    3-7 item rule applies per section.

    Args:
        items: Flat list of bullets. Each bullet is ``{"text": str}`` with
            optional ``children`` (nested bullets) and ``importance``
            ('high', 'medium' or 'low').
        sections: Grouped bullets, each ``{"title": str, "items": [...]}``
            with an optional ``context`` override.
        context: 'document' (default), 'presentation' or 'reference'.
            Presentation context warns that visuals may persuade better.
        title: Heading of the list, e.g. "Email Thread Summary".
        description: Brief note on what the bullets cover.
        intro: Introductory phrase shown before the bullets.
    """
    raw: dict[str, Any] = {}
    if items is not None:
        raw["items"] = items
    if sections is not None:
        raw["sections"] = sections
    if context is not None:
        raw["context"] = context

    config = get_config()
    result = analyze(raw, config)
    if isinstance(result, AnalysisError):
        logger.warning("Rejected bullet input: %s", result.error)
        raise ToolError(result.error)

    logger.info(format_report(result, title=title, color=config.display.color_output))
    return result.model_dump(mode="json", exclude_none=True)


def main():
    """Entry point for the CLI command."""
    mcp.run()


if __name__ == "__main__":
    main()
