"""Core analysis engine: input validation, readability rules and scoring.

This module is framework-agnostic. It has no dependency on MCP or any server
framework and holds no state between calls: ``analyze`` is a pure function of
its input and configuration.
"""

from .analyzer import analyze
from .models import DEFAULT_CONFIG, AnalysisError, BulletAnalysis, BulletConfig

__all__ = ["analyze", "AnalysisError", "BulletAnalysis", "BulletConfig", "DEFAULT_CONFIG"]
