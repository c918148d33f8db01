"""
Interfaces module - renderer adapters for the annotation core.

Provides adapters to connect the core region sync logic
with highlight renderers (PDF viewers, web widgets, etc).
"""

from .highlighter_adapter import HighlighterAdapter

__all__ = ['HighlighterAdapter']
