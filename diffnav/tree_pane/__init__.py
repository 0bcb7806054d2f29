"""Tree pane package exports."""

from __future__ import annotations

from .pane import CONTEXT_MARGIN, TreePane

__all__ = ["TreePane", "CONTEXT_MARGIN"]
