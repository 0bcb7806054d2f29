"""Diff pane: formatter jobs, the per-path render cache and the pane view."""

from __future__ import annotations

from .cache import CacheEntry, DiffRenderCache, wants_side_by_side
from .fallback import render_raw_patch
from .jobs import (
    DEFAULT_FORMATTER,
    RenderJobScheduler,
    RenderRequest,
    RenderResult,
    build_formatter_argv,
)
from .pane import DiffPane

__all__ = [
    "CacheEntry",
    "DiffRenderCache",
    "DiffPane",
    "DEFAULT_FORMATTER",
    "RenderJobScheduler",
    "RenderRequest",
    "RenderResult",
    "build_formatter_argv",
    "render_raw_patch",
    "wants_side_by_side",
]
