"""File-path search overlay."""

from __future__ import annotations

from .panel import SearchPanel, filter_paths

__all__ = ["SearchPanel", "filter_paths"]
