"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (tree, search box, chrome). Diff colouring
comes from the external formatter and is not themed here.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    divider_active: str
    reverse: str
    reset: str
    header_title: str
    tree_dir: str
    tree_file: str
    tree_selected: str
    file_added: str
    file_deleted: str
    file_modified: str
    stat_added: str
    stat_deleted: str
    search_border: str
    search_placeholder: str
    search_query: str
    search_selected: str
    help_key: str
    help_dim: str
    status_error: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    divider_active="\033[38;5;75m",
    reverse="\033[7m",
    reset="\033[0m",
    header_title="\033[1;38;5;75m",
    tree_dir="\033[1;34m",
    tree_file="\033[38;5;252m",
    tree_selected="\033[1;48;5;237m",
    file_added="\033[32m",
    file_deleted="\033[31m",
    file_modified="\033[33m",
    stat_added="\033[32m",
    stat_deleted="\033[31m",
    search_border="\033[38;5;240m",
    search_placeholder="\033[2;38;5;250m",
    search_query="\033[1;38;5;81m",
    search_selected="\033[48;5;237;1m",
    help_key="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
    status_error="\033[1;31m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    divider_active="",
    reverse="",
    reset="",
    header_title="",
    tree_dir="",
    tree_file="",
    tree_selected="",
    file_added="",
    file_deleted="",
    file_modified="",
    stat_added="",
    stat_deleted="",
    search_border="",
    search_placeholder="",
    search_query="",
    search_selected="",
    help_key="",
    help_dim="",
    status_error="",
)


def no_color_requested(environ: dict[str, str] | None = None) -> bool:
    """Return whether ``NO_COLOR`` is set to a non-empty value."""
    env = os.environ if environ is None else environ
    return bool(env.get("NO_COLOR"))


def resolve_theme(*, no_color: bool = False) -> UITheme:
    """Return concrete theme for the requested color mode."""
    if no_color:
        return PLAIN_THEME
    return DEFAULT_THEME


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "PLAIN_THEME",
    "no_color_requested",
    "resolve_theme",
]
