"""Icon styles for tree rows."""

from __future__ import annotations

from ..diff_source.types import FileChange

ICONS_ASCII = "ascii"
ICONS_UNICODE = "unicode"
ICONS_NERD_STATUS = "nerd-fonts-status"
ICONS_NERD_SIMPLE = "nerd-fonts-simple"
ICONS_NERD_FILETYPE = "nerd-fonts-filetype"
ICONS_NERD_FULL = "nerd-fonts-full"

# Cycle order for the icon toggle key.
ICON_STYLES: tuple[str, ...] = (
    ICONS_ASCII,
    ICONS_UNICODE,
    ICONS_NERD_STATUS,
    ICONS_NERD_SIMPLE,
    ICONS_NERD_FILETYPE,
    ICONS_NERD_FULL,
)
NERD_STYLES = frozenset({ICONS_NERD_STATUS, ICONS_NERD_SIMPLE, ICONS_NERD_FILETYPE, ICONS_NERD_FULL})

NERD_STATUS_NEW = "\uf457"
NERD_STATUS_DELETED = "\ueadf"
NERD_STATUS_MODIFIED = "\uf459"
NERD_SIMPLE_FILE = "\uf4a5"
NERD_DIRECTORY = "\ue5fe"
NERD_DEFAULT_FILE = "\uf15b"

_NERD_FILETYPE_ICONS = {
    ".c": "\ue61e",
    ".h": "\ue61e",
    ".cpp": "\ue61d",
    ".css": "\ue749",
    ".go": "\ue627",
    ".html": "\ue736",
    ".java": "\ue738",
    ".js": "\ue74e",
    ".json": "\ue60b",
    ".lock": "\uf023",
    ".lua": "\ue620",
    ".md": "\uf48a",
    ".py": "\ue73c",
    ".rb": "\ue739",
    ".rs": "\ue7a8",
    ".sh": "\uf489",
    ".toml": "\ue6b2",
    ".ts": "\ue628",
    ".tsx": "\ue7ba",
    ".yaml": "\ue6a8",
    ".yml": "\ue6a8",
}
_NERD_FILENAME_ICONS = {
    "dockerfile": "\uf308",
    "makefile": "\ue779",
    "go.mod": "\ue627",
    "go.sum": "\ue627",
    ".gitignore": "\ue702",
}


def normalize_icon_style(style: object) -> str:
    """Return a known icon style, falling back to ``ascii``."""
    if isinstance(style, str) and style.strip().lower() in ICON_STYLES:
        return style.strip().lower()
    return ICONS_ASCII


def next_icon_style(style: str) -> str:
    """Return the style after ``style`` in cycle order."""
    current = normalize_icon_style(style)
    index = ICON_STYLES.index(current)
    return ICON_STYLES[(index + 1) % len(ICON_STYLES)]


def directory_icon(style: str) -> str:
    if style in NERD_STYLES:
        return NERD_DIRECTORY
    if style == ICONS_UNICODE:
        return "▶"
    return ">"


def filetype_icon(name: str) -> str:
    """Return the nerd-font glyph for a file name."""
    lowered = name.lower()
    if lowered in _NERD_FILENAME_ICONS:
        return _NERD_FILENAME_ICONS[lowered]
    _stem, dot, suffix = lowered.rpartition(".")
    if dot:
        return _NERD_FILETYPE_ICONS.get("." + suffix, NERD_DEFAULT_FILE)
    return NERD_DEFAULT_FILE


def status_icon(change: FileChange) -> str:
    if change.is_new:
        return NERD_STATUS_NEW
    if change.is_deleted:
        return NERD_STATUS_DELETED
    return NERD_STATUS_MODIFIED


def file_icon(change: FileChange, style: str) -> str:
    """Return the primary icon shown before a file name."""
    if style == ICONS_NERD_STATUS or style == ICONS_NERD_FULL:
        return status_icon(change)
    if style == ICONS_NERD_SIMPLE:
        return NERD_SIMPLE_FILE
    if style == ICONS_NERD_FILETYPE:
        return filetype_icon(change.name)
    if style == ICONS_UNICODE:
        if change.is_new:
            return "+"
        if change.is_deleted:
            return "⛌"
        return "●"
    if change.is_new:
        return "+"
    if change.is_deleted:
        return "x"
    return "*"


def file_icon_prefix(change: FileChange, style: str) -> tuple[str, ...]:
    """Return the icon glyphs shown before a file name, each followed by a space.

    ``nerd-fonts-full`` shows the status icon then the file-type icon; every
    other style shows a single icon.
    """
    if style == ICONS_NERD_FULL:
        return (status_icon(change), filetype_icon(change.name))
    return (file_icon(change, style),)
