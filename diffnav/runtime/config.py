"""JSON config loading.

The config file is read once at startup into a frozen ``DiffnavConfig``.
Malformed or missing values fall back to defaults.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..tree_model.icons import ICONS_ASCII, normalize_icon_style

logger = logging.getLogger(__name__)

APP_NAME = "diffnav"
CONFIG_FILENAME = "config.json"
CONFIG_DIR_ENV = "DIFFNAV_CONFIG_DIR"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

DEFAULT_FILE_TREE_WIDTH = 26
DEFAULT_SEARCH_TREE_WIDTH = 50


@dataclass(frozen=True)
class DiffnavConfig:
    """Read-only UI preferences."""

    hide_header: bool = False
    hide_footer: bool = False
    show_file_tree: bool = True
    file_tree_width: int = DEFAULT_FILE_TREE_WIDTH
    search_tree_width: int = DEFAULT_SEARCH_TREE_WIDTH
    icons: str = ICONS_ASCII
    color_file_names: bool = True
    show_diff_stats: bool = True
    side_by_side: bool = True
    hide_tree_root: bool = False
    formatter: str = "delta"
    log_file: str | None = None
    log_level: str = "INFO"


def config_path() -> Path:
    """Return the config file path, honoring ``$DIFFNAV_CONFIG_DIR``."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        candidate = Path(override).expanduser()
        if candidate.is_dir():
            return candidate / CONFIG_FILENAME
    return CONFIG_PATH


def load_config_data() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    path = config_path()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _bool(data: dict[str, object], key: str, default: bool) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else default


def _positive_int(data: dict[str, object], key: str, default: int) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def _optional_str(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def load_config() -> DiffnavConfig:
    """Return the effective config with defaults for missing or invalid keys."""
    data = load_config_data()
    defaults = DiffnavConfig()
    return DiffnavConfig(
        hide_header=_bool(data, "hide_header", defaults.hide_header),
        hide_footer=_bool(data, "hide_footer", defaults.hide_footer),
        show_file_tree=_bool(data, "show_file_tree", defaults.show_file_tree),
        file_tree_width=_positive_int(data, "file_tree_width", defaults.file_tree_width),
        search_tree_width=_positive_int(data, "search_tree_width", defaults.search_tree_width),
        icons=normalize_icon_style(data.get("icons", defaults.icons)),
        color_file_names=_bool(data, "color_file_names", defaults.color_file_names),
        show_diff_stats=_bool(data, "show_diff_stats", defaults.show_diff_stats),
        side_by_side=_bool(data, "side_by_side", defaults.side_by_side),
        hide_tree_root=_bool(data, "hide_tree_root", defaults.hide_tree_root),
        formatter=_optional_str(data, "formatter") or defaults.formatter,
        log_file=_optional_str(data, "log_file"),
        log_level=_optional_str(data, "log_level") or defaults.log_level,
    )
