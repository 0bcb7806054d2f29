"""Input-layer public API: terminal key decoding and key-combo dispatch."""

from .keys import KeyComboBinding, KeyComboRegistry
from .reader import ESC_SEQUENCE_TIMEOUT_MS, UNKNOWN_KEY, _PENDING_BYTES, parse_mouse_col_row, read_key

__all__ = [
    "read_key",
    "parse_mouse_col_row",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "UNKNOWN_KEY",
    "KeyComboBinding",
    "KeyComboRegistry",
]
