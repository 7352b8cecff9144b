"""Input-layer public API for key decoding and interaction handlers.

Exports are split between low-level terminal decoding (`read_key`) and the
per-mode handlers used by the runtime loop.
"""

from .key_normal import NormalKeyContext, NormalKeyHandler, handle_normal_key
from .key_path_entry import PathEntryKeyContext, handle_path_entry_key
from .key_registry import KeyComboBinding, KeyComboRegistry
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "NormalKeyContext",
    "NormalKeyHandler",
    "PathEntryKeyContext",
    "handle_normal_key",
    "handle_path_entry_key",
]
