"""Input-layer public API for key decoding and routing.

Exports are split between low-level terminal decoding (`read_key`) and the
router that applies decoded keys to dashboard state.
"""

from .key_registry import KeyComboBinding, KeyComboRegistry
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key
from .router import CandidateLister, InputRouter, is_text_key

__all__ = [
    "CandidateLister",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "InputRouter",
    "KeyComboBinding",
    "KeyComboRegistry",
    "is_text_key",
    "read_key",
]
