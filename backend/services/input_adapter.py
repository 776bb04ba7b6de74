"""
Maps raw browser key names (KeyboardEvent.key) to engine intents.
"""

from typing import Dict, Optional, Tuple

from domain.constants import UP, DOWN, LEFT, RIGHT

Intent = Tuple[str, Optional[str]]

KEY_BINDINGS: Dict[str, Intent] = {
    "ArrowUp": ("steer", UP),
    "w": ("steer", UP),
    "ArrowDown": ("steer", DOWN),
    "s": ("steer", DOWN),
    "ArrowLeft": ("steer", LEFT),
    "a": ("steer", LEFT),
    "ArrowRight": ("steer", RIGHT),
    "d": ("steer", RIGHT),
    " ": ("toggle_pause", None),
    "Enter": ("start", None),
}


def intent_for_key(key: Optional[str]) -> Optional[Intent]:
    """
    Look up the intent bound to a key.

    Args:
        key: the KeyboardEvent.key value, e.g. "ArrowUp" or "w"

    Returns:
        (intent, direction) tuple, or None for unbound keys
    """
    if not key:
        return None

    binding = KEY_BINDINGS.get(key)
    if binding is None and len(key) == 1:
        # Shift or caps lock
        binding = KEY_BINDINGS.get(key.lower())
    return binding
