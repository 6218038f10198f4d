"""
Pressed-key snapshot for the four movement directions
"""

from typing import Dict, Iterable

KEY_UP = "ArrowUp"
KEY_DOWN = "ArrowDown"
KEY_LEFT = "ArrowLeft"
KEY_RIGHT = "ArrowRight"

DIRECTION_KEYS = (KEY_UP, KEY_DOWN, KEY_LEFT, KEY_RIGHT)


class InputState:
    """Which direction keys are currently held. Unknown keys are ignored."""

    def __init__(self, pressed: Iterable[str] = ()):
        self._keys: Dict[str, bool] = {k: False for k in DIRECTION_KEYS}
        for key in pressed:
            self.set_key_state(key, True)

    def set_key_state(self, key: str, pressed: bool) -> bool:
        """Returns False when the key isn't one we track"""
        if key not in self._keys:
            return False
        self._keys[key] = bool(pressed)
        return True

    def is_pressed(self, key: str) -> bool:
        return self._keys.get(key, False)

    def release_all(self):
        for key in self._keys:
            self._keys[key] = False

    @classmethod
    def from_action(cls, action) -> "InputState":
        """Build from a 4-element (up, down, left, right) 0/1 vector"""
        state = cls()
        for key, held in zip(DIRECTION_KEYS, action):
            state.set_key_state(key, bool(held))
        return state

    def __repr__(self):
        held = [k for k, v in self._keys.items() if v]
        return f"InputState({held})"
