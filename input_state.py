# Keyboard collaborator: turns Tk key events into one InputSnapshot per frame.
from __future__ import annotations

from dataclasses import dataclass


# Checked in this order when several movement keys are held.
DIRECTION_KEYS = (
    ("up", ("Up", "w", "W")),
    ("down", ("Down", "s", "S")),
    ("left", ("Left", "a", "A")),
    ("right", ("Right", "d", "D")),
)
QUIT_KEYS = ("Escape",)
TOGGLE_KEYS = ("m", "M", "Tab")
RESTART_KEYS = ("r", "R")


@dataclass
class InputSnapshot:
    """What the input collaborator saw during one frame."""
    direction: str | None = None
    quit: bool = False
    toggle_mode: bool = False
    restart: bool = False


class KeyboardInput:
    """Tracks held keys between frames; toggle and restart fire once per physical press."""

    def __init__(self) -> None:
        self.held: set[str] = set()
        self._toggle_pending = False
        self._restart_pending = False

    def press(self, keysym: str) -> None:
        # Auto-repeat sends extra presses without releases; only the first counts.
        if keysym not in self.held:
            if keysym in TOGGLE_KEYS:
                self._toggle_pending = True
            elif keysym in RESTART_KEYS:
                self._restart_pending = True
        self.held.add(keysym)

    def release(self, keysym: str) -> None:
        self.held.discard(keysym)

    def clear(self) -> None:
        self.held.clear()
        self._toggle_pending = False
        self._restart_pending = False

    def snapshot(self) -> InputSnapshot:
        direction = None
        for name, keys in DIRECTION_KEYS:
            if any(key in self.held for key in keys):
                direction = name
                break
        snap = InputSnapshot(
            direction=direction,
            quit=any(key in self.held for key in QUIT_KEYS),
            toggle_mode=self._toggle_pending,
            restart=self._restart_pending,
        )
        self._toggle_pending = False
        self._restart_pending = False
        return snap
