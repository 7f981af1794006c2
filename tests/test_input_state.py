"""Tests for the keyboard collaborator."""

from input_state import KeyboardInput


class TestKeyboardInput:
    """Tests for per-frame snapshots."""

    def test_idle_snapshot(self):
        snap = KeyboardInput().snapshot()
        assert snap.direction is None
        assert snap.quit is False
        assert snap.toggle_mode is False

    def test_held_arrow_reported_every_frame(self):
        keys = KeyboardInput()
        keys.press("Left")
        assert keys.snapshot().direction == "left"
        assert keys.snapshot().direction == "left"
        keys.release("Left")
        assert keys.snapshot().direction is None

    def test_wasd(self):
        keys = KeyboardInput()
        keys.press("s")
        assert keys.snapshot().direction == "down"

    def test_direction_priority(self):
        """Up beats down beats left beats right when several are held."""
        keys = KeyboardInput()
        keys.press("Right")
        keys.press("Left")
        assert keys.snapshot().direction == "left"
        keys.press("Up")
        assert keys.snapshot().direction == "up"

    def test_escape_quits(self):
        keys = KeyboardInput()
        keys.press("Escape")
        assert keys.snapshot().quit is True

    def test_toggle_fires_once_per_press(self):
        keys = KeyboardInput()
        keys.press("m")
        assert keys.snapshot().toggle_mode is True
        assert keys.snapshot().toggle_mode is False

    def test_toggle_autorepeat_does_not_refire(self):
        keys = KeyboardInput()
        keys.press("m")
        keys.snapshot()
        keys.press("m")
        keys.press("m")
        assert keys.snapshot().toggle_mode is False
        keys.release("m")
        keys.press("m")
        assert keys.snapshot().toggle_mode is True

    def test_clear_forgets_everything(self):
        keys = KeyboardInput()
        keys.press("Up")
        keys.press("Tab")
        keys.clear()
        snap = keys.snapshot()
        assert snap.direction is None
        assert snap.toggle_mode is False

    def test_restart_fires_once_per_press(self):
        keys = KeyboardInput()
        keys.press("r")
        snap = keys.snapshot()
        assert snap.restart is True
        assert snap.toggle_mode is False
        keys.press("r")
        assert keys.snapshot().restart is False
        keys.release("r")
        keys.press("R")
        assert keys.snapshot().restart is True
