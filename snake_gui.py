# Tkinter front end: keyboard in, rasterized frame out, at most one decision and one tick per frame.
from __future__ import annotations

import argparse
import tkinter as tk

import torch

# Support both package imports and running this file directly.
try:
    from .frame_loop import GameSession
    from .game_logic import (
        MAX_CELL_SIZE,
        MAX_GRID_SIZE,
        MAX_TICK_MS,
        MIN_CELL_SIZE,
        MIN_GRID_SIZE,
        MIN_TICK_MS,
        TARGET_FPS,
        SnakeConfig,
    )
    from .geometry import move_by
    from .input_state import KeyboardInput
    from .renderer import FrameRenderer, to_ppm
except ImportError:
    from frame_loop import GameSession
    from game_logic import (
        MAX_CELL_SIZE,
        MAX_GRID_SIZE,
        MAX_TICK_MS,
        MIN_CELL_SIZE,
        MIN_GRID_SIZE,
        MIN_TICK_MS,
        TARGET_FPS,
        SnakeConfig,
    )
    from geometry import move_by
    from input_state import KeyboardInput
    from renderer import FrameRenderer, to_ppm


BANNER = """\
+----------------------------------------+
|        SNAKE - A* Agent Edition        |
+----------------------------------------+
|  Arrow Keys / WASD : Move              |
|  M / Tab           : Human <-> Agent   |
|  R                 : Restart           |
|  ESC               : Quit              |
+----------------------------------------+"""


class SnakeApp:
    """Tkinter presentation layer for SnakeGame."""
    BG = "#101418"
    SIDEBAR_BG = "#0f1720"
    TEXT_PRIMARY = "#e6eef7"
    TEXT_MUTED = "#95a4b8"
    PATH_COLOR = "#ffd54f"

    def __init__(self, root: tk.Tk, config: SnakeConfig, device: torch.device | None = None) -> None:
        self.root = root
        self.root.title("Snake - A* Agent")
        self.root.configure(bg=self.BG)
        self.root.resizable(False, False)

        self.config = config
        self.session = GameSession(config)
        self.game = self.session.game
        self.agent = self.session.agent
        self.keyboard = KeyboardInput()
        self.renderer = FrameRenderer(config, device=device)
        self.frame_ms = max(1, 1000 // TARGET_FPS)
        self.after_id: str | None = None  # Tkinter timer id for the frame loop
        self.photo: tk.PhotoImage | None = None

        self._build_layout()
        self._bind_keys()
        self.root.protocol("WM_DELETE_WINDOW", self.quit)

        print(BANNER)
        print(f"\nScore: {self.game.score}")
        self.frame()

    def _build_layout(self) -> None:
        """Board canvas on the left, status sidebar on the right."""
        container = tk.Frame(self.root, bg=self.BG)
        container.pack(padx=12, pady=12)

        self.canvas = tk.Canvas(
            container,
            width=self.config.screen_width,
            height=self.config.screen_height,
            bg=self.BG,
            highlightthickness=0,
            bd=0,
        )
        self.canvas.grid(row=0, column=0, sticky="nsew", padx=(0, 12))
        self.image_id = self.canvas.create_image(0, 0, anchor="nw")

        sidebar = tk.Frame(container, bg=self.SIDEBAR_BG, width=220)
        sidebar.grid(row=0, column=1, sticky="ns")

        self.score_var = tk.StringVar()
        self.mode_var = tk.StringVar()
        self.state_var = tk.StringVar()
        for var in (self.score_var, self.mode_var, self.state_var):
            tk.Label(
                sidebar,
                textvariable=var,
                fg=self.TEXT_PRIMARY,
                bg=self.SIDEBAR_BG,
                font=("Helvetica", 12),
                anchor="w",
                width=20,
            ).pack(fill="x", padx=10, pady=4)

        tk.Label(
            sidebar,
            text="Move: Arrow keys / WASD\nToggle mode: M (restarts)\nRestart: R\nQuit: Esc",
            fg=self.TEXT_MUTED,
            bg=self.SIDEBAR_BG,
            justify="left",
            font=("Helvetica", 10),
        ).pack(anchor="w", padx=10, pady=(12, 10))

    def _bind_keys(self) -> None:
        self.root.bind("<KeyPress>", lambda e: self.keyboard.press(e.keysym))
        self.root.bind("<KeyRelease>", lambda e: self.keyboard.release(e.keysym))
        # Releases are lost while unfocused, so forget held keys.
        self.root.bind("<FocusOut>", lambda _e: self.keyboard.clear())

    def frame(self) -> None:
        """
        Input, quit check, session step, render; reschedules itself.

        The agent decides only on frames where a tick is due, right before
        that tick, so most frames just redraw.
        """
        self.after_id = None
        snapshot = self.keyboard.snapshot()
        if snapshot.quit:
            self.quit()
            return

        self.session.step(snapshot)
        self.draw()
        self.after_id = self.root.after(self.frame_ms, self.frame)

    def draw(self) -> None:
        pixels = self.renderer.render_game(self.game)
        ppm = to_ppm(pixels, self.config.screen_width, self.config.screen_height)
        # Keep a reference or Tk drops the image.
        self.photo = tk.PhotoImage(data=ppm, format="PPM")
        self.canvas.itemconfigure(self.image_id, image=self.photo)

        self.canvas.delete("overlay")
        if self.game.mode == "agent" and not self.game.game_over:
            self._draw_path_overlay()

        self.score_var.set(f"Score: {self.game.score}")
        self.mode_var.set(f"Mode: {self.game.mode.capitalize()}")
        if self.game.game_over:
            self.state_var.set("State: Game Over (R to restart)")
        else:
            self.state_var.set("State: Running")

    def _draw_path_overlay(self) -> None:
        """Small dots along the agent's planned route to the apple."""
        cfg = self.config
        cell = cfg.cell_size
        pos = self.game.snake.head()
        # The first step of the plan has already been taken by the tick.
        for direction in self.agent.last_path[1:]:
            pos = move_by(pos, direction, cfg.grid_width, cfg.grid_height)
            cx, cy = pos[0] * cell + cell // 2, pos[1] * cell + cell // 2
            r = max(2, cell // 6)
            self.canvas.create_oval(cx - r, cy - r, cx + r, cy + r, fill=self.PATH_COLOR, outline="", tags="overlay")

    def quit(self) -> None:
        if self.after_id is not None:
            self.root.after_cancel(self.after_id)
            self.after_id = None
        print(f"\nThanks for playing! Final Score: {self.game.score}")
        self.root.destroy()


def build_parser() -> argparse.ArgumentParser:
    defaults = SnakeConfig()
    parser = argparse.ArgumentParser(description="Snake on a wrap-around grid with an A* autopilot")
    parser.add_argument("--width", type=int, default=defaults.grid_width, help=f"Grid cells across ({MIN_GRID_SIZE}-{MAX_GRID_SIZE})")
    parser.add_argument("--height", type=int, default=defaults.grid_height, help=f"Grid cells down ({MIN_GRID_SIZE}-{MAX_GRID_SIZE})")
    parser.add_argument("--cell-size", type=int, default=defaults.cell_size, help=f"Pixels per cell ({MIN_CELL_SIZE}-{MAX_CELL_SIZE})")
    parser.add_argument("--tick-ms", type=int, default=defaults.tick_ms, help=f"Simulation interval ({MIN_TICK_MS}-{MAX_TICK_MS})")
    parser.add_argument("--agent", action="store_true", help="Start with the A* agent in control")
    parser.add_argument("--device", default=None, help="Torch device for rendering (default: auto)")
    return parser


def run_player_gui(config: SnakeConfig | None = None, device: torch.device | None = None) -> None:
    """Launch the Snake window."""
    root = tk.Tk()
    SnakeApp(root, config or SnakeConfig(), device=device)
    root.mainloop()


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    config = SnakeConfig(
        grid_width=args.width,
        grid_height=args.height,
        cell_size=args.cell_size,
        tick_ms=args.tick_ms,
        mode="agent" if args.agent else "human",
    )
    try:
        config.validate()
    except ValueError as exc:
        parser.error(str(exc))
    device = torch.device(args.device) if args.device else None
    run_player_gui(config, device=device)


if __name__ == "__main__":
    main()
