# Tensor rasterizer: grid state -> packed 0xRRGGBB pixel buffer, on GPU when one is available.
from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import torch

try:
    from .game_logic import SnakeConfig, SnakeGame
    from .geometry import Position
except ImportError:
    from game_logic import SnakeConfig, SnakeGame
    from geometry import Position


BACKGROUND = (0.0, 0.4, 0.0)
APPLE = (0.9, 0.0, 0.0)
SNAKE_HUMAN = (0.0, 0.0, 0.0)
SNAKE_AGENT = (0.1, 0.35, 0.9)


def pick_device() -> torch.device:
    if torch.cuda.is_available():
        return torch.device("cuda")
    if hasattr(torch.backends, "mps") and torch.backends.mps.is_available():
        return torch.device("mps")
    return torch.device("cpu")


class FrameRenderer:
    """Draws the board into a flat uint32 buffer of screen_width * screen_height pixels."""

    def __init__(self, config: SnakeConfig, device: torch.device | None = None) -> None:
        self.config = config
        self.device = device if device is not None else pick_device()
        self.background = torch.tensor(BACKGROUND, dtype=torch.float32, device=self.device)
        self.apple_color = torch.tensor(APPLE, dtype=torch.float32, device=self.device)
        self.snake_colors = {
            "human": torch.tensor(SNAKE_HUMAN, dtype=torch.float32, device=self.device),
            "agent": torch.tensor(SNAKE_AGENT, dtype=torch.float32, device=self.device),
        }

    def render(
        self,
        snake_data: Sequence[int],
        snake_length: int,
        apple: Position | None,
        mode: str = "human",
    ) -> np.ndarray:
        cfg = self.config
        grid_w, grid_h, cell = cfg.grid_width, cfg.grid_height, cfg.cell_size

        # Colour per grid cell first, then blow each cell up to cell x cell pixels.
        cells = self.background.expand(grid_h, grid_w, 3).clone()

        if snake_length > 0:
            coords = torch.as_tensor(
                list(snake_data[: snake_length * 2]), dtype=torch.long, device=self.device
            ).view(-1, 2)
            cells[coords[:, 1], coords[:, 0]] = self.snake_colors[mode]

        # Apple is painted last so it stays visible on a shared cell.
        if apple is not None:
            cells[apple[1], apple[0]] = self.apple_color

        pixels = cells.repeat_interleave(cell, dim=0).repeat_interleave(cell, dim=1)
        pixels = pixels[: cfg.screen_height, : cfg.screen_width]

        channels = (pixels.clamp(0.0, 1.0) * 255.0).to(torch.int32)
        packed = (channels[..., 0] << 16) | (channels[..., 1] << 8) | channels[..., 2]
        return packed.reshape(-1).cpu().numpy().astype(np.uint32)

    def render_game(self, game: SnakeGame) -> np.ndarray:
        return self.render(game.snake.serialize(), len(game.snake), game.apple, game.mode)


def to_rgb_bytes(pixels: np.ndarray) -> bytes:
    """Unpack a 0xRRGGBB buffer into interleaved RGB bytes (PPM payload order)."""
    packed = pixels.astype(np.uint32)
    rgb = np.stack(
        [(packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF],
        axis=-1,
    ).astype(np.uint8)
    return rgb.tobytes()


def to_ppm(pixels: np.ndarray, width: int, height: int) -> bytes:
    header = f"P6 {width} {height} 255\n".encode("ascii")
    return header + to_rgb_bytes(pixels)
