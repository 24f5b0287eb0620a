"""Render grids to PNG snapshots and animated GIFs."""

import numpy as np
from pathlib import Path
from typing import Iterable, Union
from PIL import Image

from .grid import Grid

DEAD_COLOR = 30
LIVE_COLOR = 255


def render_grid(grid: Grid, cell_size: int = 4) -> np.ndarray:
    """Render a grid as an RGB image array, ``cell_size`` pixels per cell."""
    if cell_size <= 0:
        raise ValueError("cell_size must be positive")
    h, w = grid.shape

    # Create base image with dead cell color
    img = np.full((h * cell_size, w * cell_size, 3), DEAD_COLOR, dtype=np.uint8)

    # Upscale grid using repeat
    upscaled = np.repeat(np.repeat(grid.cells, cell_size, axis=0), cell_size, axis=1)

    # Set live cells to white
    img[upscaled] = LIVE_COLOR

    return img


def save_image(grid: Grid, filepath: Union[str, Path], cell_size: int = 4):
    """Save grid state as PNG image."""
    if grid.is_empty:
        raise ValueError("Cannot render an empty grid")
    img = Image.fromarray(render_grid(grid, cell_size))
    img.save(filepath)


def save_animation(
    history: Iterable[Grid],
    filepath: Union[str, Path],
    cell_size: int = 4,
    duration: int = 100,
    loop: int = 0,
) -> int:
    """Save a run as an animated GIF. Returns the number of frames written."""
    frames = [Image.fromarray(render_grid(grid, cell_size)) for grid in history]

    if frames:
        frames[0].save(
            filepath,
            save_all=True,
            append_images=frames[1:],
            duration=duration,
            loop=loop,
        )
    return len(frames)
