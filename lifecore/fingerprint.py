"""Compact, exact state keys for cycle detection.

Cells are packed one bit each in row-major order, most significant bit
first, with the last byte zero-padded, and the bytes are base64 encoded.
For a fixed board size the mapping is injective, so equal keys mean equal
boards. Keys from boards of different sizes may coincide; they are only
meant to be compared within a single run.
"""

import base64

import numpy as np

from .grid import Grid

EMPTY_FINGERPRINT = ""


def fingerprint_bytes(grid: Grid) -> bytes:
    """Bit-packed cell buffer (MSB-first, row-major)."""
    if grid.is_empty:
        return b""
    return np.packbits(grid.cells.ravel(), bitorder="big").tobytes()


def fingerprint(grid: Grid) -> str:
    """Deterministic printable key for a grid's cell contents."""
    if grid.is_empty:
        return EMPTY_FINGERPRINT
    return base64.b64encode(fingerprint_bytes(grid)).decode("ascii")
