"""Dice, grid, and session control for the Clueless word dice puzzle."""

from .models import (
    Point,
    Cell,
    SnapResult,
    GridConfig,
    PuzzleConfig,
    Die,
    SelectionBox,
)
from .grid import snap_to_grid, cell_to_pixels, generate_placements, fallback_placements
from .registry import DieRegistry, DICE_FACES, DICE_COUNT
from .session import PuzzleSession

__all__ = [
    "Point",
    "Cell",
    "SnapResult",
    "GridConfig",
    "PuzzleConfig",
    "Die",
    "SelectionBox",
    "snap_to_grid",
    "cell_to_pixels",
    "generate_placements",
    "fallback_placements",
    "DieRegistry",
    "DICE_FACES",
    "DICE_COUNT",
    "PuzzleSession",
]
