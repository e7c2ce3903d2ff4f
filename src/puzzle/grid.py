"""Grid snapping and initial placement utilities."""

import math
import random
from typing import List, Set

from .models import Cell, GridConfig, SnapResult


DEFAULT_GRID = GridConfig()


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def cell_to_pixels(cell: Cell, grid: GridConfig = DEFAULT_GRID) -> SnapResult:
    """Return the canonical top-left pixel of a cell."""
    return SnapResult(
        x=cell.col * grid.cell_size + grid.offset_x,
        y=cell.row * grid.cell_size + grid.offset_y,
        row=cell.row,
        col=cell.col,
    )


def snap_to_grid(x: float, y: float, grid: GridConfig = DEFAULT_GRID) -> SnapResult:
    """
    Snap a free pixel coordinate to the nearest grid cell.
    
    Coordinates outside the lattice are clamped to the border cells, so the
    result is always a valid cell. Snapping an already snapped coordinate
    returns it unchanged.
    
    Args:
        x: Pixel x coordinate
        y: Pixel y coordinate
        grid: Grid geometry
    
    Returns:
        SnapResult with the cell's pixel position and its (row, col)
    """
    col = _round_half_up((x - grid.offset_x) / grid.cell_size)
    row = _round_half_up((y - grid.offset_y) / grid.cell_size)
    
    cell = Cell(
        row=_clamp(row, 0, grid.rows - 1),
        col=_clamp(col, 0, grid.cols - 1),
    )
    return cell_to_pixels(cell, grid)


def fallback_placements(count: int, grid: GridConfig = DEFAULT_GRID) -> List[Cell]:
    """Deterministic row-major tiling used when random placement gives up."""
    width = grid.fallback_width
    return [Cell(row=i // width, col=i % width) for i in range(count)]


def generate_placements(
    count: int,
    rng: random.Random,
    grid: GridConfig = DEFAULT_GRID,
) -> List[Cell]:
    """
    Pick `count` distinct random cells in the upper-left spawn area.
    
    Each die gets up to `grid.placement_attempts` uniform draws; a draw that
    lands on an already used cell is rejected. If any die runs out of
    attempts the whole layout falls back to the deterministic tiling, which
    keeps the cells distinct and guarantees termination.
    
    Args:
        count: Number of cells to produce
        rng: Random source
        grid: Grid geometry
    
    Returns:
        List of `count` distinct cells
    
    Raises:
        ValueError: If the fallback tiling does not fit on the grid
    """
    rows_needed = math.ceil(count / grid.fallback_width)
    if grid.fallback_width > grid.cols or rows_needed > grid.rows:
        raise ValueError(
            f"Grid {grid.rows}x{grid.cols} cannot hold {count} dice "
            f"in a {grid.fallback_width}-wide fallback tiling"
        )
    
    max_col = min(grid.spawn_cols, grid.cols)
    max_row = min(grid.spawn_rows, grid.rows)
    
    placements: List[Cell] = []
    used: Set[Cell] = set()
    
    for _ in range(count):
        for _ in range(grid.placement_attempts):
            cell = Cell(row=rng.randrange(max_row), col=rng.randrange(max_col))
            if cell not in used:
                used.add(cell)
                placements.append(cell)
                break
        else:
            return fallback_placements(count, grid)
    
    return placements
