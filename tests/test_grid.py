"""
Tests for grid snapping and initial placement.

Covers:
- Snapping to the nearest cell, clamping, and idempotence
- Random placement distinctness and spawn-area bounds
- The deterministic fallback under an always-colliding random source
"""

import random

import pytest
from src.puzzle import (
    Cell,
    GridConfig,
    snap_to_grid,
    cell_to_pixels,
    generate_placements,
    fallback_placements,
)


class StuckRandom(random.Random):
    """Random source that always draws the same cell."""

    def randrange(self, *args, **kwargs):
        return 0


class TestSnapToGrid:
    """Test cases for pixel to cell snapping."""

    def test_origin_cell(self):
        """The grid offset maps to cell (0, 0)."""
        assert snap_to_grid(10, 10) == (10, 10, 0, 0)

    def test_rounds_to_nearest_cell(self):
        """Coordinates snap to the closest cell."""
        snapped = snap_to_grid(10 + 60 * 3 + 20, 10 + 60 * 2 - 25)
        assert (snapped.row, snapped.col) == (2, 3)
        assert (snapped.x, snapped.y) == (190, 130)

    def test_half_cell_rounds_up(self):
        """Exactly half a cell rounds toward the next cell."""
        assert snap_to_grid(40, 10).col == 1
        assert snap_to_grid(39.9, 10).col == 0

    def test_clamps_below_zero(self):
        """Coordinates left of or above the grid land on the first row/column."""
        snapped = snap_to_grid(-500, -500)
        assert (snapped.row, snapped.col) == (0, 0)
        assert (snapped.x, snapped.y) == (10, 10)

    def test_clamps_beyond_grid(self):
        """Coordinates past the grid land on the last row/column."""
        snapped = snap_to_grid(5000, 5000)
        assert (snapped.row, snapped.col) == (9, 12)
        assert (snapped.x, snapped.y) == (12 * 60 + 10, 9 * 60 + 10)

    def test_idempotent(self):
        """Snapping a snapped coordinate returns the same coordinate."""
        for x in range(-100, 900, 7):
            for y in range(-100, 700, 11):
                first = snap_to_grid(x, y)
                assert snap_to_grid(first.x, first.y) == first

    def test_custom_grid(self):
        """Cell size and offsets come from the grid config."""
        grid = GridConfig(cell_size=40, offset_x=0, offset_y=5, rows=3, cols=3)
        assert snap_to_grid(85, 50, grid) == (80, 45, 1, 2)

    def test_cell_to_pixels(self):
        """Cells map back to their canonical top-left pixel."""
        assert cell_to_pixels(Cell(row=1, col=2)) == (130, 70, 1, 2)


class TestPlacements:
    """Test cases for the placement generator."""

    def test_twelve_distinct_cells(self):
        """Placements are distinct and inside the 6x4 spawn area."""
        for seed in range(200):
            cells = generate_placements(12, random.Random(seed))
            assert len(cells) == 12
            assert len(set(cells)) == 12
            for cell in cells:
                assert 0 <= cell.row < 4
                assert 0 <= cell.col < 6

    def test_seeded_is_reproducible(self):
        """The same seed gives the same layout."""
        assert generate_placements(12, random.Random(3)) == generate_placements(12, random.Random(3))

    def test_all_collisions_fall_back(self):
        """A random source that always collides yields the fallback tiling."""
        cells = generate_placements(12, StuckRandom())
        assert cells == fallback_placements(12)
        assert len(set(cells)) == 12

    def test_fallback_is_row_major(self):
        """Fallback tiling is four cells wide, row by row."""
        cells = fallback_placements(12)
        assert cells[0] == Cell(0, 0)
        assert cells[3] == Cell(0, 3)
        assert cells[4] == Cell(1, 0)
        assert cells[11] == Cell(2, 3)

    def test_spawn_area_too_small_falls_back(self):
        """A spawn area with fewer cells than dice falls back instead of looping."""
        grid = GridConfig(spawn_cols=2, spawn_rows=2)
        cells = generate_placements(12, random.Random(0), grid)
        assert cells == fallback_placements(12, grid)

    def test_spawn_area_clipped_to_grid(self):
        """Spawn area larger than the grid is clipped."""
        grid = GridConfig(rows=4, cols=5, spawn_cols=20, spawn_rows=20)
        for seed in range(20):
            for cell in generate_placements(12, random.Random(seed), grid):
                assert cell.row < 4
                assert cell.col < 5

    def test_grid_too_small_for_fallback(self):
        """A grid that cannot hold the fallback tiling is rejected."""
        with pytest.raises(ValueError):
            generate_placements(12, random.Random(0), GridConfig(rows=2, cols=13))
