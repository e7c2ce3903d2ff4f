"""
Pydantic models for the puzzle layer.

This module contains the configuration models and the die/selection entities
used throughout the puzzle layer. The logic classes (DieRegistry, PuzzleSession)
live in their own modules.
"""

from typing import List, Optional, NamedTuple
from pydantic import BaseModel, Field, ConfigDict, model_validator


class Point(NamedTuple):
    """A continuous pixel coordinate."""
    x: float
    y: float


class Cell(NamedTuple):
    """A discrete grid address."""
    row: int
    col: int


class SnapResult(NamedTuple):
    """A pixel coordinate snapped to the canonical top-left of its cell."""
    x: float
    y: float
    row: int
    col: int


class GridConfig(BaseModel):
    """Geometry of the board and of the initial placement area."""
    cell_size: int = Field(default=60, gt=0)
    rows: int = Field(default=10, ge=1)
    cols: int = Field(default=13, ge=1)
    offset_x: int = 10
    offset_y: int = 10
    die_size: int = Field(default=60, gt=0)
    board_width: int = Field(default=800, gt=0)
    board_height: int = Field(default=600, gt=0)
    spawn_cols: int = Field(default=6, ge=1)
    spawn_rows: int = Field(default=4, ge=1)
    placement_attempts: int = Field(default=100, ge=1)
    fallback_width: int = Field(default=4, ge=1)

    @property
    def max_x(self) -> float:
        """Largest x a die may be dragged to."""
        return self.board_width - self.die_size

    @property
    def max_y(self) -> float:
        """Largest y a die may be dragged to."""
        return self.board_height - self.die_size

    @property
    def half_die(self) -> float:
        return self.die_size / 2


class PuzzleConfig(BaseModel):
    """Configuration for a puzzle session."""
    model_config = ConfigDict(extra='forbid')

    grid: GridConfig = Field(default_factory=GridConfig)
    seed: Optional[int] = None
    dictionary_path: Optional[str] = None
    new_word_window_ms: float = Field(default=3000, gt=0)
    min_word_length: int = Field(default=3, ge=3, le=12)
    max_word_length: int = Field(default=12, ge=3, le=12)

    @model_validator(mode='after')
    def _check_word_lengths(self) -> "PuzzleConfig":
        if self.min_word_length > self.max_word_length:
            raise ValueError(
                f"min_word_length ({self.min_word_length}) exceeds "
                f"max_word_length ({self.max_word_length})"
            )
        return self


class Die(BaseModel):
    """
    A single letter die.

    Attributes:
        id: Stable identifier (1-based)
        letters: The six face letters, fixed for the session
        current_letter: The face currently showing
        position: Free pixel position, moves continuously while dragging
        grid_position: Snapped cell, authoritative for word scanning
        is_dragging: Whether the die is currently being dragged
        is_selected: Whether the die is part of the current selection
    """
    id: int = Field(..., ge=1)
    letters: List[str] = Field(..., min_length=6, max_length=6)
    current_letter: str = Field(..., pattern=r'^[A-Z]$')
    position: Point = Point(0, 0)
    grid_position: Cell = Cell(0, 0)
    is_dragging: bool = False
    is_selected: bool = False

    @model_validator(mode='after')
    def _check_face(self) -> "Die":
        if self.current_letter not in self.letters:
            raise ValueError(
                f"Die {self.id} shows '{self.current_letter}' which is not one of its faces {self.letters}"
            )
        return self


class SelectionBox(BaseModel):
    """A rubber-band rectangle used to select several dice at once."""
    start_x: float = 0
    start_y: float = 0
    end_x: float = 0
    end_y: float = 0
    is_active: bool = False

    def contains(self, x: float, y: float) -> bool:
        """Check whether a point lies inside the box (edges inclusive)."""
        if not self.is_active:
            return False

        left = min(self.start_x, self.end_x)
        right = max(self.start_x, self.end_x)
        top = min(self.start_y, self.end_y)
        bottom = max(self.start_y, self.end_y)

        return left <= x <= right and top <= y <= bottom
