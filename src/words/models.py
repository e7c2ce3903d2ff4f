"""Data models for word scanning, discovery, and completion."""

from typing import List, Set, Tuple
from pydantic import BaseModel, Field


class ScanResult(BaseModel):
    """Words accepted by one scan of the grid."""
    words: List[str] = Field(default_factory=list)  # Row words first, then column words
    cells: Set[Tuple[int, int]] = Field(default_factory=set)  # Cells belonging to any accepted run


class FoundWord(BaseModel):
    """A word surfaced for the first time this session."""
    word: str = Field(..., pattern=r'^[A-Z]{3,12}$')
    discovered_at: float  # milliseconds since the epoch
    is_new: bool = True


class PuzzleState(BaseModel):
    """Outcome of the latest scan, plus the last winning snapshot."""
    is_complete: bool = False
    all_words: List[str] = Field(default_factory=list)
    completed_at: float = 0
