"""Text rendering of a solved puzzle for sharing."""

from typing import Dict, List, Optional, Tuple

from .models import PuzzleState


HEADER = "🎲 Clueless Puzzle Solution 🎲"
FOOTER = "Solved in Clueless - the word dice game!"


def grid_bounds(grid: Dict[Tuple[int, int], str]) -> Optional[Tuple[int, int, int, int]]:
    """Return (min_row, max_row, min_col, max_col) of the occupied cells, or None if empty."""
    if not grid:
        return None
    
    min_row = min(pos[0] for pos in grid)
    max_row = max(pos[0] for pos in grid)
    min_col = min(pos[1] for pos in grid)
    max_col = max(pos[1] for pos in grid)
    
    return min_row, max_row, min_col, max_col


def render_solution(grid: Dict[Tuple[int, int], str]) -> List[str]:
    """Render the occupied bounding box, three characters per cell, right-trimmed."""
    bounds = grid_bounds(grid)
    if bounds is None:
        return []
    
    min_row, max_row, min_col, max_col = bounds
    lines = []
    for row in range(min_row, max_row + 1):
        line = ''.join(
            f" {grid[(row, col)]} " if (row, col) in grid else "   "
            for col in range(min_col, max_col + 1)
        )
        lines.append(line.rstrip())
    return lines


def export_puzzle(state: PuzzleState, grid: Dict[Tuple[int, int], str]) -> str:
    """
    Build the shareable text for a solved puzzle.
    
    Returns an empty string unless the puzzle is complete.
    
    Args:
        state: Current puzzle state; its `all_words` are listed
        grid: Mapping of (row, col) to letter
    
    Returns:
        The text, or "" when the puzzle is not solved
    """
    if not state.is_complete:
        return ""
    
    text = HEADER + "\n\n"
    for line in render_solution(grid):
        text += line + "\n"
    text += "\nWords found: " + ", ".join(state.all_words)
    text += "\n\n" + FOOTER
    return text
