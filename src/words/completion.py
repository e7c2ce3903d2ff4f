"""Decides whether the current arrangement solves the puzzle."""

from typing import Sequence, Tuple

from .models import PuzzleState, ScanResult


def is_solved(scan: ScanResult, die_cells: Sequence[Tuple[int, int]]) -> bool:
    """
    Check that every die sits in at least one accepted word.

    Two dice stacked on one cell count as a single covered cell, so such an
    arrangement never solves the puzzle.
    """
    if not scan.words or not die_cells:
        return False
    if len(scan.cells) != len(die_cells):
        return False
    return all(cell in scan.cells for cell in die_cells)


def judge(
    state: PuzzleState,
    scan: ScanResult,
    die_cells: Sequence[Tuple[int, int]],
    now: float,
) -> PuzzleState:
    """
    Compute the puzzle state after a scan.

    A winning scan replaces the snapshot. A losing scan only clears
    `is_complete`; the previous winning words and time are kept.

    Args:
        state: Puzzle state before the scan
        scan: Result of the scan
        die_cells: Grid cell of every die
        now: Current time in milliseconds

    Returns:
        The new PuzzleState
    """
    if is_solved(scan, die_cells):
        return PuzzleState(
            is_complete=True,
            all_words=list(scan.words),
            completed_at=now,
        )
    return state.model_copy(update={"is_complete": False})
