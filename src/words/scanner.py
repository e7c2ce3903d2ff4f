"""Extraction of horizontal and vertical words from the grid."""

from typing import Callable, Dict, Iterable, List, Tuple

from .models import ScanResult


Occupancy = Dict[Tuple[int, int], str]


def iter_runs(
    occupancy: Occupancy,
    rows: int,
    cols: int,
) -> Iterable[Tuple[str, List[Tuple[int, int]]]]:
    """
    Yield every maximal run of occupied cells.
    
    Rows are walked left to right first, then columns top to bottom. An empty
    cell or the edge of the grid closes a run.
    
    Yields:
        (letters, cells) for each run, single letters included
    """
    lines = [[(row, col) for col in range(cols)] for row in range(rows)]
    lines += [[(row, col) for row in range(rows)] for col in range(cols)]
    
    for line in lines:
        letters = ""
        cells: List[Tuple[int, int]] = []
        for cell in line:
            if cell in occupancy:
                letters += occupancy[cell]
                cells.append(cell)
            elif letters:
                yield letters, cells
                letters = ""
                cells = []
        if letters:
            yield letters, cells


def scan_words(
    occupancy: Occupancy,
    is_word: Callable[[str], bool],
    rows: int,
    cols: int,
    min_length: int = 3,
    max_length: int = 12,
) -> ScanResult:
    """
    Find every dictionary word formed on the grid.
    
    A run needs between `min_length` and `max_length` letters to be looked
    up; the lookup gets the lowercase form and accepted words are stored
    uppercase. A word that reads both across and down is listed once per
    orientation.
    
    Args:
        occupancy: Mapping of (row, col) to letter
        is_word: Dictionary membership check
        rows: Number of grid rows
        cols: Number of grid columns
        min_length: Shortest run that can count as a word
        max_length: Longest run that can count as a word
    
    Returns:
        ScanResult with the accepted words and the cells they cover
    """
    result = ScanResult()
    
    for letters, cells in iter_runs(occupancy, rows, cols):
        if not min_length <= len(letters) <= max_length:
            continue
        if not is_word(letters.lower()):
            continue
        result.words.append(letters.upper())
        result.cells.update(cells)
    
    return result
