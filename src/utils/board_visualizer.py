from typing import Dict, Iterable, Tuple


def render_board(
    grid: Dict[Tuple[int, int], str],
    rows: int,
    cols: int,
    highlight: Iterable[Tuple[int, int]] = (),
) -> str:
    """
    Render the whole board to a string grid with row and column headers.
    
    Empty cells are shown as '.', letters in `highlight` cells are lowercased
    so they stand out from letters that are not part of any word.
    """
    highlight = set(highlight)
    
    header = "    " + "".join(f"{c:>3}" for c in range(cols))
    lines = [header]
    for row in range(rows):
        cells = []
        for col in range(cols):
            letter = grid.get((row, col))
            if letter is None:
                cells.append("  .")
            elif (row, col) in highlight:
                cells.append(f"  {letter.lower()}")
            else:
                cells.append(f"  {letter}")
        lines.append(f"{row:>3} " + "".join(cells))
    
    return '\n'.join(lines)


if __name__ == '__main__':
    example = {
        (0, 0): 'C', (0, 1): 'A', (0, 2): 'T',
        (1, 1): 'O',
        (3, 5): 'X',
    }
    print(render_board(example, rows=5, cols=8, highlight=[(0, 0), (0, 1), (0, 2)]))
