"""
Terminal front end for the Clueless word dice puzzle.

Usage:
    python -m src.main
    python -m src.main config.yaml --words words.txt --seed 7 --verbose
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from .puzzle import PuzzleConfig, PuzzleSession
from .utils.board_visualizer import render_board


HELP = """Commands:
  show                      -- print the board
  roll                      -- new puzzle (re-roll and scatter the dice)
  drag ID X Y               -- drag a die to pixel (X, Y) and drop it
  place ID ROW COL          -- drop a die into a grid cell
  select ID [ID ...]        -- add dice to the selection
  box X1 Y1 X2 Y2           -- select every die inside a rectangle
  move DX DY                -- move the selection by a pixel offset and snap it
  clear                     -- clear the selection
  words                     -- list words found so far
  export [PATH]             -- print the solved puzzle or write it to PATH
  help                      -- show this help
  quit                      -- leave"""


def load_config(config_path: str) -> PuzzleConfig:
    """Load puzzle configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return PuzzleConfig(**data)


def format_board(session: PuzzleSession) -> str:
    grid = session.config.grid
    highlight = session.last_scan.cells if session.last_scan else ()
    return render_board(session.registry.occupancy(), grid.rows, grid.cols, highlight)


def format_status(session: PuzzleSession) -> str:
    lines = []
    if session.last_scan and session.last_scan.words:
        lines.append("On the board: " + ", ".join(session.last_scan.words))
    for fw in session.found_words:
        lines.append(f"New word: {fw.word}")
    if session.puzzle.is_complete:
        lines.append("*** Puzzle solved! Type 'export' to share it. ***")
    return "\n".join(lines)


def _ints(args: List[str], count: int) -> Optional[List[int]]:
    if len(args) != count:
        return None
    try:
        return [int(a) for a in args]
    except ValueError:
        return None


def handle_command(session: PuzzleSession, line: str) -> Optional[str]:
    """
    Execute one command line against the session.

    Returns:
        Text to show the user, or None when the user asked to quit
    """
    parts = line.split()
    if not parts:
        return ""

    cmd, args = parts[0].lower(), parts[1:]

    if cmd in ("quit", "exit", "q"):
        return None

    if cmd == "help":
        return HELP

    if cmd == "show":
        return format_board(session)

    if cmd == "roll":
        session.roll()
        return format_board(session)

    if cmd == "words":
        if not session.discovered_words:
            return "No words found yet."
        return "Words found: " + ", ".join(session.discovered_words)

    if cmd == "clear":
        session.clear_selection()
        return "Selection cleared."

    if cmd == "drag":
        values = _ints(args, 3)
        if values is None:
            return "Usage: drag ID X Y"
        die_id, x, y = values
        if not session.drop_die(die_id, x, y):
            return f"No die with id {die_id}."
        return "\n".join(filter(None, [format_board(session), format_status(session)]))

    if cmd == "place":
        values = _ints(args, 3)
        if values is None:
            return "Usage: place ID ROW COL"
        die_id, row, col = values
        grid = session.config.grid
        x = col * grid.cell_size + grid.offset_x
        y = row * grid.cell_size + grid.offset_y
        if not session.drop_die(die_id, x, y):
            return f"No die with id {die_id}."
        return "\n".join(filter(None, [format_board(session), format_status(session)]))

    if cmd == "select":
        ids = _ints(args, len(args)) if args else None
        if ids is None:
            return "Usage: select ID [ID ...]"
        missing = [i for i in ids if not session.select_die(i)]
        if missing:
            return f"No die with id {', '.join(map(str, missing))}."
        return f"Selected: {', '.join(str(d.id) for d in session.registry.selected)}"

    if cmd == "box":
        values = _ints(args, 4)
        if values is None:
            return "Usage: box X1 Y1 X2 Y2"
        session.update_selection_box(*values, is_active=True)
        picked = session.registry.select_in_box()
        session.update_selection_box(*values, is_active=False)
        return f"Selected {len(picked)} dice."

    if cmd == "move":
        values = _ints(args, 2)
        if values is None:
            return "Usage: move DX DY"
        session.move_selected(*values)
        session.snap_selected_to_grid()
        return "\n".join(filter(None, [format_board(session), format_status(session)]))

    if cmd == "export":
        text = session.export_text()
        if not text:
            return "The puzzle is not solved yet."
        if args:
            path = Path(args[0])
            if not session.copy_puzzle(lambda t: path.write_text(t + "\n", encoding="utf-8")):
                return f"Could not write {path}."
            return f"Puzzle written to {path}"
        return text

    return f"Unknown command '{cmd}'. Type 'help' for a list of commands."


def main():
    parser = argparse.ArgumentParser(
        description="Play the Clueless word dice puzzle in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  seed: 42
  dictionary_path: words.txt
  new_word_window_ms: 3000
  grid:
    rows: 10
    cols: 13
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--words", "-w",
        help="Word list file, one word per line (overrides dictionary_path)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible rolls"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug output to stderr"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else PuzzleConfig()
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    overrides = {}
    if args.words:
        overrides["dictionary_path"] = args.words
    if args.seed is not None:
        overrides["seed"] = args.seed
    if overrides:
        config = config.model_copy(update=overrides)

    session = PuzzleSession.create(config=config)

    print("=" * 60)
    print("  CLUELESS -- the word dice game")
    print("=" * 60)
    print(f"Dictionary: {len(session.dictionary):,} words ({session.dictionary.source})")
    print(HELP)
    print()
    print(format_board(session))

    while True:
        try:
            line = input("clueless> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break

        output = handle_command(session, line)
        if output is None:
            break
        if output:
            print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
