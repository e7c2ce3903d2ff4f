"""Word detection, discovery tracking, and completion for the dice puzzle."""

from .models import ScanResult, FoundWord, PuzzleState
from .dictionary import WordList, FALLBACK_WORDS, normalize_words
from .scanner import scan_words, iter_runs
from .discovery import DiscoveryTracker
from .completion import judge, is_solved
from .export import export_puzzle, render_solution, grid_bounds

__all__ = [
    # Models
    "ScanResult",
    "FoundWord",
    "PuzzleState",
    # Dictionary
    "WordList",
    "FALLBACK_WORDS",
    "normalize_words",
    # Scanning
    "scan_words",
    "iter_runs",
    # Session tracking
    "DiscoveryTracker",
    "judge",
    "is_solved",
    # Export
    "export_puzzle",
    "render_solution",
    "grid_bounds",
]
