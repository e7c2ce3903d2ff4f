import logging
import random
import time
from typing import Any, Callable, Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict

from .models import PuzzleConfig
from .registry import DieRegistry
from ..words import (
    DiscoveryTracker,
    FoundWord,
    PuzzleState,
    ScanResult,
    WordList,
    export_puzzle,
    judge,
    scan_words,
)


logger = logging.getLogger(__name__)


def now_ms() -> float:
    """Wall-clock time in milliseconds."""
    return time.time() * 1000


class PuzzleSession(BaseModel):
    """
    Top-level controller for one puzzle session.
    
    Routes input events to the die registry and, whenever dice settle on the
    grid, rescans for words, updates discoveries, and judges completion.
    All session state lives here; `roll()` is the single reset entry point.
    
    Attributes:
        config: Session configuration
        dictionary: Word list used to accept runs
        registry: The dice
        tracker: Discovered words
        puzzle: Latest completion state
        last_scan: Result of the most recent scan
        clock: Returns the current time in milliseconds
    """
    
    model_config = ConfigDict(arbitrary_types_allowed=True)
    
    config: PuzzleConfig = Field(default_factory=PuzzleConfig)
    dictionary: WordList = Field(default_factory=WordList.fallback)
    registry: DieRegistry = Field(default_factory=DieRegistry.create)
    tracker: DiscoveryTracker = Field(default_factory=DiscoveryTracker)
    puzzle: PuzzleState = Field(default_factory=PuzzleState)
    last_scan: Optional[ScanResult] = None
    clock: Callable[[], float] = now_ms
    
    @classmethod
    def create(
        cls,
        config: Optional[PuzzleConfig] = None,
        dictionary: Optional[WordList] = None,
        clock: Callable[[], float] = now_ms,
        rng: Optional[random.Random] = None,
        **config_kwargs: Any
    ) -> "PuzzleSession":
        """
        Factory method to create a session with rolled dice and a loaded dictionary.
        
        Args:
            config: Optional PuzzleConfig instance
            dictionary: Word list to use instead of loading `config.dictionary_path`
            clock: Millisecond clock
            rng: Optional random source for the dice
            **config_kwargs: Config parameters if config not provided
        
        Returns:
            A ready PuzzleSession
        """
        if config is None:
            config = PuzzleConfig(**config_kwargs)
        
        if dictionary is None:
            dictionary = WordList.load(
                config.dictionary_path,
                min_length=config.min_word_length,
                max_length=config.max_word_length,
            )
        
        registry = DieRegistry.create(grid=config.grid, seed=config.seed, rng=rng)
        tracker = DiscoveryTracker(window_ms=config.new_word_window_ms)
        
        return cls(
            config=config,
            dictionary=dictionary,
            registry=registry,
            tracker=tracker,
            clock=clock,
        )
    
    @property
    def found_words(self) -> List[FoundWord]:
        """Recent discoveries still inside the highlight window."""
        return self.tracker.found_words
    
    @property
    def discovered_words(self) -> List[str]:
        return sorted(self.tracker.discovered)
    
    def roll(self) -> None:
        """Start a new puzzle: re-roll the dice and forget every discovery."""
        self.registry.roll()
        self.tracker.reset()
        self.puzzle = PuzzleState()
        self.last_scan = None
    
    reset = roll
    
    def update_die_position(self, die_id: int, x: float, y: float, snap: bool = False) -> bool:
        return self.registry.update_position(die_id, x, y, snap)
    
    def set_dragging(self, die_id: int, is_dragging: bool) -> bool:
        """Start or end a drag; ending it snaps the die and rescans the grid."""
        snapped = self.registry.set_dragging(die_id, is_dragging)
        if snapped:
            self.check_for_words()
        return snapped
    
    def set_dragged_die(self, die_id: Optional[int]) -> None:
        self.registry.set_dragged_die(die_id)
    
    def drop_die(self, die_id: int, x: float, y: float) -> bool:
        """Drag a die to (x, y) and release it there."""
        if self.registry.get(die_id) is None:
            return False
        self.set_dragged_die(die_id)
        self.set_dragging(die_id, True)
        self.update_die_position(die_id, x, y)
        self.set_dragging(die_id, False)
        self.set_dragged_die(None)
        return True
    
    def select_die(self, die_id: int) -> bool:
        return self.registry.select(die_id)
    
    def deselect_die(self, die_id: int) -> bool:
        return self.registry.deselect(die_id)
    
    def clear_selection(self) -> None:
        self.registry.clear_selection()
    
    def update_selection_box(
        self,
        start_x: float,
        start_y: float,
        end_x: float,
        end_y: float,
        is_active: bool,
    ) -> None:
        self.registry.update_selection_box(start_x, start_y, end_x, end_y, is_active)
    
    def move_selected(self, dx: float, dy: float) -> None:
        self.registry.move_selected(dx, dy)
    
    def snap_selected_to_grid(self) -> None:
        self.registry.snap_selected_to_grid()
        self.check_for_words()
    
    def check_for_words(self) -> ScanResult:
        """
        Rescan the grid and update discoveries and completion.
        
        Until the dictionary has been loaded, runs are checked against the
        embedded fallback words.
        
        Returns:
            The ScanResult
        """
        dictionary = self.dictionary
        if not dictionary.loaded:
            logger.debug("Dictionary not loaded, scanning with fallback words")
            dictionary = WordList.fallback()
        
        grid = self.config.grid
        scan = scan_words(
            self.registry.occupancy(),
            dictionary.contains,
            rows=grid.rows,
            cols=grid.cols,
            min_length=self.config.min_word_length,
            max_length=self.config.max_word_length,
        )
        now = self.clock()
        
        self.tracker.update(scan.words, now)
        
        was_complete = self.puzzle.is_complete
        self.puzzle = judge(self.puzzle, scan, self.registry.occupied_cells(), now)
        if self.puzzle.is_complete and not was_complete:
            logger.info("Puzzle solved with words: %s", ", ".join(self.puzzle.all_words))
        
        self.last_scan = scan
        return scan
    
    def export_text(self) -> str:
        """Shareable text of the solved puzzle, or "" if it is not solved."""
        return export_puzzle(self.puzzle, self.registry.occupancy())
    
    def copy_puzzle(self, sink: Callable[[str], Any]) -> bool:
        """
        Hand the exported puzzle text to a clipboard-like sink.
        
        Returns:
            True if there was text to copy and the sink accepted it
        """
        text = self.export_text()
        if not text:
            return False
        try:
            sink(text)
        except Exception as e:
            logger.warning("Failed to copy puzzle: %s", e)
            return False
        return True
    
    def get_state(self) -> Dict:
        """
        Get the current session state as a dictionary.
        
        Useful for display and logging.
        """
        return {
            "dice": [
                {
                    "id": die.id,
                    "letter": die.current_letter,
                    "row": die.grid_position.row,
                    "col": die.grid_position.col,
                    "is_selected": die.is_selected,
                }
                for die in self.registry.dice
            ],
            "dictionary_source": self.dictionary.source,
            "dictionary_size": len(self.dictionary),
            "words": list(self.last_scan.words) if self.last_scan else [],
            "discovered_words": self.discovered_words,
            "found_words": [fw.word for fw in self.found_words],
            "is_complete": self.puzzle.is_complete,
            "all_words": list(self.puzzle.all_words),
            "completed_at": self.puzzle.completed_at,
        }
