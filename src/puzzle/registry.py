import logging
import random
from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel, Field, ConfigDict

from .grid import generate_placements, cell_to_pixels, snap_to_grid
from .models import Cell, Die, GridConfig, Point, SelectionBox


logger = logging.getLogger(__name__)


# Face letters of the twelve dice, indexed by die id
DICE_FACES: Dict[int, List[str]] = {
    1: ["C", "J", "T", "D", "B", "C"],
    2: ["K", "G", "P", "P", "F", "V"],
    3: ["R", "W", "L", "W", "F", "D"],
    4: ["R", "G", "R", "G", "L", "D"],
    5: ["C", "M", "C", "T", "T", "S"],
    6: ["W", "H", "P", "T", "T", "H"],
    7: ["E", "O", "U", "A", "I", "U"],
    8: ["R", "N", "N", "R", "H", "H"],
    9: ["N", "I", "I", "N", "O", "Y"],
    10: ["A", "A", "E", "E", "O", "O"],
    11: ["B", "Z", "K", "X", "S", "N"],
    12: ["L", "L", "M", "M", "Y", "B"],
}

DICE_COUNT = len(DICE_FACES)


class DieRegistry(BaseModel):
    """
    Owns the twelve dice and every mutation of their state.
    
    Handles rolling, free and snapped movement, drag flags, and the
    selection set. Operations given an unknown die id are no-ops that
    return False.
    
    Attributes:
        dice: The dice, ordered by id
        grid: Grid geometry used for snapping and placement
        seed: Optional random seed for reproducible rolls
        selected_ids: Ids of selected dice, in selection order
        selection_box: Current rubber-band selection rectangle
        dragged_id: Id of the die being dragged, if any
    """
    
    model_config = ConfigDict(arbitrary_types_allowed=True)
    
    dice: List[Die] = Field(default_factory=list)
    grid: GridConfig = Field(default_factory=GridConfig)
    seed: Optional[int] = None
    selected_ids: List[int] = Field(default_factory=list)
    selection_box: SelectionBox = Field(default_factory=SelectionBox)
    dragged_id: Optional[int] = None
    _rng: random.Random = None
    
    def model_post_init(self, __context) -> None:
        """Initialize the random generator after model creation."""
        if self._rng is None:
            self._rng = random.Random(self.seed)
    
    @classmethod
    def create(
        cls,
        grid: Optional[GridConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> "DieRegistry":
        """
        Factory method to create a registry with freshly rolled dice.
        
        Args:
            grid: Grid geometry (defaults to the standard 10x13 board)
            seed: Optional random seed for reproducibility
            rng: Optional random source, overrides `seed`
        
        Returns:
            A DieRegistry with all twelve dice placed
        """
        registry = cls(grid=grid or GridConfig(), seed=seed)
        if rng is not None:
            registry._rng = rng
        registry.initialize()
        return registry
    
    def initialize(self) -> None:
        """Build the dice from the face table with random letters and placements."""
        placements = generate_placements(DICE_COUNT, self._rng, self.grid)
        self.dice = []
        for (die_id, letters), cell in zip(DICE_FACES.items(), placements):
            snapped = cell_to_pixels(cell, self.grid)
            self.dice.append(Die(
                id=die_id,
                letters=list(letters),
                current_letter=self._rng.choice(letters),
                position=Point(snapped.x, snapped.y),
                grid_position=cell,
            ))
        self.selected_ids = []
        self.dragged_id = None
    
    def roll(self) -> None:
        """Re-roll every die's letter and scatter the dice over the spawn area."""
        placements = generate_placements(len(self.dice), self._rng, self.grid)
        for die, cell in zip(self.dice, placements):
            snapped = cell_to_pixels(cell, self.grid)
            die.current_letter = self._rng.choice(die.letters)
            die.position = Point(snapped.x, snapped.y)
            die.grid_position = cell
            die.is_selected = False
            die.is_dragging = False
        self.selected_ids = []
        self.dragged_id = None
        logger.debug("Rolled dice: %s", "".join(d.current_letter for d in self.dice))
    
    def get(self, die_id: int) -> Optional[Die]:
        """Look up a die by id, or None if there is no such die."""
        for die in self.dice:
            if die.id == die_id:
                return die
        logger.debug("Ignoring unknown die id %r", die_id)
        return None
    
    @property
    def selected(self) -> List[Die]:
        """Selected dice, in the order they were selected."""
        return [die for die_id in self.selected_ids for die in self.dice if die.id == die_id]
    
    def _snap(self, die: Die) -> None:
        snapped = snap_to_grid(die.position.x, die.position.y, self.grid)
        die.position = Point(snapped.x, snapped.y)
        die.grid_position = Cell(snapped.row, snapped.col)
    
    def update_position(self, die_id: int, x: float, y: float, snap: bool = False) -> bool:
        """
        Move a die to a pixel position.
        
        The grid cell only changes when `snap` is set; free moves during a
        drag leave it untouched.
        
        Returns:
            False if the die id is unknown
        """
        die = self.get(die_id)
        if die is None:
            return False
        die.position = Point(x, y)
        if snap:
            self._snap(die)
        return True
    
    def set_dragging(self, die_id: int, is_dragging: bool) -> bool:
        """
        Set a die's drag flag. Ending a drag snaps the die to the grid.
        
        Returns:
            True if the drag ended and the die was snapped
        """
        die = self.get(die_id)
        if die is None:
            return False
        die.is_dragging = is_dragging
        if is_dragging:
            return False
        self._snap(die)
        return True
    
    def set_dragged_die(self, die_id: Optional[int]) -> None:
        """Record which die is under the pointer (None to clear)."""
        if die_id is not None and self.get(die_id) is None:
            return
        self.dragged_id = die_id
    
    def select(self, die_id: int) -> bool:
        die = self.get(die_id)
        if die is None:
            return False
        die.is_selected = True
        if die_id not in self.selected_ids:
            self.selected_ids.append(die_id)
        return True
    
    def deselect(self, die_id: int) -> bool:
        die = self.get(die_id)
        if die is None:
            return False
        die.is_selected = False
        self.selected_ids = [i for i in self.selected_ids if i != die_id]
        return True
    
    def clear_selection(self) -> None:
        for die in self.dice:
            die.is_selected = False
        self.selected_ids = []
    
    def update_selection_box(
        self,
        start_x: float,
        start_y: float,
        end_x: float,
        end_y: float,
        is_active: bool,
    ) -> None:
        self.selection_box = SelectionBox(
            start_x=start_x,
            start_y=start_y,
            end_x=end_x,
            end_y=end_y,
            is_active=is_active,
        )
    
    def is_in_selection_box(self, die: Die, box: Optional[SelectionBox] = None) -> bool:
        """Check whether the die's center lies inside the box (the current one by default)."""
        if box is None:
            box = self.selection_box
        half = self.grid.half_die
        return box.contains(die.position.x + half, die.position.y + half)
    
    def select_in_box(self, box: Optional[SelectionBox] = None) -> List[Die]:
        """Select every die whose center lies inside the box."""
        picked = [die for die in self.dice if self.is_in_selection_box(die, box)]
        for die in picked:
            self.select(die.id)
        return picked
    
    def move_selected(self, dx: float, dy: float) -> None:
        """Translate every selected die, keeping it on the board."""
        for die in self.selected:
            die.position = Point(
                max(0, min(die.position.x + dx, self.grid.max_x)),
                max(0, min(die.position.y + dy, self.grid.max_y)),
            )
    
    def snap_selected_to_grid(self) -> None:
        for die in self.selected:
            self._snap(die)
    
    def occupancy(self) -> Dict[Tuple[int, int], str]:
        """
        Derive the grid view from the dice.
        
        Returns:
            Mapping of (row, col) to the letter showing there. When two dice
            share a cell the higher id wins.
        """
        return {
            (die.grid_position.row, die.grid_position.col): die.current_letter
            for die in self.dice
        }
    
    def occupied_cells(self) -> List[Tuple[int, int]]:
        """Grid cell of every die, in id order (duplicates kept)."""
        return [(die.grid_position.row, die.grid_position.col) for die in self.dice]
