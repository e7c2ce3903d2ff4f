"""
Test the puzzle session end to end.

Dice are arranged into four words on alternating rows:

    row 0:  C A T   (dice 1, 10, 6)
    row 2:  P I N   (dice 2, 7, 8)
    row 4:  N O W   (dice 11, 9, 3)
    row 6:  G Y M   (dice 4, 12, 5)
"""

import random

import pytest

from src.puzzle import PuzzleConfig, PuzzleSession
from src.words import WordList


SOLUTION = {
    1: (0, 0, "C"), 10: (0, 1, "A"), 6: (0, 2, "T"),
    2: (2, 0, "P"), 7: (2, 1, "I"), 8: (2, 2, "N"),
    11: (4, 0, "N"), 9: (4, 1, "O"), 3: (4, 2, "W"),
    4: (6, 0, "G"), 12: (6, 1, "Y"), 5: (6, 2, "M"),
}

WORDS = WordList.from_words(["cat", "pin", "now", "gym", "cot"])


class FakeClock:
    """Millisecond clock controlled by the test."""

    def __init__(self, now: float = 1_000_000):
        self.now = now

    def __call__(self) -> float:
        return self.now


def cell_pixels(row: int, col: int):
    return col * 60 + 10, row * 60 + 10


def scatter(session: PuzzleSession) -> None:
    """Park every die on its own isolated cell in the bottom rows."""
    for k, die in enumerate(session.registry.dice):
        row, col = 9 - 2 * (k // 7), (k % 7) * 2
        session.registry.update_position(die.id, *cell_pixels(row, col), snap=True)


def arrange(session: PuzzleSession, layout=SOLUTION) -> None:
    """Set letters and drop every die of the layout onto its cell."""
    for die_id, (row, col, letter) in layout.items():
        die = session.registry.get(die_id)
        assert letter in die.letters
        die.current_letter = letter
        session.registry.update_position(die_id, *cell_pixels(row, col), snap=True)
    session.check_for_words()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session(clock):
    return PuzzleSession.create(dictionary=WORDS, clock=clock, seed=5)


class TestCreate:
    """Test cases for session construction."""

    def test_defaults(self, session):
        """A new session has twelve dice and a clean state."""
        assert len(session.registry.dice) == 12
        assert session.puzzle.is_complete is False
        assert session.found_words == []
        assert session.discovered_words == []

    def test_config_kwargs(self):
        """Config keywords build the config."""
        session = PuzzleSession.create(dictionary=WORDS, new_word_window_ms=500, seed=1)
        assert session.config.new_word_window_ms == 500
        assert session.tracker.window_ms == 500

    def test_loads_dictionary_from_config(self, tmp_path):
        """Without an explicit word list the configured file is loaded."""
        path = tmp_path / "words.txt"
        path.write_text("cat\ndog\n", encoding="utf-8")
        session = PuzzleSession.create(config=PuzzleConfig(dictionary_path=str(path)))
        assert session.dictionary.words == {"cat", "dog"}

    def test_falls_back_without_dictionary(self):
        """A session without a word file still detects fallback words."""
        session = PuzzleSession.create(rng=random.Random(0))
        assert session.dictionary.source == "fallback"
        assert session.dictionary.contains("cat")


class TestWordDetection:
    """Test cases for scanning through the session."""

    def test_drag_end_triggers_scan(self, session, clock):
        """Dropping a die rescans the grid."""
        scatter(session)
        arrange(session, {k: v for k, v in SOLUTION.items() if k in (1, 10)})
        session.registry.get(6).current_letter = "T"

        session.set_dragging(6, True)
        session.update_die_position(6, 131, 8)
        assert session.found_words == []

        session.set_dragging(6, False)

        assert session.last_scan.words == ["CAT"]
        assert [fw.word for fw in session.found_words] == ["CAT"]
        assert session.found_words[0].discovered_at == clock.now

    def test_drop_die(self, session):
        """drop_die drags, moves, and releases in one call."""
        assert session.drop_die(3, 500, 500) is True
        assert session.registry.get(3).grid_position == (8, 8)
        assert session.registry.get(3).is_dragging is False
        assert session.registry.dragged_id is None
        assert session.last_scan is not None

    def test_drop_unknown_die(self, session):
        """Dropping an unknown die does nothing."""
        assert session.drop_die(42, 10, 10) is False
        assert session.last_scan is None

    def test_snap_selected_triggers_scan(self, session):
        """Snapping the selection rescans the grid."""
        arrange(session)
        session.select_die(4)
        session.select_die(12)
        session.select_die(5)
        session.move_selected(0, 60)
        assert session.registry.get(4).grid_position == (6, 0)

        session.snap_selected_to_grid()

        assert session.registry.get(4).grid_position == (7, 0)
        assert "GYM" in session.last_scan.words

    def test_unloaded_dictionary_uses_fallback_words(self, clock):
        """Before the dictionary loads, common words are still found."""
        session = PuzzleSession.create(dictionary=WordList(), clock=clock, seed=1)
        scatter(session)
        arrange(session, {1: (5, 0, "C"), 10: (5, 1, "A"), 6: (5, 2, "T")})

        assert "CAT" in session.last_scan.words
        assert "CAT" in session.discovered_words

    def test_direct_construction_is_playable(self):
        """A session built without the factory has dice and a word list."""
        session = PuzzleSession()
        assert len(session.registry.dice) == 12
        assert session.dictionary.loaded is True

        scatter(session)
        arrange(session, {1: (5, 0, "C"), 10: (5, 1, "A"), 6: (5, 2, "T")})
        assert session.last_scan.words == ["CAT"]

    def test_rediscovery_not_announced(self, session, clock):
        """Pulling a word apart and rebuilding it does not announce it again."""
        arrange(session)
        assert len(session.found_words) == 4

        clock.now += 100
        session.drop_die(6, *cell_pixels(9, 12))
        clock.now += 100
        session.drop_die(6, *cell_pixels(0, 2))

        assert len(session.found_words) == 4
        assert session.discovered_words == ["CAT", "GYM", "NOW", "PIN"]

    def test_found_words_expire(self, session, clock):
        """Highlights disappear after the window, discoveries stay."""
        arrange(session)
        clock.now += 3001
        session.check_for_words()
        assert session.found_words == []
        assert len(session.discovered_words) == 4


class TestCompletion:
    """Test cases for solving the puzzle."""

    def test_solved(self, session, clock):
        """All twelve dice in words solves the puzzle."""
        arrange(session)
        assert session.puzzle.is_complete is True
        assert session.puzzle.all_words == ["CAT", "PIN", "NOW", "GYM"]
        assert session.puzzle.completed_at == clock.now

    def test_partial_not_solved(self, session):
        """A word using only some dice is not a solution."""
        scatter(session)
        arrange(session, {k: v for k, v in SOLUTION.items() if k in (1, 10, 6)})
        assert session.last_scan.words == ["CAT"]
        assert session.puzzle.is_complete is False

    def test_breaking_solution_keeps_snapshot(self, session, clock):
        """Moving a die out of a solved board clears the flag but keeps the words."""
        arrange(session)
        solved_at = clock.now

        clock.now += 50
        session.drop_die(6, *cell_pixels(9, 12))

        assert session.puzzle.is_complete is False
        assert session.puzzle.all_words == ["CAT", "PIN", "NOW", "GYM"]
        assert session.puzzle.completed_at == solved_at
        assert session.export_text() == ""

    def test_roll_resets_everything(self, session):
        """Rolling starts a fresh puzzle."""
        arrange(session)
        session.select_die(1)

        session.roll()

        assert session.puzzle.is_complete is False
        assert session.puzzle.all_words == []
        assert session.discovered_words == []
        assert session.found_words == []
        assert session.registry.selected_ids == []
        assert session.last_scan is None

    def test_reset_is_roll(self, session):
        """reset() is the same entry point as roll()."""
        arrange(session)
        session.reset()
        assert session.discovered_words == []


class TestExport:
    """Test cases for exporting and copying."""

    def test_export_solved(self, session):
        """The export shows the bounding box and the winning words."""
        arrange(session)
        text = session.export_text()
        assert text.splitlines() == [
            "🎲 Clueless Puzzle Solution 🎲",
            "",
            " C  A  T",
            "",
            " P  I  N",
            "",
            " N  O  W",
            "",
            " G  Y  M",
            "",
            "Words found: CAT, PIN, NOW, GYM",
            "",
            "Solved in Clueless - the word dice game!",
        ]

    def test_export_unsolved(self, session):
        """Unsolved puzzles export nothing."""
        assert session.export_text() == ""

    def test_copy_success(self, session):
        """Copying hands the text to the sink."""
        arrange(session)
        copied = []
        assert session.copy_puzzle(copied.append) is True
        assert copied == [session.export_text()]

    def test_copy_unsolved(self, session):
        """Nothing is copied while unsolved."""
        copied = []
        assert session.copy_puzzle(copied.append) is False
        assert copied == []

    def test_copy_failure(self, session):
        """A failing sink reports False and leaves the state alone."""
        arrange(session)

        def broken(text):
            raise OSError("clipboard unavailable")

        before = session.get_state()
        assert session.copy_puzzle(broken) is False
        assert session.get_state() == before
        assert session.puzzle.is_complete is True

    def test_get_state(self, session):
        """State snapshot reflects the session."""
        arrange(session)
        state = session.get_state()
        assert len(state["dice"]) == 12
        assert state["is_complete"] is True
        assert state["words"] == ["CAT", "PIN", "NOW", "GYM"]
        assert state["discovered_words"] == ["CAT", "GYM", "NOW", "PIN"]
        assert state["dictionary_size"] == 5
