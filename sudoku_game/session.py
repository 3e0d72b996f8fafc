import copy
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from .generator import generate
from .validator import BOX, EMPTY, SIZE, is_solved, revalidate

logger = logging.getLogger(__name__)

STARTING_LIVES = 3


class Outcome(Enum):
    """Result of a value entry."""

    NONE = "none"
    PLACED = "placed"
    INVALID = "invalid"


class GamePhase(Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class Cell:
    value: int = EMPTY
    is_fixed: bool = False
    is_valid: bool = True

    def with_validity(self, is_valid):
        return replace(self, is_valid=is_valid)


@dataclass(frozen=True)
class Snapshot:
    grid: list
    selection: Optional[tuple] = None


def _check_position(row, col):
    if not (0 <= row < SIZE and 0 <= col < SIZE):
        raise ValueError(f"Position out of range: ({row}, {col})")


def _check_seed(seed):
    if len(seed) != SIZE or any(len(row) != SIZE for row in seed):
        raise ValueError("Puzzle seed must be a 9x9 grid")
    for row in seed:
        for value in row:
            # bool is an int subclass and must not pass as a digit
            if type(value) is not int or not EMPTY <= value <= 9:
                raise ValueError(f"Invalid seed value: {value!r}")


def build_play_grid(seed):
    """Wraps a raw grid into cells; every given becomes fixed."""
    return [
        [Cell(value=value, is_fixed=value != EMPTY, is_valid=True) for value in row]
        for row in seed
    ]


# =========================================================================
# GAME SESSION
# Owns the play grid, selection, undo history, lives and completion flag.
# It is the only place puzzle state gets mutated.
# =========================================================================
class GameSession:
    def __init__(self, seed, lives=STARTING_LIVES):
        _check_seed(seed)
        self.seed = [row[:] for row in seed]
        self.starting_lives = lives
        self.reset()

    # ---------------------------------------------------------------------
    # Derived state
    # ---------------------------------------------------------------------
    @property
    def phase(self):
        if self.completed:
            return GamePhase.COMPLETED
        if self.lives == 0:
            return GamePhase.FAILED
        return GamePhase.IN_PROGRESS

    @property
    def is_failed(self):
        return self.lives == 0

    @property
    def can_undo(self):
        return len(self.history) > 1

    def cell(self, row, col):
        return self.grid[row][col]

    def _editable_cell(self):
        if self.selection is None:
            return None
        row, col = self.selection
        cell = self.grid[row][col]
        return None if cell.is_fixed else cell

    def is_highlighted(self, row, col):
        """
        True for cells sharing the highlighted cell's row, column or box,
        and for every cell holding the digit that was under the cursor.
        """
        if self.highlight is None:
            return False

        if self.highlighted_digit is not None and self.grid[row][col].value == self.highlighted_digit:
            return True

        h_row, h_col = self.highlight
        if row == h_row or col == h_col:
            return True
        return row // BOX == h_row // BOX and col // BOX == h_col // BOX

    # ---------------------------------------------------------------------
    # History
    # ---------------------------------------------------------------------
    def _push(self):
        self.history.append(Snapshot(copy.deepcopy(self.grid), self.selection))

    def _apply(self, row, col, value):
        grid = [line[:] for line in self.grid]
        grid[row][col] = replace(grid[row][col], value=value)
        self.grid = revalidate(grid)

    # ---------------------------------------------------------------------
    # Operations
    # ---------------------------------------------------------------------
    def select(self, row, col):
        """Moves the highlight; only non-fixed cells become the input target."""
        _check_position(row, col)
        cell = self.grid[row][col]

        self.highlight = (row, col)
        self.highlighted_digit = cell.value if cell.value != EMPTY else None

        if not cell.is_fixed:
            self.selection = (row, col)

    def input_digit(self, digit):
        """
        Enters 'digit' into the selected cell, or removes it when the cell
        already holds it. Placing a conflicting digit costs a life; toggling
        a digit off never does.

        A completed board takes no more entries until clear, undo or reset
        reopens it. Running out of lives does not block entry.
        """
        if not isinstance(digit, int) or not 1 <= digit <= 9:
            raise ValueError(f"Digit must be in 1-9, got {digit!r}")

        cell = self._editable_cell()
        if cell is None or self.completed:
            return Outcome.NONE

        row, col = self.selection
        new_value = EMPTY if cell.value == digit else digit
        self._apply(row, col, new_value)

        outcome = Outcome.NONE
        if new_value != EMPTY:
            if self.grid[row][col].is_valid:
                outcome = Outcome.PLACED
            else:
                outcome = Outcome.INVALID
                self.lives = max(0, self.lives - 1)

        self._push()

        if is_solved(self.grid):
            self.completed = True

        logger.debug("Input %d at (%d, %d): %s, lives=%d", digit, row, col, outcome.value, self.lives)
        return outcome

    def clear(self):
        cell = self._editable_cell()
        if cell is None:
            return

        row, col = self.selection
        self._apply(row, col, EMPTY)
        self._push()
        self.completed = False
        logger.debug("Cleared (%d, %d)", row, col)

    def undo(self):
        """Reverts to the previous snapshot; the initial snapshot is never popped."""
        if not self.can_undo:
            return

        self.history.pop()
        previous = self.history[-1]
        self.grid = copy.deepcopy(previous.grid)
        self.selection = previous.selection
        self.completed = False
        logger.debug("Undo, %d snapshot(s) left", len(self.history))

    def reset(self):
        """Restarts the current puzzle from its seed without generating a new one."""
        self.grid = build_play_grid(self.seed)
        self.selection = None
        self.highlight = None
        self.highlighted_digit = None
        self.history = [Snapshot(copy.deepcopy(self.grid), None)]
        self.lives = self.starting_lives
        self.completed = False
        logger.debug("Session reset")


def create_session(seed):
    return GameSession(seed)


def new_puzzle(rng=None):
    """Generates a fresh seed and wraps it in a brand-new session."""
    return GameSession(generate(rng))
