import logging
import random

from .validator import EMPTY, SIZE, is_legal

logger = logging.getLogger(__name__)

# Number of cells blanked out of a full board, drawn uniformly (inclusive)
REMOVAL_RANGE = (45, 50)

# Guard against runaway backtracking; a 9x9 fill normally needs a few hundred placements
MAX_STEPS = 200000
MAX_ATTEMPTS = 3


class GenerationError(RuntimeError):
    """Raised when the backtracking fill exhausts its step budget."""


# =========================================================================
# PUZZLE GENERATOR
# Fills a valid board by randomized backtracking, then removes numbers.
# =========================================================================
class PuzzleGenerator:
    def __init__(self, rng=None, removal_range=REMOVAL_RANGE, max_steps=MAX_STEPS):
        low, high = removal_range
        if not 0 <= low <= high <= SIZE * SIZE:
            raise ValueError(f"Invalid removal range: {removal_range}")

        self.rng = rng if rng is not None else random.Random()
        self.removal_range = (low, high)
        self.max_steps = max_steps
        self.steps = 0

    def generate_complete_board(self):
        """Generates a completely filled, valid Sudoku grid."""
        board = [[EMPTY] * SIZE for _ in range(SIZE)]
        self.steps = 0
        if not self.fill_board(board):
            # Exhaustive backtracking always fills an empty 9x9 board
            raise GenerationError("Backtracking found no complete board")
        return board

    def fill_board(self, board, index=0):
        """
        Recursively fills the board in row-major order.
        Each cell tries the digits 1-9 in a freshly shuffled order and undoes
        its placement when the rest of the board cannot be completed.
        """
        if index == SIZE * SIZE:
            return True

        row, col = divmod(index, SIZE)
        if board[row][col] != EMPTY:
            return self.fill_board(board, index + 1)

        numbers = list(range(1, 10))
        self.rng.shuffle(numbers)

        for num in numbers:
            if is_legal(board, row, col, num):
                self.steps += 1
                if self.steps > self.max_steps:
                    raise GenerationError(f"Gave up after {self.max_steps} placements")

                board[row][col] = num
                if self.fill_board(board, index + 1):
                    return True
                board[row][col] = EMPTY

        return False

    def carve(self, solution):
        """Blanks a random subset of cells; uniqueness of the solution is not checked."""
        puzzle = [row[:] for row in solution]
        removal_count = self.rng.randint(*self.removal_range)

        # Create a list of all coordinates and shuffle them
        cells = [(i, j) for i in range(SIZE) for j in range(SIZE)]
        self.rng.shuffle(cells)

        for row, col in cells[:removal_count]:
            puzzle[row][col] = EMPTY

        return puzzle

    def generate(self):
        """Main entry point: returns a playable puzzle grid."""
        for attempt in range(1, MAX_ATTEMPTS + 1):
            try:
                solution = self.generate_complete_board()
                break
            except GenerationError:
                if attempt == MAX_ATTEMPTS:
                    raise
                logger.warning("Board fill attempt %d/%d exhausted, retrying", attempt, MAX_ATTEMPTS)

        puzzle = self.carve(solution)
        givens = sum(1 for row in puzzle for value in row if value != EMPTY)
        logger.info("Generated puzzle with %d givens after %d placements", givens, self.steps)
        return puzzle


def generate(rng=None):
    return PuzzleGenerator(rng).generate()
