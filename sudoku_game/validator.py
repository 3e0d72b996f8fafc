EMPTY = 0
SIZE = 9
BOX = 3


def _value(cell):
    # Plain digit grids hold ints, play grids hold Cell objects
    return getattr(cell, "value", cell)


def box_origin(row, col):
    return BOX * (row // BOX), BOX * (col // BOX)


def peers(row, col):
    """Returns every position sharing a row, column or 3x3 box with (row, col)."""
    result = set()
    for i in range(SIZE):
        result.add((row, i))
        result.add((i, col))

    box_row, box_col = box_origin(row, col)
    for i in range(box_row, box_row + BOX):
        for j in range(box_col, box_col + BOX):
            result.add((i, j))

    result.discard((row, col))
    return result


def is_legal(grid, row, col, digit):
    """
    Checks if 'digit' can sit at (row, col) without repeating in its row,
    column or 3x3 box. The cell itself is never compared against.
    """
    # Check row
    for j in range(SIZE):
        if j != col and _value(grid[row][j]) == digit:
            return False

    # Check column
    for i in range(SIZE):
        if i != row and _value(grid[i][col]) == digit:
            return False

    # Check subgrid
    box_row, box_col = box_origin(row, col)
    for i in range(box_row, box_row + BOX):
        for j in range(box_col, box_col + BOX):
            if (i != row or j != col) and _value(grid[i][j]) == digit:
                return False

    return True


def find_conflicts(grid):
    """Collects every filled position whose value repeats inside one of its units."""
    conflicts = set()
    for i in range(SIZE):
        for j in range(SIZE):
            value = _value(grid[i][j])
            if value != EMPTY and not is_legal(grid, i, j, value):
                conflicts.add((i, j))
    return conflicts


def revalidate(play_grid):
    """
    Rebuilds the play grid with fresh 'is_valid' flags.

    Every cell is recomputed, not just the one that changed: placing a
    duplicate invalidates both copies, and removing it restores both.
    The input grid is left untouched.
    """
    conflicts = find_conflicts(play_grid)
    return [
        [cell.with_validity((i, j) not in conflicts) for j, cell in enumerate(row)]
        for i, row in enumerate(play_grid)
    ]


def is_full(grid):
    return all(_value(cell) != EMPTY for row in grid for cell in row)


def is_solved(grid):
    """Checks if the board is completely filled with no conflicts."""
    return is_full(grid) and not find_conflicts(grid)
