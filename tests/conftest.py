import random

import pytest

SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"


def parse_grid(text):
    return [[int(ch) for ch in text[i:i + 9]] for i in range(0, 81, 9)]


@pytest.fixture
def solution():
    return parse_grid(SOLUTION)


@pytest.fixture
def almost_solved(solution):
    # Only the bottom-right cell (a 9) is missing
    grid = [row[:] for row in solution]
    grid[8][8] = 0
    return grid


@pytest.fixture
def seven_seed():
    grid = [[0] * 9 for _ in range(9)]
    grid[0][0] = 7
    return grid


@pytest.fixture
def rng():
    return random.Random(1234)
