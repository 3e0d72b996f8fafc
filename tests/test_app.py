import random

import pygame
import pytest

from sudoku_game.app import (
    CELL_SIZE,
    DARK,
    GRID_X,
    GRID_Y,
    LIGHT,
    SudokuApp,
    cell_at,
    numpad_rect,
    panel_button_rect,
)
from sudoku_game.session import GameSession, STARTING_LIVES


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    application = SudokuApp(rng=random.Random(11))
    yield application
    pygame.quit()


def cell_center(row, col):
    return GRID_X + col * CELL_SIZE + CELL_SIZE // 2, GRID_Y + row * CELL_SIZE + CELL_SIZE // 2


def first_empty(session):
    for r in range(9):
        for c in range(9):
            if not session.grid[r][c].is_fixed:
                return r, c
    raise AssertionError("puzzle has no empty cell")


def button_index(app, label):
    return [text for text, _action in app.buttons].index(label)


def test_cell_at():
    assert cell_at(cell_center(0, 0)) == (0, 0)
    assert cell_at(cell_center(8, 3)) == (8, 3)
    assert cell_at((GRID_X - 1, GRID_Y)) is None


def test_click_selects_empty_cell(app):
    row, col = first_empty(app.session)
    app.handle_click(cell_center(row, col))
    assert app.session.selection == (row, col)
    assert app.session.highlight == (row, col)


def test_keyboard_entry_and_clear(app):
    row, col = first_empty(app.session)
    app.session.select(row, col)

    app.handle_key(pygame.K_5)
    assert app.session.cell(row, col).value == 5

    app.handle_key(pygame.K_BACKSPACE)
    assert app.session.cell(row, col).value == 0


def test_numpad_click_enters_digit(app):
    row, col = first_empty(app.session)
    app.session.select(row, col)
    app.handle_click(numpad_rect(3).center)
    assert app.session.cell(row, col).value == 3


def test_undo_button(app):
    row, col = first_empty(app.session)
    app.session.select(row, col)
    app.enter_digit(4)

    app.handle_click(panel_button_rect(button_index(app, "Undo")).center)
    assert app.session.cell(row, col).value == 0
    assert not app.session.can_undo


def test_no_entry_when_out_of_lives(app):
    row, col = first_empty(app.session)
    app.session.select(row, col)
    app.session.lives = 0

    app.enter_digit(4)
    assert app.session.cell(row, col).value == 0
    assert len(app.session.history) == 1


def test_completion_stops_timer(app, almost_solved):
    app.session = GameSession(almost_solved)
    app.session.select(8, 8)

    app.handle_key(pygame.K_9)

    assert app.session.completed
    assert not app.timer.running

    # Solved boards take no more input
    app.handle_key(pygame.K_9)
    assert app.session.cell(8, 8).value == 9


def test_reset_restores_lives_and_timer(app):
    row, col = first_empty(app.session)
    app.session.select(row, col)
    app.session.lives = 1
    app.timer.pause()

    app.handle_key(pygame.K_r)

    assert app.session.lives == STARTING_LIVES
    assert app.timer.running
    assert app.session.selection is None


def test_new_puzzle_replaces_session(app):
    old = app.session
    app.handle_click(panel_button_rect(button_index(app, "New Puzzle")).center)
    assert app.session is not old
    assert len(app.session.history) == 1


def test_pause_and_theme_toggles(app):
    app.handle_key(pygame.K_p)
    assert not app.timer.running
    app.handle_key(pygame.K_p)
    assert app.timer.running

    assert app.theme is LIGHT
    app.handle_key(pygame.K_t)
    assert app.theme is DARK


def test_arrow_keys_move_selection(app):
    app.session.select(4, 4)
    app.handle_key(pygame.K_UP)
    assert app.session.highlight == (3, 4)
    app.handle_key(pygame.K_LEFT)
    assert app.session.highlight == (3, 3)

    app.session.select(0, 0)
    app.handle_key(pygame.K_UP)
    assert app.session.highlight == (0, 0)


def test_draw_in_every_phase(app, almost_solved):
    app.draw()

    app.session.lives = 0
    app.draw()

    app.session = GameSession(almost_solved)
    app.session.select(8, 8)
    app.enter_digit(9)
    app.handle_key(pygame.K_t)
    app.draw()
