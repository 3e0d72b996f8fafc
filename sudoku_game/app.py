import logging
import random

import pygame

from .audio import BUFFER_SIZE, SAMPLE_RATE, SoundBoard
from .session import Outcome, new_puzzle
from .timer import GameTimer, format_time
from .validator import EMPTY, SIZE

logger = logging.getLogger(__name__)

WINDOW_WIDTH = 800
WINDOW_HEIGHT = 650
GRID_SIZE = 450
CELL_SIZE = GRID_SIZE // SIZE
GRID_X = 30
GRID_Y = 80

PANEL_X = GRID_X + GRID_SIZE + 20
PANEL_WIDTH = 260
BUTTON_Y = 160
BUTTON_HEIGHT = 45
BUTTON_SPACING = 12

NUMPAD_Y = GRID_Y + GRID_SIZE + 15
NUMPAD_HEIGHT = 45
MESSAGE_Y = NUMPAD_Y + NUMPAD_HEIGHT + 12

# How long a status message stays up, in frames
MESSAGE_FRAMES = 90

LIGHT = {
    "BG_COLOR": (245, 247, 250),
    "GRID_BG": (255, 255, 255),
    "TEXT": (30, 30, 30),
    "TEXT_GRAY": (100, 116, 139),
    "GRAY": (180, 190, 200),
    "SUBGRID_LINE": (203, 213, 225),
    "PRIMARY": (79, 70, 229),
    "PRIMARY_DARK": (55, 48, 163),
    "HIGHLIGHT": (129, 140, 248),
    "SELECTION": (224, 231, 255),
    "SELECTION_BORDER": (129, 140, 248),
    "SUCCESS": (34, 197, 94),
    "SUCCESS_LIGHT": (134, 239, 172),
    "ERROR": (239, 68, 68),
    "ERROR_LIGHT": (254, 202, 202),
    "CONFLICT_HIGHLIGHT": (255, 100, 100),
    "CONFLICT_BORDER": (200, 50, 50),
    "BUTTON_TEXT": (255, 255, 255),
}

DARK = dict(
    LIGHT,
    BG_COLOR=(17, 24, 39),
    GRID_BG=(31, 41, 55),
    TEXT=(229, 231, 235),
    TEXT_GRAY=(156, 163, 175),
    GRAY=(75, 85, 99),
    SUBGRID_LINE=(55, 65, 81),
    PRIMARY=(129, 140, 248),
    PRIMARY_DARK=(165, 180, 252),
    HIGHLIGHT=(99, 102, 241),
    SELECTION=(55, 48, 163),
    SUCCESS_LIGHT=(20, 83, 45),
    ERROR_LIGHT=(127, 29, 29),
)


def panel_button_rect(index):
    y = BUTTON_Y + index * (BUTTON_HEIGHT + BUTTON_SPACING)
    return pygame.Rect(PANEL_X, y, PANEL_WIDTH, BUTTON_HEIGHT)


def numpad_rect(digit):
    width = CELL_SIZE - 4
    return pygame.Rect(GRID_X + (digit - 1) * CELL_SIZE + 2, NUMPAD_Y, width, NUMPAD_HEIGHT)


def cell_at(pos):
    """Maps a window coordinate to a grid position, or None outside the grid."""
    x, y = pos
    if GRID_X <= x < GRID_X + GRID_SIZE and GRID_Y <= y < GRID_Y + GRID_SIZE:
        return (y - GRID_Y) // CELL_SIZE, (x - GRID_X) // CELL_SIZE
    return None


# =========================================================================
# PYGAME FRONT END
# Renders the session and turns mouse/keyboard events into game actions.
# =========================================================================
class SudokuApp:
    def __init__(self, rng=None):
        pygame.init()
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption("Sudoku")

        # Fonts
        self.font_title = pygame.font.Font(None, 48)
        self.font_large = pygame.font.Font(None, 42)
        self.font_medium = pygame.font.Font(None, 32)
        self.font_small = pygame.font.Font(None, 22)
        self.font_tiny = pygame.font.Font(None, 18)

        self.theme = LIGHT
        self.rng = rng if rng is not None else random.Random()
        self.sounds = SoundBoard()
        self.timer = GameTimer()

        self.message = ""
        self.message_timer = 0

        # Key Mapping for Numpad support
        self.key_mapping = {
            pygame.K_1: 1, pygame.K_2: 2, pygame.K_3: 3, pygame.K_4: 4, pygame.K_5: 5,
            pygame.K_6: 6, pygame.K_7: 7, pygame.K_8: 8, pygame.K_9: 9,
            pygame.K_KP1: 1, pygame.K_KP2: 2, pygame.K_KP3: 3, pygame.K_KP4: 4, pygame.K_KP5: 5,
            pygame.K_KP6: 6, pygame.K_KP7: 7, pygame.K_KP8: 8, pygame.K_KP9: 9
        }

        self.session = new_puzzle(self.rng)
        self.timer.start()

    @property
    def buttons(self):
        pause_label = "Pause Timer" if self.timer.running else "Resume Timer"
        theme_label = "Dark Mode" if self.theme is LIGHT else "Light Mode"
        return [
            ("Undo", self.undo),
            ("Clear", self.clear),
            ("Reset", self.reset),
            ("New Puzzle", self.start_new_puzzle),
            (pause_label, self.toggle_timer),
            ("Reset Timer", self.reset_timer),
            (theme_label, self.toggle_theme),
        ]

    @property
    def input_enabled(self):
        """Entry is closed once the puzzle is solved or every life is gone."""
        return not (self.session.completed or self.session.is_failed)

    def color(self, key):
        return self.theme[key]

    def show_message(self, text):
        self.message = text
        self.message_timer = MESSAGE_FRAMES

    # ---------------------------------------------------------------------
    # Actions
    # ---------------------------------------------------------------------
    def enter_digit(self, digit):
        if not self.input_enabled:
            return

        outcome = self.session.input_digit(digit)
        if outcome is Outcome.INVALID:
            self.sounds.play("error")
            self.show_message("Conflict! You lost a life.")
        elif outcome is Outcome.PLACED:
            self.sounds.play("place")

        if self.session.completed:
            self.sounds.play("success")
            self.timer.stop()
            logger.info("Puzzle solved in %s", format_time(self.timer.elapsed))
        elif self.session.is_failed:
            logger.info("Out of lives after %s", format_time(self.timer.elapsed))

    def clear(self):
        if not self.input_enabled:
            return
        self.sounds.play("click")
        self.session.clear()

    def undo(self):
        if not self.session.can_undo:
            self.show_message("Nothing to undo")
            return
        self.sounds.play("undo")
        self.session.undo()

    def reset(self):
        self.sounds.play("click")
        self.session.reset()
        self.timer.reset()
        self.message = ""

    def start_new_puzzle(self):
        self.sounds.play("click")
        self.screen.fill(self.color("BG_COLOR"))
        text = self.font_large.render("Generating puzzle...", True, self.color("PRIMARY"))
        self.screen.blit(text, text.get_rect(center=(WINDOW_WIDTH // 2, WINDOW_HEIGHT // 2)))
        pygame.display.flip()

        self.session = new_puzzle(self.rng)
        self.timer.reset()
        self.message = ""

    def toggle_timer(self):
        self.sounds.play("click")
        self.timer.toggle()

    def reset_timer(self):
        self.sounds.play("click")
        self.timer.reset()

    def toggle_theme(self):
        self.theme = DARK if self.theme is LIGHT else LIGHT

    def move_selection(self, d_row, d_col):
        origin = self.session.highlight or self.session.selection or (0, 0)
        row = min(SIZE - 1, max(0, origin[0] + d_row))
        col = min(SIZE - 1, max(0, origin[1] + d_col))
        self.session.select(row, col)

    # ---------------------------------------------------------------------
    # Event handling
    # ---------------------------------------------------------------------
    def handle_click(self, pos):
        """Processes mouse clicks for grid selection, number pad and buttons."""
        cell = cell_at(pos)
        if cell is not None:
            self.sounds.play("click")
            self.session.select(*cell)
            return

        for digit in range(1, 10):
            if numpad_rect(digit).collidepoint(pos):
                self.enter_digit(digit)
                return

        for i, (_label, action) in enumerate(self.buttons):
            if panel_button_rect(i).collidepoint(pos):
                action()
                return

    def handle_key(self, key):
        num = self.key_mapping.get(key)
        if num is not None:
            self.enter_digit(num)
        elif key in [pygame.K_DELETE, pygame.K_BACKSPACE, pygame.K_0, pygame.K_KP0]:
            self.clear()
        elif key == pygame.K_UP:
            self.move_selection(-1, 0)
        elif key == pygame.K_DOWN:
            self.move_selection(1, 0)
        elif key == pygame.K_LEFT:
            self.move_selection(0, -1)
        elif key == pygame.K_RIGHT:
            self.move_selection(0, 1)
        elif key == pygame.K_u:
            self.undo()
        elif key == pygame.K_r:
            self.reset()
        elif key == pygame.K_n:
            self.start_new_puzzle()
        elif key == pygame.K_p:
            self.toggle_timer()
        elif key == pygame.K_t:
            self.toggle_theme()

    # ---------------------------------------------------------------------
    # Drawing
    # ---------------------------------------------------------------------
    def draw_rounded_rect(self, surface, color, rect, radius=10):
        """Utility to draw a rectangle with rounded corners."""
        x, y, width, height = rect
        pygame.draw.rect(surface, color, (x + radius, y, width - 2 * radius, height))
        pygame.draw.rect(surface, color, (x, y + radius, width, height - 2 * radius))
        pygame.draw.circle(surface, color, (x + radius, y + radius), radius)
        pygame.draw.circle(surface, color, (x + width - radius, y + radius), radius)
        pygame.draw.circle(surface, color, (x + radius, y + height - radius), radius)
        pygame.draw.circle(surface, color, (x + width - radius, y + height - radius), radius)

    def draw_button(self, text, rect, color, enabled=True):
        """Draws a clickable button with a shadow effect."""
        x, y, width, height = rect
        self.draw_rounded_rect(self.screen, (0, 0, 0, 30), (x + 2, y + 2, width, height), 8)
        self.draw_rounded_rect(self.screen, color if enabled else self.color("GRAY"), rect, 8)

        text_surface = self.font_small.render(text, True, self.color("BUTTON_TEXT"))
        self.screen.blit(text_surface, text_surface.get_rect(center=(x + width // 2, y + height // 2)))

    def draw_stat_card(self, label, value, x, y, width):
        """Draws a statistic display card."""
        self.draw_rounded_rect(self.screen, self.color("GRID_BG"), (x, y, width, 50), 8)
        self.screen.blit(self.font_tiny.render(label, True, self.color("TEXT_GRAY")), (x + 12, y + 10))
        self.screen.blit(self.font_medium.render(str(value), True, self.color("TEXT")), (x + 12, y + 24))

    def draw_grid(self):
        """Draws the cell backgrounds and the grid lines."""
        self.draw_rounded_rect(self.screen, self.color("GRID_BG"), (GRID_X, GRID_Y, GRID_SIZE, GRID_SIZE), 12)

        for i in range(10):
            thickness = 3 if i % 3 == 0 else 1
            color = self.color("TEXT") if i % 3 == 0 else self.color("SUBGRID_LINE")

            # Horizontal line
            pygame.draw.line(self.screen, color,
                             (GRID_X, GRID_Y + i * CELL_SIZE),
                             (GRID_X + GRID_SIZE, GRID_Y + i * CELL_SIZE), thickness)

            # Vertical line
            pygame.draw.line(self.screen, color,
                             (GRID_X + i * CELL_SIZE, GRID_Y),
                             (GRID_X + i * CELL_SIZE, GRID_Y + GRID_SIZE), thickness)

    def draw_highlights(self):
        """Tints the row, column, box and matching digits of the last clicked cell."""
        highlight_surf = pygame.Surface((CELL_SIZE, CELL_SIZE))
        highlight_surf.set_alpha(40)
        highlight_surf.fill(self.color("HIGHLIGHT"))
        for row in range(SIZE):
            for col in range(SIZE):
                if self.session.is_highlighted(row, col):
                    self.screen.blit(highlight_surf, (GRID_X + col * CELL_SIZE, GRID_Y + row * CELL_SIZE))

    def draw_conflict_highlights(self):
        """Highlights cells that are part of a conflict (Red)."""
        for row in range(SIZE):
            for col in range(SIZE):
                if self.session.cell(row, col).is_valid:
                    continue
                x = GRID_X + col * CELL_SIZE
                y = GRID_Y + row * CELL_SIZE
                conflict_surf = pygame.Surface((CELL_SIZE - 4, CELL_SIZE - 4))
                conflict_surf.set_alpha(80)
                conflict_surf.fill(self.color("CONFLICT_HIGHLIGHT"))
                self.screen.blit(conflict_surf, (x + 2, y + 2))
                pygame.draw.rect(self.screen, self.color("CONFLICT_BORDER"),
                                 (x + 2, y + 2, CELL_SIZE - 4, CELL_SIZE - 4), 2)

    def draw_selection(self):
        if self.session.selection is None:
            return
        row, col = self.session.selection
        x = GRID_X + col * CELL_SIZE
        y = GRID_Y + row * CELL_SIZE
        pygame.draw.rect(self.screen, self.color("SELECTION_BORDER"),
                         (x + 2, y + 2, CELL_SIZE - 4, CELL_SIZE - 4), 3)

    def draw_numbers(self):
        """Renders the numbers inside the grid."""
        for row in range(SIZE):
            for col in range(SIZE):
                cell = self.session.cell(row, col)
                if cell.value == EMPTY:
                    continue

                if cell.is_fixed:
                    color = self.color("TEXT")
                else:
                    # User entered numbers (Red if invalid, Blue if valid)
                    color = self.color("PRIMARY") if cell.is_valid else self.color("ERROR")

                text = self.font_large.render(str(cell.value), True, color)
                center = (GRID_X + col * CELL_SIZE + CELL_SIZE // 2, GRID_Y + row * CELL_SIZE + CELL_SIZE // 2)
                self.screen.blit(text, text.get_rect(center=center))

    def draw_numpad(self):
        enabled = self.input_enabled and self.session.selection is not None
        for digit in range(1, 10):
            self.draw_button(str(digit), numpad_rect(digit), self.color("PRIMARY"), enabled)

    def draw_panel(self):
        """Draws the right-hand control panel."""
        title = self.font_title.render("Sudoku", True, self.color("PRIMARY_DARK"))
        self.screen.blit(title, title.get_rect(center=(WINDOW_WIDTH // 2, 35)))

        self.draw_stat_card("TIME", format_time(self.timer.elapsed), PANEL_X, 90, 120)

        # Lives indicator
        lives_x = PANEL_X + 130
        self.draw_rounded_rect(self.screen, self.color("GRID_BG"), (lives_x, 90, 130, 50), 8)
        self.screen.blit(self.font_tiny.render("LIVES", True, self.color("TEXT_GRAY")), (lives_x + 12, 100))
        for i in range(self.session.starting_lives):
            alive = i < self.session.lives
            color = self.color("SUCCESS") if self.session.lives > 1 else self.color("ERROR")
            pygame.draw.circle(self.screen, color if alive else self.color("GRAY"),
                               (lives_x + 20 + i * 30, 122), 8, 0 if alive else 2)

        for i, (label, action) in enumerate(self.buttons):
            enabled = True
            if action == self.undo:
                enabled = self.session.can_undo
            elif action == self.clear:
                enabled = self.input_enabled and self.session.selection is not None
            self.draw_button(label, panel_button_rect(i), self.color("PRIMARY"), enabled)

    def draw_banner(self):
        """Shows the win/lose banner, or the latest status message."""
        rect = (GRID_X, MESSAGE_Y, GRID_SIZE, 35)
        if self.session.completed:
            text = f"You solved the puzzle in {format_time(self.timer.elapsed)}!"
            background, foreground = self.color("SUCCESS_LIGHT"), self.color("SUCCESS")
        elif self.session.is_failed:
            text = "You ran out of lives. Press Reset to try again."
            background, foreground = self.color("ERROR_LIGHT"), self.color("ERROR")
        elif self.message and self.message_timer > 0:
            self.message_timer -= 1
            text = self.message
            background, foreground = self.color("ERROR_LIGHT"), self.color("ERROR")
        else:
            return

        self.draw_rounded_rect(self.screen, background, rect, 8)
        t = self.font_small.render(text, True, foreground)
        self.screen.blit(t, t.get_rect(center=(GRID_X + GRID_SIZE // 2, MESSAGE_Y + 17)))

    def draw(self):
        self.screen.fill(self.color("BG_COLOR"))
        self.draw_grid()
        self.draw_highlights()
        self.draw_conflict_highlights()
        self.draw_selection()
        self.draw_numbers()
        self.draw_numpad()
        self.draw_panel()
        self.draw_banner()

    def run(self):
        """Main game loop."""
        clock = pygame.time.Clock()
        running = True

        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self.handle_click(event.pos)
                elif event.type == pygame.KEYDOWN:
                    self.handle_key(event.key)

            self.draw()
            pygame.display.flip()
            clock.tick(60)

        pygame.quit()


def main():
    logging.basicConfig(level=logging.INFO)
    # Tones are rendered as 16-bit mono, so ask for that before pygame.init()
    pygame.mixer.pre_init(SAMPLE_RATE, -16, 1, BUFFER_SIZE)
    SudokuApp().run()


if __name__ == "__main__":
    main()
