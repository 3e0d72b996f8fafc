from .generator import GenerationError, PuzzleGenerator, generate
from .session import (
    Cell,
    GamePhase,
    GameSession,
    Outcome,
    Snapshot,
    STARTING_LIVES,
    create_session,
    new_puzzle,
)
from .timer import GameTimer, format_time
from .validator import EMPTY, find_conflicts, is_legal, revalidate

__version__ = "1.0.0"
