# session.py
# Game session: owns the board and spawner and runs the per-turn protocol
# (apply move -> check win -> check board full -> spawn).

import logging
from typing import List, NamedTuple, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, model_validator

import core
from board import Board
from core import Direction, GameProgressState
from spawner import Spawner

logger = logging.getLogger(__name__)

MIN_BOARD_SIZE = 2
MAX_BOARD_SIZE = 16

class InvalidConfigurationError(ValueError):
    """Raised when session settings are outside the supported bounds."""

class SessionSettings(BaseModel):
    """Settings for a game session."""
    size: int = Field(
        default=4,
        ge=MIN_BOARD_SIZE,
        le=MAX_BOARD_SIZE,
        description="Size of the N x N game board."
    )
    seed: int = Field(
        default=1,
        ge=1,
        le=99,
        description="Seed of the tile generator; the same seed replays the same game."
    )
    goal_exponent: int = Field(
        default=11,
        ge=2,
        description="The goal tile is 2 ** goal_exponent (11 gives 2048)."
    )
    deterministic_spawns: bool = Field(
        default=True,
        description="Spawn tiles after moves from the seeded generator."
    )
    spawn_on_noop: bool = Field(
        default=True,
        description="Spawn a tile even when the move did not change the board."
    )
    win_takes_precedence: bool = Field(
        default=False,
        description="Report WON instead of LOST when a winning move also fills the board."
    )

    @model_validator(mode="after")
    def _goal_fits_board(self):
        if self.goal_exponent > self.size * self.size:
            raise ValueError(
                f"goal_exponent must be at most {self.size * self.size} on a {self.size}x{self.size} board."
            )
        return self

    @property
    def goal_value(self) -> int:
        return 2 ** self.goal_exponent

def build_settings(**values) -> SessionSettings:
    """
    Validates session settings.
    Raises:
        InvalidConfigurationError: If any value is out of bounds.
    """
    try:
        return SessionSettings(**values)
    except ValidationError as e:
        raise InvalidConfigurationError(str(e)) from e

class CellChange(NamedTuple):
    row: int
    column: int
    value: int

class MoveOutcome(NamedTuple):
    """Result of a single session move."""
    state: GameProgressState
    changed: bool
    won: bool
    spawned: Optional[Tuple[int, int, int]]
    moves_available: bool
    cells: List[List[int]]
    changed_cells: List[CellChange]

def _diff(before: List[List[int]], after: List[List[int]]) -> List[CellChange]:
    changes = []
    for r, (old_row, new_row) in enumerate(zip(before, after)):
        for c, (old, new) in enumerate(zip(old_row, new_row)):
            if old != new:
                changes.append(CellChange(r, c, new))
    return changes

class GameSession:
    """
    A single game on a single board.

    States: NOT_STARTED -> IN_PROGRESS <-> PAUSED, IN_PROGRESS -> WON | LOST.
    WON and LOST only leave through reset(). Callers must not interleave calls
    from several threads.
    """

    def __init__(self, settings: Optional[SessionSettings] = None):
        self.settings = settings or SessionSettings()
        self.board = Board(self.settings.size)
        self.spawner = Spawner(self.settings.seed)
        self._state = GameProgressState.NOT_STARTED
        self._allocated = False

    @property
    def goal_value(self) -> int:
        return self.settings.goal_value

    @property
    def seed(self) -> int:
        return self.settings.seed

    def state(self) -> GameProgressState:
        return self._state

    def start(self) -> GameProgressState:
        """Populates the board and begins play. Only valid from NOT_STARTED."""
        if self._state != GameProgressState.NOT_STARTED:
            logger.debug("start() ignored in state %s", self._state.name)
            return self._state

        if not self._allocated:
            self.board.init_empty()
            self.spawner.populate_initial(self.board, self.seed)
            self._allocated = True
        else:
            self.spawner.populate_initial_reset(self.board, self.seed)

        self._state = GameProgressState.IN_PROGRESS
        logger.info("Game started: size=%d seed=%d goal=%d",
                    self.settings.size, self.seed, self.goal_value)
        return self._state

    def reset(self, seed: Optional[int] = None, goal_exponent: Optional[int] = None) -> GameProgressState:
        """
        Clears the board and returns to NOT_STARTED, optionally with a new seed or goal.
        Raises:
            InvalidConfigurationError: If the new seed or goal is out of bounds.
        """
        updates = {}
        if seed is not None:
            updates["seed"] = seed
        if goal_exponent is not None:
            updates["goal_exponent"] = goal_exponent
        if updates:
            self.settings = build_settings(**{**self.settings.model_dump(), **updates})

        if self._allocated:
            self.board.fill_with_zeros()
        self._state = GameProgressState.NOT_STARTED
        logger.info("Game reset")
        return self._state

    def pause(self) -> GameProgressState:
        if self._state == GameProgressState.IN_PROGRESS:
            self._state = GameProgressState.PAUSED
        return self._state

    def resume(self) -> GameProgressState:
        if self._state == GameProgressState.PAUSED:
            self._state = GameProgressState.IN_PROGRESS
        return self._state

    def move(self, direction: Direction) -> MoveOutcome:
        """
        Plays one turn in the given direction.

        The win check runs first, then the full-board check; unless
        win_takes_precedence is set, a winning move that fills the board loses.
        A tile is spawned only when the game is still in progress.
        Raises:
            ValueError: If direction is not a Direction or one of its names.
        """
        direction = Direction(direction)
        before = self.board.values()
        if self._state != GameProgressState.IN_PROGRESS:
            logger.debug("move(%s) ignored in state %s", direction, self._state.name)
            return MoveOutcome(self._state, False, False, None,
                               core.has_legal_moves(self.board), before, [])

        changed = core.apply_move(self.board, direction)
        won = core.check_for_win(self.board, self.goal_value)
        spawned = None

        if won:
            self._state = GameProgressState.WON
        if self.board.is_full() and not (won and self.settings.win_takes_precedence):
            self._state = GameProgressState.LOST
        elif not won and (changed or self.settings.spawn_on_noop):
            spawned = self.spawner.spawn_one(self.board, self.settings.deterministic_spawns)

        if self._state != GameProgressState.IN_PROGRESS:
            logger.info("Game over: %s", self._state.name)

        after = self.board.values()
        return MoveOutcome(
            state=self._state,
            changed=changed,
            won=won,
            spawned=spawned,
            moves_available=core.has_legal_moves(self.board),
            cells=after,
            changed_cells=_diff(before, after),
        )

def new_session(size: int = 4, seed: int = 1, goal_exponent: int = 11, **options) -> GameSession:
    """
    Creates a validated session.
    Raises:
        InvalidConfigurationError: If size, seed or goal_exponent are out of bounds.
    """
    settings = build_settings(size=size, seed=seed, goal_exponent=goal_exponent, **options)
    return GameSession(settings)
