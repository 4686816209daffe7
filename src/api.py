import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

import session as game_session
from core import Direction, GameProgressState

logger = logging.getLogger(__name__)

# Initialize the rate limiter
limiter = Limiter(key_func=get_remote_address)
app = FastAPI(
    title="Number Tiles Game API",
    description="Drives a single in-memory game session: create it, start it, "\
                "move tiles, pause, resume and reset.",
    version="1.0.0"
)
app.state.limiter = limiter
app.state.session = None
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

STATUS_MESSAGES = {
    GameProgressState.NOT_STARTED: "Select the seed value, goal value and press ready.",
    GameProgressState.IN_PROGRESS: "Game ongoing. Good Luck!",
    GameProgressState.PAUSED: "Game paused. Press continue to resume the game or reset.",
    GameProgressState.WON: "Congratulations, You won!",
    GameProgressState.LOST: "You lost!",
}

# --- Pydantic Models for API requests and responses ---

class NewSessionSettings(BaseModel):
    """Settings for creating a new session. Bounds are checked by the session itself."""
    size: int = Field(default=4, description="Size of the N x N game board.")
    seed: int = Field(default=1, description="Seed of the tile generator (1-99).")
    goal_exponent: int = Field(
        default=11,
        description="Exponent of the goal tile, e.g. 11 for 2048."
    )
    win_takes_precedence: bool = Field(
        default=False,
        description="Report a win instead of a loss when a winning move also fills the board."
    )
    spawn_on_noop: bool = Field(
        default=True,
        description="Spawn a tile even when the move did not change the board."
    )
    deterministic_spawns: bool = Field(
        default=True,
        description="Spawn tiles after moves from the seeded generator."
    )

class ResetSettings(BaseModel):
    """Optional new seed and goal for the next game."""
    seed: Optional[int] = Field(default=None, description="New seed, or keep the current one.")
    goal_exponent: Optional[int] = Field(default=None, description="New goal exponent, or keep the current one.")

class SessionStateData(BaseModel):
    """Represents the state of the current session."""
    board: List[List[int]] = Field(..., description="The N x N game board, represented as a list of lists.")
    state: GameProgressState = Field(..., description="Current state of the session.")
    goal_value: int = Field(..., gt=0, description="The tile value required to win.")
    seed: int = Field(..., description="Seed of the current game.")
    board_size: int = Field(..., gt=0, description="The dimension N of the N x N board.")
    message: str = Field(..., description="Status text for the player.")

class CellData(BaseModel):
    row: int
    column: int
    value: int

class MoveRequestData(BaseModel):
    """Data required to make a move."""
    direction: Direction = Field(..., description="Direction of the move (UP, DOWN, LEFT, RIGHT).")

class MoveResponseData(SessionStateData):
    """Response after a move, including which cells need redrawing."""
    changed: bool = Field(..., description="True if the slide or merge changed the board.")
    won: bool = Field(..., description="True if the goal value is on the board after the move.")
    moves_available: bool = Field(..., description="True if some direction would still change the board.")
    changed_cells: List[CellData] = Field(..., description="Cells whose value differs from before the move.")

# --- Helpers ---

def _current_session() -> game_session.GameSession:
    current = app.state.session
    if current is None:
        raise HTTPException(status_code=404, detail="No game session; POST /session first.")
    return current

def _state_data(current: game_session.GameSession) -> SessionStateData:
    state = current.state()
    return SessionStateData(
        board=current.board.values(),
        state=state,
        goal_value=current.goal_value,
        seed=current.seed,
        board_size=current.settings.size,
        message=STATUS_MESSAGES[state],
    )

# --- API Endpoints ---

@app.post("/session", response_model=SessionStateData, summary="Create a New Game Session")
@limiter.limit("100/minute")
async def create_session(request: Request, settings: NewSessionSettings):
    """
    Replaces the current session with a new, not yet started one.

    - **size**: Dimension of the N x N board (2-16). Default is 4.
    - **seed**: Seed of the tile generator (1-99). Default is 1.
    - **goal_exponent**: The goal tile is 2 ** goal_exponent (2 to size * size). Default is 11.
    """
    try:
        app.state.session = game_session.new_session(
            size=settings.size,
            seed=settings.seed,
            goal_exponent=settings.goal_exponent,
            win_takes_precedence=settings.win_takes_precedence,
            spawn_on_noop=settings.spawn_on_noop,
            deterministic_spawns=settings.deterministic_spawns,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _state_data(app.state.session)

@app.get("/session", response_model=SessionStateData, summary="Get the Current Session")
@limiter.limit("100/minute")
async def get_session(request: Request):
    return _state_data(_current_session())

@app.post("/session/start", response_model=SessionStateData, summary="Start the Game")
@limiter.limit("100/minute")
async def start_session(request: Request):
    current = _current_session()
    current.start()
    return _state_data(current)

@app.post("/session/reset", response_model=SessionStateData, summary="Reset the Game")
@limiter.limit("100/minute")
async def reset_session(request: Request, settings: Optional[ResetSettings] = None):
    """Clears the board. The next start uses the given seed and goal, if any."""
    current = _current_session()
    settings = settings or ResetSettings()
    try:
        current.reset(seed=settings.seed, goal_exponent=settings.goal_exponent)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _state_data(current)

@app.post("/session/pause", response_model=SessionStateData, summary="Pause the Game")
@limiter.limit("100/minute")
async def pause_session(request: Request):
    current = _current_session()
    current.pause()
    return _state_data(current)

@app.post("/session/resume", response_model=SessionStateData, summary="Resume the Game")
@limiter.limit("100/minute")
async def resume_session(request: Request):
    current = _current_session()
    current.resume()
    data = _state_data(current)
    if data.state == GameProgressState.IN_PROGRESS:
        data.message = "Game continued! Good luck!"
    return data

@app.post("/session/move", response_model=MoveResponseData, summary="Make a Move in the Game")
@limiter.limit("100/minute")
async def make_move(request: Request, request_data: MoveRequestData):
    """
    Processes a player's move.

    The session will:
    1. Slide and merge the tiles in the chosen direction.
    2. Check for a win, then for a full board (a full board loses).
    3. If the game goes on, add a new random tile (2 or 4).

    Moves sent while the game is not in progress leave the board unchanged.
    """
    current = _current_session()
    try:
        outcome = current.move(request_data.direction)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Error processing move: {str(e)}")
    except Exception as e:
        logger.error(f"Unexpected error in /session/move: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"An unexpected server error occurred while processing the move: {str(e)}")

    return MoveResponseData(
        board=outcome.cells,
        state=outcome.state,
        goal_value=current.goal_value,
        seed=current.seed,
        board_size=current.settings.size,
        message=STATUS_MESSAGES[outcome.state],
        changed=outcome.changed,
        won=outcome.won,
        moves_available=outcome.moves_available,
        changed_cells=[CellData(row=c.row, column=c.column, value=c.value) for c in outcome.changed_cells],
    )
