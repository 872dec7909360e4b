import logging
import uuid
from typing import NamedTuple, Optional

from mazewalk.models import Match, utcnow
from .errors import (
    AlreadyFinished,
    ErrorKind,
    InvalidDimension,
    InvalidIdFormat,
    InvalidPlayerName,
    MatchNotFound,
    MoveRejected,
    PersistenceFailure,
)
from .generator import DEFAULT_OBSTACLE_DIVISOR, DEFAULT_SAFETY_RATIO, generate, obstacle_target
from .grid import START, Position, goal_of
from .locks import MatchLocks
from .random_source import RandomSource
from .validator import MoveOutcome, validate

logger = logging.getLogger(__name__)

MAX_PLAYER_NAME_LENGTH = 100
MOVE_SUCCESSFUL = 'Move successful'

_REJECTIONS = {
    MoveOutcome.OUT_OF_BOUNDS: (ErrorKind.OUT_OF_BOUNDS, 'Position ({x}, {y}) is outside the maze'),
    MoveOutcome.OBSTACLE: (ErrorKind.OBSTACLE, 'Cannot move onto an obstacle at ({x}, {y})'),
    MoveOutcome.ILLEGAL_STEP: (ErrorKind.ILLEGAL_STEP, 'You can only move one cell up, down, left or right'),
}


class MoveResult(NamedTuple):
    match: Match
    message: str


def parse_id(value) -> str:
    try:
        return str(uuid.UUID(str(value)))
    except (TypeError, ValueError, AttributeError):
        raise InvalidIdFormat(f'Invalid id: {value!r}')


def completion_message(elapsed_seconds: float) -> str:
    return f'Congratulations! You reached the goal in {elapsed_seconds:.1f} seconds.'


def apply_move(match: Match, target: Position, now) -> str:
    """Apply one step to a loaded match and return the outcome message.

    Raises AlreadyFinished or MoveRejected without touching the match.
    Position, elapsed time and the finished flag change together.
    """
    if match.finished:
        raise AlreadyFinished('This match is already finished', match=match)
    target = Position(int(target[0]), int(target[1]))
    grid = match.grid
    outcome = validate(grid, match.position, target)
    if outcome is not MoveOutcome.ACCEPTED:
        kind, template = _REJECTIONS[outcome]
        raise MoveRejected(template.format(x=target.x, y=target.y), match=match, kind=kind)

    elapsed = max(0.0, (now - match.created_at).total_seconds())
    match.position = target
    match.elapsed_seconds = max(elapsed, match.elapsed_seconds or 0.0)
    match.updated_at = now
    if target == goal_of(grid):
        match.finished = True
        return completion_message(match.elapsed_seconds)
    return MOVE_SUCCESSFUL


class MatchEngine:
    """Starts matches and applies moves against the persistence collaborator.

    Holds only collaborators, never match state, so one instance serves all
    requests. Moves on the same match are serialized by ``locks``.
    """

    def __init__(self, repository, rng: Optional[RandomSource] = None, clock=utcnow,
                 locks: Optional[MatchLocks] = None, min_size: int = 3, max_size: int = 50,
                 obstacle_divisor: float = DEFAULT_OBSTACLE_DIVISOR,
                 safety_ratio: float = DEFAULT_SAFETY_RATIO):
        self.repository = repository
        self.rng = rng or RandomSource()
        self.clock = clock
        self.locks = locks or MatchLocks()
        self.min_size = min_size
        self.max_size = max_size
        self.obstacle_divisor = obstacle_divisor
        self.safety_ratio = safety_ratio

    @classmethod
    def from_config(cls, config, repository):
        return cls(
            repository,
            rng=RandomSource(config.get('MAZE_RNG_SEED')),
            min_size=int(config.get('MIN_GRID_SIZE', 3)),
            max_size=int(config.get('MAX_GRID_SIZE', 50)),
            obstacle_divisor=float(config.get('OBSTACLE_DIVISOR', DEFAULT_OBSTACLE_DIVISOR)),
            safety_ratio=float(config.get('OBSTACLE_SAFETY_RATIO', DEFAULT_SAFETY_RATIO)),
        )

    def init_match(self, player_name, n, player_id=None) -> Match:
        name = (player_name or '').strip()
        if not 1 <= len(name) <= MAX_PLAYER_NAME_LENGTH:
            raise InvalidPlayerName(f'Player name must be 1 to {MAX_PLAYER_NAME_LENGTH} characters')
        if isinstance(n, bool) or not isinstance(n, int) or not self.min_size <= n <= self.max_size:
            raise InvalidDimension(f'rowsColumns must be between {self.min_size} and {self.max_size}')
        if player_id:
            player_id = parse_id(player_id)

        target = obstacle_target(n, self.obstacle_divisor, self.safety_ratio)
        grid = generate(n, target, self.rng)
        now = self.clock()
        match = Match(
            position_x=START.x,
            position_y=START.y,
            finished=False,
            elapsed_seconds=0.0,
            created_at=now,
            updated_at=now,
        )
        match.grid = grid
        saved = self.repository.create_match(match, name, player_id=player_id)
        logger.info(f"[match-init] match={saved.id} player={name!r} n={n} obstacles={target}")
        return saved

    def move(self, match_id, target) -> MoveResult:
        match_id = self._resolve_match_id(parse_id(match_id))
        with self.locks.hold(match_id):
            match = self.repository.get_match_by_id(match_id)
            if match is None:
                raise MatchNotFound(f'Match {match_id} not found')
            try:
                message = apply_move(match, target, self.clock())
            except (AlreadyFinished, MoveRejected) as exc:
                logger.info(f"[move-reject] match={match_id} target={tuple(target)} kind={exc.kind.value}")
                raise
            saved = self.repository.update_match(match)
            if saved is None:
                raise PersistenceFailure(f'Match {match_id} could not be saved')
        logger.info(
            f"[move] match={match_id} position={tuple(saved.position)} finished={saved.finished} elapsed={saved.elapsed_seconds:.3f}s"
        )
        return MoveResult(saved, message)

    def _resolve_match_id(self, request_id: str) -> str:
        """Map a player id to that player's most recent match id.

        Clients echo ``playerData.playerId`` on moves; a match id passes through.
        """
        if self.repository.get_match_by_id(request_id) is not None:
            return request_id
        latest = self.repository.get_latest_match_for_player(request_id)
        if latest is None:
            return request_id
        logger.debug(f"[move] player={request_id} resolved to match={latest.id}")
        return latest.id

    def get_match(self, match_id) -> Match:
        match_id = parse_id(match_id)
        match = self.repository.get_match_by_id(match_id)
        if match is None:
            raise MatchNotFound(f'Match {match_id} not found')
        return match

    def latest_match_for(self, player_name) -> Match:
        match = self.repository.get_match_by_name(player_name)
        if match is None:
            raise MatchNotFound(f'No match found for player {player_name}')
        return match

    def list_matches(self):
        return self.repository.list_all_matches()
