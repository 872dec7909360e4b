from enum import Enum


class ErrorKind(str, Enum):
    BAD_REQUEST = 'bad_request'
    INVALID_DIMENSION = 'invalid_dimension'
    INVALID_PLAYER_NAME = 'invalid_player_name'
    INVALID_ID_FORMAT = 'invalid_id_format'
    NOT_FOUND = 'not_found'
    OUT_OF_BOUNDS = 'out_of_bounds'
    OBSTACLE = 'obstacle'
    ILLEGAL_STEP = 'illegal_step'
    ALREADY_FINISHED = 'already_finished'
    PERSISTENCE_FAILURE = 'persistence_failure'
    UNEXPECTED = 'unexpected'


class MatchError(Exception):
    """Base for every failure the match engine reports.

    ``match`` is set when the request resolved to a match; it is the match
    as stored, unchanged by the failed operation.
    """
    kind = ErrorKind.UNEXPECTED

    def __init__(self, message, match=None, kind=None):
        super().__init__(message)
        self.message = message
        self.match = match
        if kind is not None:
            self.kind = kind


class InvalidDimension(MatchError):
    kind = ErrorKind.INVALID_DIMENSION


class InvalidPlayerName(MatchError):
    kind = ErrorKind.INVALID_PLAYER_NAME


class InvalidIdFormat(MatchError):
    kind = ErrorKind.INVALID_ID_FORMAT


class MatchNotFound(MatchError):
    kind = ErrorKind.NOT_FOUND


class MoveRejected(MatchError):
    """Out of bounds, obstacle or illegal step; ``kind`` says which."""


class AlreadyFinished(MatchError):
    kind = ErrorKind.ALREADY_FINISHED


class PersistenceFailure(MatchError):
    kind = ErrorKind.PERSISTENCE_FAILURE
