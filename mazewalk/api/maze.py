from flask import Blueprint, jsonify, request, current_app
from werkzeug.exceptions import HTTPException
from mazewalk import socketio
from mazewalk.services.maze.errors import ErrorKind, MatchError
from mazewalk.services.maze.grid import Position, cell_codes


maze = Blueprint('maze', __name__)

GENERIC_FAILURE = 'Something went wrong, please try again.'

# Validated rejections are answered with 200 so the client can show the message
_STATUS = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.INVALID_DIMENSION: 400,
    ErrorKind.INVALID_PLAYER_NAME: 400,
    ErrorKind.INVALID_ID_FORMAT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.OUT_OF_BOUNDS: 200,
    ErrorKind.OBSTACLE: 200,
    ErrorKind.ILLEGAL_STEP: 200,
    ErrorKind.ALREADY_FINISHED: 200,
    ErrorKind.PERSISTENCE_FAILURE: 500,
    ErrorKind.UNEXPECTED: 500,
}


def _engine():
    return current_app.extensions['maze_engine']


def _failure(exc: MatchError):
    status = _STATUS.get(exc.kind, 500)
    message = exc.message
    if status >= 500:
        current_app.logger.error(f"[{exc.kind.value}] {exc.message}", exc_info=exc)
        message = GENERIC_FAILURE
    payload = {'success': False, 'message': message, 'error': exc.kind.value}
    if exc.match is not None:
        payload['playerData'] = exc.match.to_dict()
    return jsonify(payload), status


def _int_field(data, key):
    """Read an integer body field; JSON numbers and integral strings only."""
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(key)
    return int(value)


def _bad_request(message):
    return jsonify({'success': False, 'message': message, 'error': ErrorKind.BAD_REQUEST.value}), 400


@maze.errorhandler(Exception)
def handle_unexpected(exc):
    if isinstance(exc, HTTPException):
        return exc
    current_app.logger.exception(f"[unexpected] {request.method} {request.path}")
    return jsonify({'success': False, 'message': GENERIC_FAILURE, 'error': ErrorKind.UNEXPECTED.value}), 500


@maze.route('/config', methods=['GET'])
def get_config():
    engine = _engine()
    return jsonify({
        'minRowsColumns': engine.min_size,
        'maxRowsColumns': engine.max_size,
        'cells': cell_codes(),
    })


@maze.route('/init', methods=['POST'])
def init_match():
    data = request.get_json(silent=True) or {}
    try:
        rows_columns = _int_field(data, 'rowsColumns')
    except (TypeError, ValueError):
        return _bad_request('rowsColumns must be an integer')
    try:
        match = _engine().init_match(data.get('playerName'), rows_columns, player_id=data.get('playerId'))
    except MatchError as exc:
        return _failure(exc)
    return jsonify({'grid': match.grid, 'playerData': match.to_dict()}), 201


@maze.route('/move', methods=['POST'])
def move():
    data = request.get_json(silent=True) or {}
    # playerId may name the player instead; the engine then uses their latest match
    match_id = data.get('matchId') or data.get('playerId')
    try:
        target = Position(_int_field(data, 'x'), _int_field(data, 'y'))
    except (TypeError, ValueError):
        return _bad_request('x and y must be integers')
    try:
        result = _engine().move(match_id, target)
    except MatchError as exc:
        return _failure(exc)

    match = result.match
    socketio.emit(
        'state_update',
        {'matchId': match.id, 'finished': bool(match.finished)},
        to=f"match:{match.id}",
        namespace='/ws',
    )
    return jsonify({'success': True, 'message': result.message, 'playerData': match.to_dict()})


@maze.route('/matches', methods=['GET'])
def list_matches():
    return jsonify([m.to_dict(include_grid=False) for m in _engine().list_matches()])


@maze.route('/matches/<string:match_id>', methods=['GET'])
def get_match(match_id):
    try:
        match = _engine().get_match(match_id)
    except MatchError as exc:
        return _failure(exc)
    return jsonify(match.to_dict())


@maze.route('/players/<string:player_name>/match', methods=['GET'])
def get_latest_match(player_name):
    try:
        match = _engine().latest_match_for(player_name)
    except MatchError as exc:
        return _failure(exc)
    return jsonify(match.to_dict())
