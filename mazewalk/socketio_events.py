from flask_socketio import join_room, leave_room, emit
from mazewalk import socketio


def _room(data):
    match_id = (data or {}).get('matchId')
    if not match_id:
        emit('error', {'message': 'matchId is required'})
        return None
    return f"match:{match_id}"


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_match(data):
    room = _room(data)
    if room is None:
        return
    join_room(room)
    emit('joined', {'room': room})


def handle_leave_match(data):
    room = _room(data)
    if room is None:
        return
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on the '/ws' namespace.

    Clients join ``match:<matchId>`` to receive ``state_update`` after every
    accepted move on that match.
    """
    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('join_match', handle_join_match, namespace='/ws')
    socketio.on_event('leave_match', handle_leave_match, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')
