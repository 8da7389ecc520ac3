from flask_login import current_user
from flask_socketio import emit, join_room, leave_room

from wordgroups import socketio
from wordgroups.models import Member


def _room(group_id) -> str:
    return f"group:{group_id}"


def _parse_group_id(data):
    try:
        return int((data or {}).get('group_id'))
    except (TypeError, ValueError):
        return None


def notify_group(group_id: int, event: str) -> None:
    """Tell every client in the group room to re-fetch; no game state is pushed."""
    socketio.emit(event, {'group_id': group_id}, to=_room(group_id), namespace='/ws')


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_group(data):
    group_id = _parse_group_id(data)
    if group_id is None:
        emit('error', {'message': 'group_id is required'})
        return
    if not current_user.is_authenticated:
        emit('error', {'message': 'Not authenticated'})
        return
    if Member.query.filter_by(id=current_user.id, group_id=group_id).first() is None:
        emit('error', {'message': 'Not authorized to access this group'})
        return
    room = _room(group_id)
    join_room(room)
    emit('joined', {'room': room})


def handle_leave_group(data):
    group_id = _parse_group_id(data)
    if group_id is None:
        emit('error', {'message': 'group_id is required'})
        return
    room = _room(group_id)
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    namespaces = ['/ws', '/'] if testing else ['/ws']
    for namespace in namespaces:
        socketio.on_event('connect', handle_connect, namespace=namespace)
        socketio.on_event('join_group', handle_join_group, namespace=namespace)
        socketio.on_event('leave_group', handle_leave_group, namespace=namespace)
        socketio.on_event('ping', handle_ping, namespace=namespace)
