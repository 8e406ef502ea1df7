from flask import current_app, request
from relay import socketio
from relay.services.rooms import RoomLifecycle


def _lifecycle() -> RoomLifecycle:
    return current_app.extensions['room_lifecycle']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect(auth=None):
    _lifecycle().connect(_get_sid())


def handle_disconnect(reason=None):
    _lifecycle().disconnect(_get_sid())


def handle_create_game(data=None):
    _lifecycle().create_game(_get_sid(), data)


def handle_join_game(data=None):
    _lifecycle().join_game(_get_sid(), data)


def handle_toggle(data=None):
    _lifecycle().toggle(_get_sid(), data)


def handle_next_player(data=None):
    _lifecycle().next_player(_get_sid())


def handle_next_game(data=None):
    _lifecycle().next_game(_get_sid(), data)


def handle_end_game(data=None):
    _lifecycle().end_game(_get_sid())


def handle_delete_game(data=None):
    _lifecycle().delete_game(_get_sid())


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('createGame', handle_create_game, namespace=namespace)
    socketio.on_event('joinGame', handle_join_game, namespace=namespace)
    socketio.on_event('toggle', handle_toggle, namespace=namespace)
    socketio.on_event('nextPlayer', handle_next_player, namespace=namespace)
    socketio.on_event('nextGame', handle_next_game, namespace=namespace)
    socketio.on_event('endGame', handle_end_game, namespace=namespace)
    socketio.on_event('deleteGame', handle_delete_game, namespace=namespace)
