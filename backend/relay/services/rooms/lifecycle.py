import logging
import threading
from typing import Any, Optional

from relay.models import Role, Room, RoomState
from .errors import RoomError, UnknownConnection
from .registry import RoomRegistry


# Outbound event names
CONNECTED = 'connected'
CREATE_GAME_RES = 'createGameRes'
JOIN_GAME_RES = 'joinGameRes'
OPPONENT_JOIN_GAME = 'opponentJoinGame'
SET_PLAYER = 'setPlayer'
STARTING_PLAYER = 'startingPlayer'
TOGGLE = 'toggle'
NEXT_GAME = 'nextGame'
END_GAME = 'endGame'
OPPONENT_LEFT = 'opponentLeft'
ERROR = 'error'


class RoomLifecycle:
    """Drives rooms through awaiting_opponent -> ready_to_start -> in_progress -> ended.

    ``transport`` delivers outbound events and must provide
    ``emit(event, data, to)``, ``enter(sid, channel)`` and ``close(channel)``.
    ``scheduler`` runs delayed continuations via ``schedule(delay, fn, *args)``.

    Every entry point, continuations included, runs under one re-entrant
    lock so registry reads and writes never interleave.
    """

    def __init__(self, registry: RoomRegistry, transport, scheduler,
                 join_setup_delay: float = 0.5, next_game_delay: float = 0.5,
                 logger: Optional[logging.Logger] = None):
        self.registry = registry
        self.transport = transport
        self.scheduler = scheduler
        self.join_setup_delay = join_setup_delay
        self.next_game_delay = next_game_delay
        self.logger = logger or logging.getLogger(__name__)
        self._lock = threading.RLock()

    # ---- inbound events ----

    def connect(self, sid: str) -> None:
        self.logger.info(f"[connect] sid={sid}")
        self.transport.emit(CONNECTED, None, to=sid)

    def create_game(self, sid: str, data: Any) -> Optional[Room]:
        name = (data or {}).get('name') if isinstance(data, dict) else None
        with self._lock:
            try:
                room = self.registry.create_room(name, sid)
            except RoomError as exc:
                self.logger.info(f"[room-create-fail] sid={sid} name={name!r} reason={exc.message}")
                self.transport.emit(CREATE_GAME_RES, exc.to_dict(), to=sid)
                return None
            self.logger.info(f"[room-create] name={room.name} creator={sid} role={room.creator.role.value}")
            self.transport.enter(sid, room.channel)
            self.transport.emit(CREATE_GAME_RES, {'success': True, 'data': room.to_dict()}, to=room.channel)
            return room

    def join_game(self, sid: str, data: Any) -> Optional[Room]:
        name = (data or {}).get('name') if isinstance(data, dict) else None
        with self._lock:
            try:
                room = self.registry.join_room(name, sid)
            except RoomError as exc:
                self.logger.info(f"[room-join-fail] sid={sid} name={name!r} reason={exc.message}")
                self.transport.emit(JOIN_GAME_RES, exc.to_dict(), to=sid)
                return None
            room.state = RoomState.READY_TO_START
            self.logger.info(f"[room-join] name={room.name} opponent={sid} role={room.opponent.role.value}")
            self.transport.enter(sid, room.channel)
            self.transport.emit(OPPONENT_JOIN_GAME, {'success': True}, to=room.channel)
            self.transport.emit(JOIN_GAME_RES, {'success': True, 'data': room.to_dict()}, to=room.channel)
            self.scheduler.schedule(self.join_setup_delay, self._start_match, room.name, room)
            return room

    def toggle(self, sid: str, data: Any) -> None:
        with self._lock:
            target = self._opponent_or_none(sid, TOGGLE)
            if target:
                self.transport.emit(TOGGLE, data, to=target)

    def next_player(self, sid: str) -> None:
        with self._lock:
            room = self.registry.find_room_by_connection(sid)
            if not self._in_progress(room, sid, 'nextPlayer'):
                return
            target = self._opponent_or_none(sid, 'nextPlayer')
            if target:
                self.transport.emit(STARTING_PLAYER, None, to=target)

    def next_game(self, sid: str, data: Any) -> None:
        with self._lock:
            role = Role.parse(data)
            if role is None:
                self.transport.emit(ERROR, {'message': 'role must be one of x, o'}, to=sid)
                return
            room = self.registry.find_room_by_connection(sid)
            if not self._in_progress(room, sid, NEXT_GAME):
                return
            target = self._opponent_or_none(sid, NEXT_GAME)
            if not target:
                return
            self.transport.emit(NEXT_GAME, None, to=target)
            self.scheduler.schedule(self.next_game_delay, self._signal_next_starter, room.name, room, role)

    def end_game(self, sid: str) -> Optional[Room]:
        with self._lock:
            room = self.registry.find_room_by_connection(sid)
            if room is None:
                self.logger.debug(f"[end-game-skip] sid={sid} reason=no room")
                return None
            opponent = room.opponent_of(sid)
            if opponent is not None:
                self.transport.emit(END_GAME, None, to=opponent.sid)
            self._finish(room, reason='end_game')
            return room

    def delete_game(self, sid: str) -> Optional[Room]:
        with self._lock:
            room = self.registry.find_room_by_connection(sid)
            if room is None:
                return None
            self._finish(room, reason='delete_game')
            return room

    def disconnect(self, sid: str) -> None:
        with self._lock:
            rooms = self.registry.remove_rooms_by_connection(sid)
            self.logger.info(f"[disconnect] sid={sid} rooms={[room.name for room in rooms]}")
            for room in rooms:
                room.state = RoomState.ENDED
                self.transport.emit(OPPONENT_LEFT, None, to=room.channel)
                self.transport.close(room.channel)

    # ---- read-only views ----

    def rooms_snapshot(self):
        with self._lock:
            return self.registry.snapshot()

    def room_summary(self, name: str) -> Optional[dict]:
        with self._lock:
            room = self.registry.get(name)
            return room.summary() if room else None

    # ---- delayed continuations ----

    def _start_match(self, name: str, expected: Room) -> None:
        with self._lock:
            room = self.registry.get(name)
            if room is not expected or room.state is not RoomState.READY_TO_START:
                self.logger.info(f"[timer-abort] name={name} stage=start_match room gone or changed")
                return
            for participant in room.participants():
                self.transport.emit(SET_PLAYER, participant.role.value, to=participant.sid)
            starter = room.participant_with_role(Role.pick_random(self.registry.rng))
            self.transport.emit(STARTING_PLAYER, None, to=starter.sid)
            room.state = RoomState.IN_PROGRESS
            self.logger.info(f"[timer-fire] name={name} stage=start_match starter={starter.sid} role={starter.role.value}")

    def _signal_next_starter(self, name: str, expected: Room, excluded: Role) -> None:
        with self._lock:
            room = self.registry.get(name)
            if room is not expected or room.state is not RoomState.IN_PROGRESS:
                self.logger.info(f"[timer-abort] name={name} stage=next_game room gone or changed")
                return
            starter = room.participant_with_role(excluded.complement())
            self.transport.emit(STARTING_PLAYER, None, to=starter.sid)
            self.logger.info(f"[timer-fire] name={name} stage=next_game starter={starter.sid}")

    # ---- helpers ----

    def _in_progress(self, room: Optional[Room], sid: str, event: str) -> bool:
        if room is None:
            self.logger.debug(f"[relay-drop] event={event} sid={sid} reason=no room")
            return False
        if room.state is not RoomState.IN_PROGRESS:
            self.logger.debug(f"[relay-drop] event={event} sid={sid} reason=not started")
            return False
        return True

    def _opponent_or_none(self, sid: str, event: str) -> Optional[str]:
        try:
            room = self.registry.room_for(sid)
        except UnknownConnection:
            self.logger.debug(f"[relay-drop] event={event} sid={sid} reason=no room")
            return None
        opponent = room.opponent_of(sid)
        if opponent is None:
            self.logger.debug(f"[relay-drop] event={event} sid={sid} reason=no opponent")
            return None
        return opponent.sid

    def _finish(self, room: Room, reason: str) -> None:
        room.state = RoomState.ENDED
        self.registry.remove_room(room.name)
        self.transport.close(room.channel)
        self.logger.info(f"[room-end] name={room.name} reason={reason}")
