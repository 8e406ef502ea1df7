import random
from typing import Dict, List, Optional

from relay.models import Participant, Role, Room, RoomState
from .directory import ConnectionDirectory
from .errors import (
    ConnectionBusy,
    InvalidName,
    RoomAlreadyExists,
    RoomFull,
    RoomNotFound,
    SelfJoin,
    UnknownConnection,
)


class RoomRegistry:
    """Owns every live Room, keyed by name, plus the sid reverse index.

    Every mutation updates both maps together; callers never touch them
    directly.
    """

    def __init__(self, min_name_length: int = 2, rng: Optional[random.Random] = None):
        self.min_name_length = min_name_length
        self.rng = rng or random.Random()
        self._rooms: Dict[str, Room] = {}
        self.directory = ConnectionDirectory()

    def create_room(self, name, creator_sid: str) -> Room:
        if not isinstance(name, str) or len(name) < self.min_name_length:
            raise InvalidName()
        if name in self._rooms:
            raise RoomAlreadyExists()
        if creator_sid in self.directory:
            raise ConnectionBusy()

        room = Room(name=name, creator=Participant(creator_sid, Role.pick_random(self.rng)))
        self._rooms[name] = room
        self.directory.bind(creator_sid, name)
        return room

    def join_room(self, name, joiner_sid: str) -> Room:
        room = self._rooms.get(name) if isinstance(name, str) else None
        if room is None or room.state is RoomState.ENDED:
            raise RoomNotFound()
        if room.is_full:
            raise RoomFull()
        if room.creator.sid == joiner_sid:
            raise SelfJoin()
        if joiner_sid in self.directory:
            raise ConnectionBusy()

        room.opponent = Participant(joiner_sid, room.opponent_role)
        self.directory.bind(joiner_sid, name)
        return room

    def remove_room(self, name: str) -> Optional[Room]:
        room = self._rooms.pop(name, None)
        if room is None:
            return None
        for participant in room.participants():
            self.directory.release(participant.sid, name)
        return room

    def get(self, name: str) -> Optional[Room]:
        return self._rooms.get(name)

    def find_room_by_connection(self, sid: str) -> Optional[Room]:
        name = self.directory.room_name_for(sid)
        if name is None:
            return None
        return self._rooms.get(name)

    def room_for(self, sid: str) -> Room:
        room = self.find_room_by_connection(sid)
        if room is None:
            raise UnknownConnection()
        return room

    def find_opponent_connection(self, sid: str) -> Optional[str]:
        room = self.find_room_by_connection(sid)
        if room is None:
            return None
        opponent = room.opponent_of(sid)
        return opponent.sid if opponent else None

    def remove_rooms_by_connection(self, sid: str) -> List[Room]:
        removed = []
        room = self.find_room_by_connection(sid)
        while room is not None:
            removed.append(self.remove_room(room.name))
            room = self.find_room_by_connection(sid)
        return removed

    def snapshot(self) -> List[dict]:
        return [room.summary() for room in self._rooms.values()]

    def clear(self) -> None:
        self._rooms.clear()
        self.directory.clear()

    def __contains__(self, name) -> bool:
        return name in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)
