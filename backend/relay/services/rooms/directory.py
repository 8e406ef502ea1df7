from typing import Dict, Optional


class ConnectionDirectory:
    """Reverse index: connection sid -> name of the room it plays in.

    Holds names only, never rooms. Mutated exclusively by RoomRegistry so
    the two structures cannot drift apart.
    """

    def __init__(self):
        self._rooms_by_sid: Dict[str, str] = {}

    def bind(self, sid: str, room_name: str) -> None:
        self._rooms_by_sid[sid] = room_name

    def release(self, sid: str, room_name: Optional[str] = None) -> None:
        # Only drop the entry if it still points at the room being removed
        if room_name is None or self._rooms_by_sid.get(sid) == room_name:
            self._rooms_by_sid.pop(sid, None)

    def room_name_for(self, sid: str) -> Optional[str]:
        return self._rooms_by_sid.get(sid)

    def clear(self) -> None:
        self._rooms_by_sid.clear()

    def __contains__(self, sid) -> bool:
        return sid in self._rooms_by_sid

    def __len__(self) -> int:
        return len(self._rooms_by_sid)
