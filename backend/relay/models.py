import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List


class Role(str, Enum):
    X = 'x'
    O = 'o'

    def complement(self) -> 'Role':
        return Role.O if self is Role.X else Role.X

    @classmethod
    def pick_random(cls, rng: Optional[random.Random] = None) -> 'Role':
        """Uniform choice between the two symbols."""
        return (rng or random).choice([cls.X, cls.O])

    @classmethod
    def parse(cls, value) -> Optional['Role']:
        if isinstance(value, dict):
            value = value.get('role')
        if isinstance(value, Role):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                return None
        return None


class RoomState(str, Enum):
    AWAITING_OPPONENT = 'awaiting_opponent'
    READY_TO_START = 'ready_to_start'
    IN_PROGRESS = 'in_progress'
    ENDED = 'ended'


@dataclass(frozen=True)
class Participant:
    sid: str
    role: Role

    def to_dict(self):
        return {'sid': self.sid, 'role': self.role.value}


@dataclass(eq=False)
class Room:
    name: str
    creator: Participant
    opponent: Optional[Participant] = None
    state: RoomState = RoomState.AWAITING_OPPONENT
    created_at: float = field(default_factory=time.time)

    @property
    def opponent_role(self) -> Role:
        return self.creator.role.complement()

    @property
    def is_full(self) -> bool:
        return self.opponent is not None

    @property
    def channel(self) -> str:
        # Socket.IO also uses every sid as a room, so keep channels namespaced
        return f"room:{self.name}"

    def participants(self) -> List[Participant]:
        return [p for p in (self.creator, self.opponent) if p is not None]

    def participant_for(self, sid: str) -> Optional[Participant]:
        for participant in self.participants():
            if participant.sid == sid:
                return participant
        return None

    def opponent_of(self, sid: str) -> Optional[Participant]:
        if self.creator.sid == sid:
            return self.opponent
        if self.opponent is not None and self.opponent.sid == sid:
            return self.creator
        return None

    def participant_with_role(self, role: Role) -> Optional[Participant]:
        for participant in self.participants():
            if participant.role is role:
                return participant
        return None

    def to_dict(self):
        return {
            'name': self.name,
            'state': self.state.value,
            'creator': self.creator.to_dict(),
            'opponent': self.opponent.to_dict() if self.opponent else {'sid': None, 'role': self.opponent_role.value},
            'created_at': self.created_at,
        }

    def summary(self):
        return {
            'name': self.name,
            'state': self.state.value,
            'players': len(self.participants()),
            'is_full': self.is_full,
        }
