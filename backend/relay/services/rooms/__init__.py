"""Room services: registry, connection index and lifecycle.

Pure in-memory domain logic. Socket handlers import from here and hand
in a transport, keeping Socket.IO concerns out of the state machine.
"""

from .errors import (
    RoomError,
    InvalidName,
    RoomAlreadyExists,
    RoomNotFound,
    RoomFull,
    SelfJoin,
    ConnectionBusy,
    UnknownConnection,
)
from .directory import ConnectionDirectory
from .registry import RoomRegistry
from .lifecycle import RoomLifecycle

__all__ = [
    'RoomError',
    'InvalidName',
    'RoomAlreadyExists',
    'RoomNotFound',
    'RoomFull',
    'SelfJoin',
    'ConnectionBusy',
    'UnknownConnection',
    'ConnectionDirectory',
    'RoomRegistry',
    'RoomLifecycle',
]
