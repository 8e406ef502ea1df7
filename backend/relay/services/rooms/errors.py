class RoomError(Exception):
    """Recoverable room failure reported back to the requesting connection."""

    message = 'room error'

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self):
        return {'success': False, 'message': self.message}


class InvalidName(RoomError):
    message = 'invalid game name'


class RoomAlreadyExists(RoomError):
    message = 'game already exist'


class RoomNotFound(RoomError):
    message = 'game does not exist'


class RoomFull(RoomError):
    message = 'Game in progress'


class SelfJoin(RoomError):
    message = 'you cannot join game created by you'


class ConnectionBusy(RoomError):
    message = 'you are already in a game'


class UnknownConnection(RoomError):
    message = 'you are not in a game'
