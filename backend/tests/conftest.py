import os
import sys
import random
import pytest

# Ensure the backend root (containing the `relay` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from relay import create_app, socketio
from relay.services.rooms import RoomLifecycle, RoomRegistry


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = '*'
    SOCKETIO_NAMESPACE = '/'
    MIN_ROOM_NAME_LENGTH = 2
    JOIN_SETUP_DELAY_SEC = 0
    NEXT_GAME_DELAY_SEC = 0
    TIMERS_INLINE = True
    LOG_LEVEL = 'DEBUG'


class RecordingTransport:
    """Collects outbound events and channel membership instead of sending them."""

    def __init__(self):
        self.sent = []
        self.channels = {}
        self.closed = []

    def emit(self, event, data=None, to=None):
        self.sent.append((event, data, to))

    def enter(self, sid, channel):
        self.channels.setdefault(channel, set()).add(sid)

    def close(self, channel):
        self.channels.pop(channel, None)
        self.closed.append(channel)

    def events_to(self, target):
        return [(event, data) for event, data, to in self.sent if to == target]

    def names(self):
        return [event for event, _, _ in self.sent]

    def reset(self):
        self.sent.clear()


class ManualScheduler:
    """Holds delayed continuations until the test fires them."""

    def __init__(self):
        self.pending = []

    def schedule(self, delay, fn, *args):
        self.pending.append((delay, fn, args))

    def run_all(self):
        pending, self.pending = self.pending, []
        for _, fn, args in pending:
            fn(*args)


@pytest.fixture()
def registry():
    return RoomRegistry(min_name_length=2, rng=random.Random(1234))


@pytest.fixture()
def transport():
    return RecordingTransport()


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def lifecycle(registry, transport, scheduler):
    return RoomLifecycle(registry, transport, scheduler, join_setup_delay=0.5, next_game_delay=0.5)


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app):
    clients = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass
