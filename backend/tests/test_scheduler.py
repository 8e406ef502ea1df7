from flask import current_app

from relay.services.rooms.scheduler import SocketIOScheduler, SocketIOTransport


class FakeServer:
    def __init__(self):
        self.entered = []

    def enter_room(self, sid, room, namespace=None):
        self.entered.append((sid, room, namespace))


class FakeSocketIO:
    def __init__(self):
        self.server = FakeServer()
        self.tasks = []
        self.slept = []
        self.emitted = []
        self.closed = []

    def start_background_task(self, target, *args):
        self.tasks.append((target, args))

    def sleep(self, seconds):
        self.slept.append(seconds)

    def emit(self, event, *args, **kwargs):
        self.emitted.append((event, args, kwargs))

    def close_room(self, room, namespace=None):
        self.closed.append((room, namespace))


def test_inline_timers_run_immediately(flask_app):
    calls = []
    SocketIOScheduler(flask_app, FakeSocketIO()).schedule(5, calls.append, 'fired')
    assert calls == ['fired']


def test_background_timer_sleeps_then_runs_in_app_context(flask_app):
    flask_app.config['TIMERS_INLINE'] = False
    fake = FakeSocketIO()
    seen = []
    SocketIOScheduler(flask_app, fake).schedule(0.5, lambda tag: seen.append((tag, current_app.name)), 'go')
    assert seen == []

    target, args = fake.tasks[0]
    target(*args)
    assert fake.slept == [0.5]
    assert seen == [('go', flask_app.name)]


def test_background_timer_errors_are_logged(flask_app, caplog):
    flask_app.config['TIMERS_INLINE'] = False
    fake = FakeSocketIO()

    def boom():
        raise RuntimeError('late')

    SocketIOScheduler(flask_app, fake).schedule(0, boom)
    target, args = fake.tasks[0]
    target(*args)
    assert fake.slept == []
    assert '[timer-error]' in caplog.text


def test_transport_targets_namespace():
    fake = FakeSocketIO()
    transport = SocketIOTransport(fake, namespace='/game')
    transport.emit('toggle', {'index': 1}, to='sid-2')
    transport.emit('startingPlayer', to='sid-1')
    transport.enter('sid-1', 'room:alpha')
    transport.close('room:alpha')

    assert fake.emitted == [
        ('toggle', ({'index': 1},), {'to': 'sid-2', 'namespace': '/game'}),
        ('startingPlayer', (), {'to': 'sid-1', 'namespace': '/game'}),
    ]
    assert fake.server.entered == [('sid-1', 'room:alpha', '/game')]
    assert fake.closed == [('room:alpha', '/game')]
