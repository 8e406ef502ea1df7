from typing import Callable


class SocketIOScheduler:
    """Runs delayed continuations on Socket.IO background tasks.

    Timers are fire-and-forget and cannot be cancelled; continuations are
    expected to re-check their room when they wake up.
    """

    def __init__(self, app, socketio):
        self.app = app
        self.socketio = socketio

    def schedule(self, delay: float, fn: Callable, *args) -> None:
        # Deterministic mode for tests: skip the sleep and run in-line
        if self.app.config.get('TIMERS_INLINE'):
            fn(*args)
            return

        def _worker():
            if delay > 0:
                self.socketio.sleep(delay)
            with self.app.app_context():
                try:
                    fn(*args)
                except Exception:
                    self.app.logger.exception(f"[timer-error] continuation={getattr(fn, '__name__', fn)}")

        self.socketio.start_background_task(_worker)


class SocketIOTransport:
    """Delivers lifecycle events through a Flask-SocketIO server."""

    def __init__(self, socketio, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def emit(self, event: str, data=None, to=None) -> None:
        if data is None:
            self.socketio.emit(event, to=to, namespace=self.namespace)
        else:
            self.socketio.emit(event, data, to=to, namespace=self.namespace)

    def enter(self, sid: str, channel: str) -> None:
        self.socketio.server.enter_room(sid, channel, namespace=self.namespace)

    def close(self, channel: str) -> None:
        self.socketio.close_room(channel, namespace=self.namespace)
