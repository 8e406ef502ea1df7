import logging

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from relay.config import Config, cors_origins, validate_config

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    validate_config(flask_app.config)
    flask_app.logger.setLevel(getattr(logging, str(flask_app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    allowed_origins = cors_origins(flask_app.config.get('CORS_ORIGINS'))
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One room registry per application instance, discarded with it
    from relay.services.rooms import RoomLifecycle, RoomRegistry
    from relay.services.rooms.scheduler import SocketIOScheduler, SocketIOTransport
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    flask_app.extensions['room_lifecycle'] = RoomLifecycle(
        RoomRegistry(min_name_length=int(flask_app.config.get('MIN_ROOM_NAME_LENGTH', 2))),
        SocketIOTransport(socketio, namespace=namespace),
        SocketIOScheduler(flask_app, socketio),
        join_setup_delay=float(flask_app.config.get('JOIN_SETUP_DELAY_SEC', 0.5)),
        next_game_delay=float(flask_app.config.get('NEXT_GAME_DELAY_SEC', 0.5)),
        logger=flask_app.logger,
    )

    # Import and register blueprints here
    from relay.main import main
    flask_app.register_blueprint(main)

    from relay.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    # Register Socket.IO event handlers
    from relay.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    @click.command('serve')
    @click.option('--host', default=None, help='Interface to bind (defaults to HOST).')
    @click.option('--port', default=None, type=int, help='Port to listen on (defaults to PORT).')
    def serve_command(host, port):
        """Runs the Socket.IO relay server."""
        host = host or flask_app.config.get('HOST', '0.0.0.0')
        port = port or int(flask_app.config.get('PORT', 5000))
        flask_app.logger.info(f"[serve] listening on {host}:{port}")
        socketio.run(flask_app, host=host, port=port)

    flask_app.cli.add_command(serve_command)

    return flask_app
