import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma separated list, '*' allows any origin
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '5000'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    MIN_ROOM_NAME_LENGTH = int(os.environ.get('MIN_ROOM_NAME_LENGTH', '2'))
    # Grace periods (seconds) before role/turn signals go out
    JOIN_SETUP_DELAY_SEC = float(os.environ.get('JOIN_SETUP_DELAY_SEC', '0.5'))
    NEXT_GAME_DELAY_SEC = float(os.environ.get('NEXT_GAME_DELAY_SEC', '0.5'))
    # Run delayed continuations synchronously (tests only)
    TIMERS_INLINE = False


def cors_origins(value):
    if not value or value.strip() == '*':
        return '*'
    return [origin.strip() for origin in value.split(',') if origin.strip()]


def validate_config(config) -> None:
    """Fail fast on settings the relay cannot run with."""
    if int(config.get('MIN_ROOM_NAME_LENGTH', 2)) < 1:
        raise ValueError('MIN_ROOM_NAME_LENGTH must be at least 1')
    for key in ('JOIN_SETUP_DELAY_SEC', 'NEXT_GAME_DELAY_SEC'):
        if float(config.get(key, 0)) < 0:
            raise ValueError(f'{key} must not be negative')
