import pytest

from relay.config import cors_origins, validate_config


def test_cors_origins_parsing():
    assert cors_origins('*') == '*'
    assert cors_origins('') == '*'
    assert cors_origins('http://a.test, http://b.test') == ['http://a.test', 'http://b.test']


def test_validate_config_rejects_bad_values():
    validate_config({'MIN_ROOM_NAME_LENGTH': 2, 'JOIN_SETUP_DELAY_SEC': 0.5, 'NEXT_GAME_DELAY_SEC': 0})
    with pytest.raises(ValueError):
        validate_config({'MIN_ROOM_NAME_LENGTH': 0})
    with pytest.raises(ValueError):
        validate_config({'JOIN_SETUP_DELAY_SEC': -1})
