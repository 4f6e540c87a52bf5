"""Pytest configuration and fixtures for neo-tokens tests."""

import pytest

from neo_tokens.config.settings import TokenSettings, get_token_settings
from neo_tokens.features.keys.services.key_manager import KeyManager
from neo_tokens.features.tokens.services.login_token_service import LoginTokenService
from neo_tokens.features.tokens.services.nonce_service import NonceService
from neo_tokens.features.tokens.services.token_codec import TokenCodec
from neo_tokens.features.tokens.services.token_service import create_token_service
from neo_tokens.features.tokens.services.validator import TimeWindowValidator

TEST_KEY = b"0123456789012345"
TEST_TIME = 1_700_000_000


class FakeClock:
    """Clock pinned to a settable unix time."""
    
    def __init__(self, now: int = TEST_TIME):
        self.current = now
    
    def now(self) -> int:
        return self.current
    
    def advance(self, seconds: int) -> None:
        self.current += seconds


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Keep developer NEO_TOKENS_* variables out of the tests."""
    for name in (
        "NEO_TOKENS_ENVIRONMENT",
        "NEO_TOKENS_KEY",
        "NEO_TOKENS_REQUIRE_CONFIGURED_KEY",
        "NEO_TOKENS_MAX_KEYS",
    ):
        monkeypatch.delenv(name, raising=False)
    get_token_settings.cache_clear()
    yield
    get_token_settings.cache_clear()


@pytest.fixture
def fixed_key():
    """The fixed 16-byte test key."""
    return TEST_KEY


@pytest.fixture
def clock():
    """Fake clock starting at TEST_TIME."""
    return FakeClock()


@pytest.fixture
def settings():
    """Default settings without reading a .env file."""
    return TokenSettings(_env_file=None)


@pytest.fixture
def key_manager(clock):
    """Key manager holding the fixed test key."""
    return KeyManager(TEST_KEY, clock=clock)


@pytest.fixture
def codec(key_manager):
    return TokenCodec(key_manager)


@pytest.fixture
def validator(clock):
    return TimeWindowValidator(clock=clock)


@pytest.fixture
def login_token_service(codec, validator, settings):
    return LoginTokenService(codec, validator, max_age=settings.login_token_max_age_seconds)


@pytest.fixture
def nonce_service(codec, validator):
    return NonceService(codec, validator)


@pytest.fixture
def token_service(settings, clock, key_manager):
    """Fully wired token service sharing the test key manager and clock."""
    return create_token_service(settings=settings, clock=clock, key_manager=key_manager)
