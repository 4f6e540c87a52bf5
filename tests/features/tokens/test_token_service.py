"""Tests for the TokenService facade."""

import base64
import threading

import pytest

from neo_tokens.config.settings import TokenSettings
from neo_tokens.core.exceptions.base import ConfigurationError, get_http_status_code
from neo_tokens.core.exceptions.keys import InvalidKeyLengthError, KeyNotConfiguredError
from neo_tokens.core.exceptions.tokens import InvalidTokenError, TokenIssueError
from neo_tokens.features.keys.services.key_manager import KeyManager
from neo_tokens.features.keys.services.key_rotation_service import KeyRotationService
from neo_tokens.features.tokens.services.token_service import (
    create_key_rotation_service,
    create_token_service,
)


class TestLoginTokens:
    """Test cases for login token issue and resolve."""
    
    def test_generate_issue_resolve(self, token_service):
        token_service.generate_key()
        token = token_service.issue_login_token(1234)
        assert token_service.resolve_login_token(token) == 1234
    
    @pytest.mark.parametrize("token", ["garbage", "", "!!!!", base64.b64encode(b"x" * 40).decode()])
    def test_failures_collapse_to_invalid_token(self, token_service, token):
        """Test every decode failure surfaces as a bare InvalidTokenError."""
        with pytest.raises(InvalidTokenError) as exc_info:
            token_service.resolve_login_token(token)
        assert type(exc_info.value) is InvalidTokenError
        assert exc_info.value.__cause__ is None
    
    def test_expired_token_collapses(self, token_service, clock, settings):
        token = token_service.issue_login_token(1)
        clock.advance(settings.login_token_max_age_seconds)
        with pytest.raises(InvalidTokenError) as exc_info:
            token_service.resolve_login_token(token)
        assert type(exc_info.value) is InvalidTokenError
    
    def test_wrong_key(self, settings, clock, fixed_key):
        """Test a token under a replaced, unretained key is rejected."""
        service = create_token_service(
            settings=settings,
            clock=clock,
            key_manager=KeyManager(fixed_key, clock=clock, max_keys=1),
        )
        token = service.issue_login_token(1234)
        service.generate_key()
        with pytest.raises(InvalidTokenError):
            service.resolve_login_token(token)


class TestRefresh:
    """Test cases for re-issuing tokens after rotation."""
    
    def test_current_token_not_refreshed(self, token_service):
        token = token_service.issue_login_token(7)
        assert token_service.refresh_login_token(token) is None
    
    def test_old_key_token_refreshed(self, token_service):
        token = token_service.issue_login_token(7)
        token_service.generate_key()
        
        refreshed = token_service.refresh_login_token(token)
        
        assert refreshed is not None
        resolved = token_service.inspect_login_token(refreshed)
        assert resolved.subject_id == 7
        assert resolved.needs_reissue is False
    
    def test_invalid_token_not_refreshed(self, token_service):
        with pytest.raises(InvalidTokenError):
            token_service.refresh_login_token("garbage")


class TestNonces:
    """Test cases for nonce issue and verify."""
    
    def test_issue_verify(self, token_service, clock):
        nonce = token_service.issue_nonce()
        clock.advance(100)
        assert token_service.verify_nonce(nonce) is True
        clock.advance(201)
        assert token_service.verify_nonce(nonce) is False
    
    def test_garbage_nonce(self, token_service):
        assert token_service.verify_nonce("garbage") is False


class TestKeyControl:
    """Test cases for set_key and generate_key."""
    
    def test_set_key_rejects_short_key(self, token_service):
        with pytest.raises(InvalidKeyLengthError):
            token_service.set_key(b"x" * 15)
    
    def test_set_key_shares_key_with_other_instance(self, settings, clock, fixed_key):
        """Test two instances with the same key accept each other's tokens."""
        first = create_token_service(settings=settings, clock=clock)
        second = create_token_service(settings=settings, clock=clock)
        first.set_key(fixed_key)
        second.set_key(fixed_key)
        assert second.resolve_login_token(first.issue_login_token(99)) == 99
    
    def test_production_without_key_fails_closed(self, clock):
        settings = TokenSettings(_env_file=None, environment="production")
        service = create_token_service(settings=settings, clock=clock)
        with pytest.raises(KeyNotConfiguredError):
            service.issue_login_token(1)
        with pytest.raises(KeyNotConfiguredError):
            service.issue_nonce()
    
    def test_configured_key_from_environment(self, monkeypatch, clock, fixed_key):
        """Test the cached settings pick up the configured key."""
        monkeypatch.setenv("NEO_TOKENS_KEY", base64.b64encode(fixed_key).decode())
        monkeypatch.setenv("NEO_TOKENS_ENVIRONMENT", "production")
        service = create_token_service(clock=clock)
        assert service.key_manager.get() == fixed_key


class TestConcurrency:
    """Test cases for concurrent use."""
    
    def test_issue_and_resolve_while_rotating(self, token_service):
        """Test tokens resolve while keys are being replaced."""
        errors = []
        start = threading.Barrier(5)
        
        def worker(subject_id):
            start.wait(timeout=5)
            for _ in range(50):
                try:
                    token = token_service.issue_login_token(subject_id)
                    assert token_service.resolve_login_token(token) == subject_id
                except Exception as e:
                    errors.append(e)
        
        def rotator():
            start.wait(timeout=5)
            for _ in range(2):
                token_service.generate_key()
        
        threads = [threading.Thread(target=worker, args=(i,)) for i in range(4)]
        threads.append(threading.Thread(target=rotator))
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)
        
        assert errors == []
        assert len(token_service.key_manager.verification_entries()) == 3


class TestFactories:
    """Test cases for the factory functions."""
    
    def test_rotation_service_shares_key_manager(self, token_service, settings):
        rotation = create_key_rotation_service(token_service, settings=settings)
        assert isinstance(rotation, KeyRotationService)
        assert rotation.key_manager is token_service.key_manager
        assert rotation.rotation_interval == settings.key_rotation_interval_seconds
    
    @pytest.mark.asyncio
    async def test_rotation_keeps_issued_tokens_valid(self, token_service, settings, clock):
        rotation = create_key_rotation_service(token_service, settings=settings)
        token = token_service.issue_login_token(5)
        clock.advance(settings.key_rotation_interval_seconds)
        
        assert await rotation.run_once() is not None
        assert token_service.resolve_login_token(token) == 5
        assert token_service.refresh_login_token(token) is not None
    
    def test_rotation_service_rejects_small_key_ring(self, settings, clock, fixed_key):
        """Test a ring that cannot hold the retention window is a configuration error."""
        service = create_token_service(
            settings=settings,
            clock=clock,
            key_manager=KeyManager(fixed_key, clock=clock, max_keys=4),
        )
        with pytest.raises(ConfigurationError):
            create_key_rotation_service(service, settings=settings)


class TestRotationLifetime:
    """Test cases for login tokens across a full lifetime of daily rotations."""
    
    @pytest.mark.asyncio
    async def test_token_resolves_until_max_age(self, token_service, settings, clock):
        """Test a token stays valid through every rotation until it expires."""
        rotation = create_key_rotation_service(token_service, settings=settings)
        interval = settings.key_rotation_interval_seconds
        max_age = settings.login_token_max_age_seconds
        token = token_service.issue_login_token(1234)
        
        elapsed = 0
        while elapsed + interval < max_age:
            clock.advance(interval)
            elapsed += interval
            assert await rotation.run_once() is not None
            assert token_service.resolve_login_token(token) == 1234
        
        clock.advance(max_age - 1 - elapsed)
        await rotation.run_once()
        assert token_service.resolve_login_token(token) == 1234
        
        clock.advance(1)
        with pytest.raises(InvalidTokenError):
            token_service.resolve_login_token(token)
    
    @pytest.mark.asyncio
    async def test_token_issued_just_before_rotation(self, token_service, settings, clock):
        """Test the key of a token issued at the end of its key's life is retained."""
        rotation = create_key_rotation_service(token_service, settings=settings)
        interval = settings.key_rotation_interval_seconds
        max_age = settings.login_token_max_age_seconds
        
        clock.advance(interval - 1)
        token = token_service.issue_login_token(1234)
        issued_at = clock.now()
        clock.advance(1)
        assert await rotation.run_once() is not None
        
        while clock.now() + interval < issued_at + max_age:
            clock.advance(interval)
            await rotation.run_once()
        
        clock.advance(issued_at + max_age - 1 - clock.now())
        await rotation.run_once()
        
        assert token_service.resolve_login_token(token) == 1234


class TestIssueErrors:
    """Test cases for failures while issuing tokens."""
    
    @pytest.mark.parametrize("subject_id", [2**63, -2**63 - 1])
    def test_out_of_range_subject(self, token_service, subject_id):
        """Test an unencodable subject is a server-side error, not a token error."""
        with pytest.raises(TokenIssueError) as exc_info:
            token_service.issue_login_token(subject_id)
        assert get_http_status_code(exc_info.value) == 500
