"""Token subsystem facade.

This is the surface exposed to the HTTP layer: issue and resolve login
tokens, issue and verify CSRF nonces, and install or generate the key.
Decode failures are collapsed into a bare InvalidTokenError so a caller
(and an attacker behind it) cannot tell a wrong key from a malformed token.
The specific cause is logged at DEBUG.
"""

import logging
from typing import Optional

from ....config.settings import TokenSettings, get_token_settings
from ....core.exceptions.tokens import InvalidTokenError
from ....core.protocols import ClockProtocol
from ....utils.timezone import SystemClock
from ...keys.services.key_manager import KeyManager
from ...keys.services.key_rotation_service import KeyRotationService
from ..entities.login_token import ResolvedLoginToken
from ..entities.protocols import CredentialEventSourceProtocol
from .login_token_service import LoginTokenService
from .nonce_service import NonceService
from .token_codec import TokenCodec
from .validator import TimeWindowValidator

logger = logging.getLogger(__name__)


class TokenService:
    """Issues and verifies login tokens and CSRF nonces."""

    def __init__(
        self,
        key_manager: KeyManager,
        login_tokens: LoginTokenService,
        nonces: NonceService,
    ):
        self.key_manager = key_manager
        self.login_tokens = login_tokens
        self.nonces = nonces

    def issue_login_token(self, subject_id: int) -> str:
        return self.login_tokens.encode(subject_id)

    def resolve_login_token(self, token: str) -> int:
        """Return the subject id bound to `token`.

        Raises:
            InvalidTokenError: For any malformed, undecodable or expired token
        """
        return self.inspect_login_token(token).subject_id

    def inspect_login_token(self, token: str) -> ResolvedLoginToken:
        """Resolve `token` and report whether it needs re-issuing under the active key."""
        try:
            return self.login_tokens.resolve(token)
        except InvalidTokenError as e:
            logger.debug(f"Login token rejected: {e.error_code} {e.details}")
            raise InvalidTokenError("Invalid token") from None

    def refresh_login_token(self, token: str) -> Optional[str]:
        """Re-issue a valid login token still encrypted under a retired-soon key.

        Returns:
            A new token under the active key, or None if `token` is already current

        Raises:
            InvalidTokenError: If `token` does not resolve
        """
        resolved = self.inspect_login_token(token)
        if not resolved.needs_reissue:
            return None
        logger.debug(f"Re-issuing login token from key {resolved.key_id}")
        return self.issue_login_token(resolved.subject_id)

    def issue_nonce(self) -> str:
        return self.nonces.create()

    def verify_nonce(self, token: str, max_age: Optional[int] = None) -> bool:
        return self.nonces.verify(token, max_age)

    def set_key(self, key: bytes) -> None:
        """Install `key` as the active key.

        Raises:
            InvalidKeyLengthError: If the key is not 16, 24 or 32 bytes
        """
        self.key_manager.set(key)

    def generate_key(self) -> bytes:
        return self.key_manager.generate()


def create_token_service(
    settings: Optional[TokenSettings] = None,
    clock: Optional[ClockProtocol] = None,
    credential_events: Optional[CredentialEventSourceProtocol] = None,
    key_manager: Optional[KeyManager] = None,
) -> TokenService:
    """Build a TokenService and its collaborators from settings.

    Args:
        settings: Token settings, the cached environment settings by default
        clock: Time source shared by every component
        credential_events: Identity store view for credential-change checks
        key_manager: Existing key manager to share between services

    Returns:
        Configured TokenService
    """
    settings = settings or get_token_settings()
    clock = clock or SystemClock()
    key_manager = key_manager or KeyManager.from_settings(settings, clock=clock)

    codec = TokenCodec(key_manager)
    validator = TimeWindowValidator(clock=clock, clock_skew=settings.clock_skew_seconds)

    login_tokens = LoginTokenService(
        codec,
        validator,
        max_age=settings.login_token_max_age_seconds,
        credential_events=credential_events,
    )
    nonces = NonceService(codec, validator, default_max_age=settings.nonce_max_age_seconds)

    return TokenService(key_manager, login_tokens, nonces)


def create_key_rotation_service(
    token_service: TokenService,
    settings: Optional[TokenSettings] = None,
) -> KeyRotationService:
    """Build a rotation service for the key manager behind `token_service`.

    The rotation service shares the key manager's clock.

    Raises:
        ConfigurationError: If the key manager is too small for the schedule
    """
    settings = settings or get_token_settings()
    return KeyRotationService.from_settings(token_service.key_manager, settings)
