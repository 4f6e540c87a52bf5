"""Neo-Tokens - stateless encrypted tokens for NeoMultiTenant services.

Issues and verifies opaque bearer tokens of two kinds: login tokens that bind
a subject id to its issue time, and short-lived CSRF nonces that carry only
an issue time. Tokens are ``base64(IV || AES-CTR(pad || payload))`` under a
symmetric key held in process memory; nothing is stored server-side.
"""

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .__version__ import __version__

from .config import TokenSettings, get_token_settings

from .core.exceptions import (
    NeoTokensError,
    ConfigurationError,
    KeyManagementError,
    EntropyUnavailableError,
    InvalidKeyLengthError,
    KeyNotConfiguredError,
    TokenError,
    InvalidTokenError,
    DecodeError,
    Base64DecodeError,
    CiphertextTooShortError,
    DeserializeError,
    TokenExpiredError,
    TokenIssueError,
    get_http_status_code,
    create_error_response,
)

from .core.protocols import ClockProtocol

from .features.keys import KeyEntry, KeyManager, KeyRotationService

from .features.tokens import (
    LoginTokenPayload,
    ResolvedLoginToken,
    NoncePayload,
    CredentialEventSourceProtocol,
    TokenCodec,
    TimeWindowValidator,
    LoginTokenService,
    NonceService,
    TokenService,
    create_token_service,
    create_key_rotation_service,
)

__all__ = [
    "__version__",
    
    # Configuration
    "TokenSettings",
    "get_token_settings",
    
    # Exceptions
    "NeoTokensError",
    "ConfigurationError",
    "KeyManagementError",
    "EntropyUnavailableError",
    "InvalidKeyLengthError",
    "KeyNotConfiguredError",
    "TokenError",
    "InvalidTokenError",
    "DecodeError",
    "Base64DecodeError",
    "CiphertextTooShortError",
    "DeserializeError",
    "TokenExpiredError",
    "TokenIssueError",
    "get_http_status_code",
    "create_error_response",
    
    # Protocols
    "ClockProtocol",
    "CredentialEventSourceProtocol",
    
    # Keys
    "KeyEntry",
    "KeyManager",
    "KeyRotationService",
    
    # Tokens
    "LoginTokenPayload",
    "ResolvedLoginToken",
    "NoncePayload",
    "TokenCodec",
    "TimeWindowValidator",
    "LoginTokenService",
    "NonceService",
    "TokenService",
    "create_token_service",
    "create_key_rotation_service",
]
