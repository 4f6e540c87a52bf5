"""Token services."""

from .token_codec import TokenCodec, BLOCK_SIZE
from .validator import TimeWindowValidator
from .login_token_service import LoginTokenService
from .nonce_service import NonceService, DEFAULT_NONCE_MAX_AGE
from .token_service import TokenService, create_token_service, create_key_rotation_service

__all__ = [
    "TokenCodec",
    "BLOCK_SIZE",
    "TimeWindowValidator",
    "LoginTokenService",
    "NonceService",
    "DEFAULT_NONCE_MAX_AGE",
    "TokenService",
    "create_token_service",
    "create_key_rotation_service",
]
