"""Tokens feature: login tokens, CSRF nonces and the codec beneath them."""

from .entities import (
    RANDOM_PAD_LENGTH,
    LoginTokenPayload,
    ResolvedLoginToken,
    NoncePayload,
    CredentialEventSourceProtocol,
)
from .serializers import MessagePackPayloadSerializer
from .services import (
    TokenCodec,
    BLOCK_SIZE,
    TimeWindowValidator,
    LoginTokenService,
    NonceService,
    TokenService,
    create_token_service,
    create_key_rotation_service,
)

__all__ = [
    "RANDOM_PAD_LENGTH",
    "LoginTokenPayload",
    "ResolvedLoginToken",
    "NoncePayload",
    "CredentialEventSourceProtocol",
    "MessagePackPayloadSerializer",
    "TokenCodec",
    "BLOCK_SIZE",
    "TimeWindowValidator",
    "LoginTokenService",
    "NonceService",
    "TokenService",
    "create_token_service",
    "create_key_rotation_service",
]
