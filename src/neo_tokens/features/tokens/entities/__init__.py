"""Token payload entities and protocols."""

from .padding import RANDOM_PAD_LENGTH, make_pad, strip_pad
from .login_token import LoginTokenPayload, ResolvedLoginToken
from .nonce import NoncePayload
from .protocols import CredentialEventSourceProtocol

__all__ = [
    "RANDOM_PAD_LENGTH",
    "make_pad",
    "strip_pad",
    "LoginTokenPayload",
    "ResolvedLoginToken",
    "NoncePayload",
    "CredentialEventSourceProtocol",
]
