"""Keys feature: active key ownership, rotation and retirement."""

from .entities import KeyEntry, KeyProviderProtocol, validate_key, key_fingerprint
from .services import KeyManager, KeyRotationService, KEY_BYTE_LENGTH

__all__ = [
    "KeyEntry",
    "KeyProviderProtocol",
    "validate_key",
    "key_fingerprint",
    "KeyManager",
    "KeyRotationService",
    "KEY_BYTE_LENGTH",
]
