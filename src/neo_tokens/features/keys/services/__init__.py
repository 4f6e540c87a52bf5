"""Key management services."""

from .key_manager import KeyManager, KEY_BYTE_LENGTH
from .key_rotation_service import KeyRotationService, RotationCallback

__all__ = [
    "KeyManager",
    "KEY_BYTE_LENGTH",
    "KeyRotationService",
    "RotationCallback",
]
