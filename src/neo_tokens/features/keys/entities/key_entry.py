"""Key entry entity."""

import hashlib
from dataclasses import dataclass, field, replace
from typing import Optional, Union

from ....config.settings import VALID_KEY_LENGTHS
from ....core.exceptions.keys import InvalidKeyLengthError

KEY_ID_LENGTH = 16


def validate_key(key: Union[bytes, bytearray]) -> bytes:
    """Return `key` as immutable bytes if it is a valid AES key.
    
    Raises:
        InvalidKeyLengthError: If the key is not 16, 24 or 32 bytes
    """
    if not isinstance(key, (bytes, bytearray)):
        raise InvalidKeyLengthError(
            f"Key must be bytes, got {type(key).__name__}",
            details={"valid_lengths": list(VALID_KEY_LENGTHS)},
        )
    if len(key) not in VALID_KEY_LENGTHS:
        raise InvalidKeyLengthError(
            f"Key must be 16, 24 or 32 bytes, got {len(key)}",
            details={"length": len(key), "valid_lengths": list(VALID_KEY_LENGTHS)},
        )
    return bytes(key)


def key_fingerprint(key: bytes) -> str:
    """Short SHA-256 fingerprint used to identify a key in logs."""
    return hashlib.sha256(key).hexdigest()[:KEY_ID_LENGTH]


@dataclass(frozen=True)
class KeyEntry:
    """A symmetric key together with its identity and lifecycle timestamps.
    
    `superseded_at` is None while the key is active and is stamped when a
    newer key replaces it. Retention is measured from that moment, since
    tokens can still be issued under a key until it is superseded.
    """
    
    key_id: str
    key: bytes = field(repr=False)
    created_at: int
    superseded_at: Optional[int] = None
    
    @classmethod
    def create(cls, key: Union[bytes, bytearray], created_at: int) -> "KeyEntry":
        valid_key = validate_key(key)
        return cls(key_id=key_fingerprint(valid_key), key=valid_key, created_at=created_at)
    
    @property
    def bit_length(self) -> int:
        return len(self.key) * 8
    
    @property
    def is_superseded(self) -> bool:
        return self.superseded_at is not None
    
    def age(self, now: int) -> int:
        """Seconds since the key was installed."""
        return now - self.created_at
    
    def supersede(self, at: int) -> "KeyEntry":
        """Return a copy marked as replaced at `at`."""
        return replace(self, superseded_at=at)
    
    def superseded_for(self, now: int) -> int:
        """Seconds since the key stopped being active, 0 while it is active."""
        if self.superseded_at is None:
            return 0
        return now - self.superseded_at
