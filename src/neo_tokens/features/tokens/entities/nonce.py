"""CSRF nonce payload entity."""

from dataclasses import dataclass

from ....core.exceptions.tokens import DeserializeError, TokenIssueError
from ....utils.varint import decode_varint, encode_varint


@dataclass(frozen=True)
class NoncePayload:
    """Bare issue timestamp, encoded as a signed varint."""
    
    issued_at: int
    
    def to_bytes(self) -> bytes:
        try:
            return encode_varint(self.issued_at)
        except (TypeError, ValueError) as e:
            raise TokenIssueError(
                "Nonce timestamp must be a signed 64-bit int",
                details={"field": "issued_at"},
            ) from e
    
    @classmethod
    def from_bytes(cls, data: bytes) -> "NoncePayload":
        """Parse the varint at the start of `data`.
        
        Raises:
            DeserializeError: If the varint is malformed or followed by extra bytes
        """
        issued_at, consumed = decode_varint(data)
        if consumed != len(data):
            raise DeserializeError(
                "Trailing bytes after nonce timestamp",
                details={"consumed": consumed, "length": len(data)},
            )
        return cls(issued_at=issued_at)
