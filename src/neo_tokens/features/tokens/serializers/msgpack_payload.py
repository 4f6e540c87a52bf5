"""MessagePack payload serializer.

Compact binary encoding for structured token payloads. Decoding is strict:
string keys only, no trailing bytes, and every unpacker failure becomes a
DeserializeError.
"""

import logging
from typing import Any, Dict

import msgpack

from ....core.exceptions.tokens import DeserializeError, TokenIssueError

logger = logging.getLogger(__name__)


class MessagePackPayloadSerializer:
    """MessagePack serializer for token payload records."""
    
    def __init__(self, max_payload_bytes: int = 1024):
        """Initialize MessagePack serializer.
        
        Args:
            max_payload_bytes: Refuse to unpack payloads larger than this
        """
        self._max_payload_bytes = max_payload_bytes
    
    def serialize(self, record: Dict[str, Any]) -> bytes:
        """Serialize a payload record to MessagePack bytes."""
        try:
            return msgpack.packb(record, use_bin_type=True, strict_types=True)
        except (msgpack.PackException, TypeError, ValueError, OverflowError) as e:
            raise TokenIssueError(
                f"MessagePack serialization failed: {e}",
                details={"serializer_type": "msgpack"},
            ) from e
    
    def deserialize(self, data: bytes) -> Any:
        """Deserialize MessagePack bytes.
        
        Raises:
            DeserializeError: If the bytes are not exactly one MessagePack object
        """
        if len(data) > self._max_payload_bytes:
            raise DeserializeError(
                "Payload exceeds maximum size",
                details={"size": len(data), "max_size": self._max_payload_bytes},
            )
        
        try:
            return msgpack.unpackb(
                data,
                raw=False,
                strict_map_key=True,
                use_list=True,
            )
        except (msgpack.UnpackException, ValueError, TypeError) as e:
            # ExtraData, FormatError, StackError and UnicodeDecodeError all land here
            logger.debug(f"MessagePack deserialization failed: {type(e).__name__}")
            raise DeserializeError(
                "MessagePack deserialization failed",
                details={"serializer_type": "msgpack", "reason": type(e).__name__},
            ) from e
