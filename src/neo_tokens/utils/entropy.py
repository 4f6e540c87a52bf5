"""Cryptographically secure random bytes."""

import logging
import secrets
from typing import Callable

from ..core.exceptions.keys import EntropyUnavailableError

logger = logging.getLogger(__name__)

RandomSource = Callable[[int], bytes]


def secure_random_bytes(length: int, source: RandomSource = secrets.token_bytes) -> bytes:
    """Read `length` bytes from a secure random source.
    
    Args:
        length: Number of bytes required
        source: Callable returning random bytes, `secrets.token_bytes` by default
        
    Returns:
        Exactly `length` random bytes
        
    Raises:
        EntropyUnavailableError: If the source fails or returns a short read
    """
    try:
        data = source(length)
    except (OSError, NotImplementedError) as e:
        logger.error(f"Secure random source failed: {e}")
        raise EntropyUnavailableError(
            "Secure random source is unavailable",
            details={"requested_bytes": length},
        ) from e
    
    if len(data) != length:
        logger.error(f"Secure random source returned {len(data)} of {length} bytes")
        raise EntropyUnavailableError(
            "Secure random source returned a short read",
            details={"requested_bytes": length, "received_bytes": len(data)},
        )
    return data


__all__ = ["RandomSource", "secure_random_bytes"]
