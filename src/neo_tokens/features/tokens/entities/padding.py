"""Random pad prepended to every token payload.

The pad only varies ciphertext prefixes between encodings of the same
payload. It carries no information and is discarded on decode.
"""

import secrets

from ....core.exceptions.tokens import DeserializeError
from ....utils.entropy import RandomSource, secure_random_bytes

RANDOM_PAD_LENGTH = 8


def make_pad(random_source: RandomSource = secrets.token_bytes) -> bytes:
    return secure_random_bytes(RANDOM_PAD_LENGTH, random_source)


def strip_pad(plaintext: bytes) -> bytes:
    """Return the payload that follows the pad.
    
    Raises:
        DeserializeError: If the plaintext is not longer than the pad
    """
    if len(plaintext) <= RANDOM_PAD_LENGTH:
        raise DeserializeError(
            "Token plaintext shorter than random pad",
            details={"length": len(plaintext), "pad_length": RANDOM_PAD_LENGTH},
        )
    return plaintext[RANDOM_PAD_LENGTH:]
