"""Encrypt-to-text token codec.

Wire format: ``base64(IV || ciphertext)`` with the standard alphabet and
padding. The cipher is AES in CTR mode keyed by the active key, with a fresh
16-byte IV per encoding, so the ciphertext is exactly as long as the
plaintext. There is no authentication tag: a decoded token is confidential
but not tamper-evident, and callers must rely on structured decoding of the
plaintext to reject corrupted input.
"""

import base64
import binascii
import logging
import secrets
from typing import Iterator, Tuple, Union

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ....core.exceptions.tokens import Base64DecodeError, CiphertextTooShortError
from ....utils.entropy import RandomSource, secure_random_bytes
from ...keys.entities.key_entry import KeyEntry
from ...keys.entities.protocols import KeyProviderProtocol

logger = logging.getLogger(__name__)

BLOCK_SIZE = algorithms.AES.block_size // 8


def _apply_keystream(key: bytes, iv: bytes, data: bytes) -> bytes:
    # CTR is symmetric: the same transform encrypts and decrypts
    transform = Cipher(algorithms.AES(key), modes.CTR(iv)).encryptor()
    return transform.update(data) + transform.finalize()


class TokenCodec:
    """Generic byte payload <-> token string transform."""

    def __init__(
        self,
        key_provider: KeyProviderProtocol,
        random_source: RandomSource = secrets.token_bytes,
    ):
        """Initialize token codec.

        Args:
            key_provider: Supplies the active key and the keys accepted for decoding
            random_source: Secure random byte source for IVs
        """
        self.key_provider = key_provider
        self._random_source = random_source

    def encode(self, raw: bytes) -> str:
        """Encrypt `raw` under the active key and return the token text.

        Raises:
            EntropyUnavailableError: If no IV can be generated
            KeyNotConfiguredError: If no key is available
        """
        return self.encode_with_key(raw, self.key_provider.get())

    def encode_with_key(self, raw: bytes, key: bytes) -> str:
        iv = secure_random_bytes(BLOCK_SIZE, self._random_source)
        ciphertext = _apply_keystream(key, iv, raw)
        return base64.b64encode(iv + ciphertext).decode("ascii")

    def decode(self, token: Union[str, bytes]) -> bytes:
        """Decrypt a token under the active key.

        Raises:
            Base64DecodeError: If the token is not valid base64
            CiphertextTooShortError: If the token is shorter than one block
        """
        return self.decrypt(self.unwrap(token), self.key_provider.get())

    def decode_candidates(self, token: Union[str, bytes]) -> Iterator[Tuple[KeyEntry, bytes]]:
        """Yield ``(entry, plaintext)`` for every accepted key, newest first.

        Without an authentication tag every key "decrypts" successfully, so
        the caller picks the first plaintext that parses.
        """
        blob = self.unwrap(token)
        for entry in self.key_provider.verification_entries():
            yield entry, self.decrypt(blob, entry.key)

    def unwrap(self, token: Union[str, bytes]) -> bytes:
        """Base64-decode a token and check it holds at least an IV."""
        if not isinstance(token, (str, bytes)):
            raise Base64DecodeError(
                "Token must be text",
                details={"type": type(token).__name__},
            )

        try:
            blob = base64.b64decode(token, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.debug(f"Token base64 decode failed: {e}")
            raise Base64DecodeError("Token is not valid base64") from e

        if len(blob) < BLOCK_SIZE:
            logger.debug(f"Token too short: {len(blob)} bytes")
            raise CiphertextTooShortError(
                "Token is shorter than the cipher block size",
                details={"length": len(blob), "block_size": BLOCK_SIZE},
            )
        return blob

    def decrypt(self, blob: bytes, key: bytes) -> bytes:
        """Split ``IV || ciphertext`` and decrypt under `key`."""
        if len(blob) < BLOCK_SIZE:
            raise CiphertextTooShortError(
                "Token is shorter than the cipher block size",
                details={"length": len(blob), "block_size": BLOCK_SIZE},
            )
        iv, ciphertext = blob[:BLOCK_SIZE], blob[BLOCK_SIZE:]
        return _apply_keystream(key, iv, ciphertext)
