from __future__ import annotations

import hmac
import os
import threading
from typing import TYPE_CHECKING

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from libotp._utils.bytes import wipe
from libotp._utils.validation import validate_key
from libotp.keys.abc import KeyProvider

if TYPE_CHECKING:
    from libotp.hashmode import HashMode

__all__ = ["ProtectedKey"]

_WRAP_KEY_SIZE = 32
_NONCE_SIZE = 16
_AES_BLOCK_SIZE = 16


class ProtectedKey(KeyProvider):
    """
    Key provider which keeps the secret encrypted while idle.

    The key is held under AES-256-CTR with a random per-instance wrapping key.
    Each :meth:`hmac` call decrypts it, computes the digest, re-encrypts it
    under a fresh nonce, and zeroes the plaintext buffer. The whole cycle runs
    under a lock, so concurrent callers never observe a half-updated state.

    This only narrows the time the plaintext key spends in memory.
    The wrapping key lives in the same process, so anyone able to read
    process memory can still recover the secret.
    """

    def __init__(self, key: bytes | bytearray) -> None:
        plain = bytearray(validate_key(key))
        self._lock = threading.Lock()
        self._wrap_key = os.urandom(_WRAP_KEY_SIZE)
        self._length = len(plain)
        try:
            self._nonce, self._ciphertext = self._encrypt(plain)
        finally:
            wipe(plain)

    def hmac(self, mode: HashMode, message: bytes) -> bytes:
        with self._lock:
            plain = self._decrypt()
            try:
                digest = hmac.digest(plain, message, mode.hashlib_name)
                self._nonce, self._ciphertext = self._encrypt(plain)
            finally:
                wipe(plain)
        return digest

    def _cipher(self, nonce: bytes) -> Cipher:
        return Cipher(algorithms.AES(self._wrap_key), modes.CTR(nonce))

    def _encrypt(self, plain: bytearray) -> tuple[bytes, bytes]:
        nonce = os.urandom(_NONCE_SIZE)
        encryptor = self._cipher(nonce).encryptor()
        return nonce, encryptor.update(plain) + encryptor.finalize()

    def _decrypt(self) -> bytearray:
        decryptor = self._cipher(self._nonce).decryptor()
        # update_into() wants room for len(data) + block_size - 1 bytes
        buf = bytearray(len(self._ciphertext) + _AES_BLOCK_SIZE - 1)
        try:
            size = decryptor.update_into(self._ciphertext, buf)
            decryptor.finalize()
            return buf[:size]
        finally:
            wipe(buf)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} length={self._length}>"
