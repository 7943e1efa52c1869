"""Symmetric encryption for stored provider secrets.

Values are AES-256-GCM encrypted and serialized as ``iv:ciphertext:tag``,
each part hex encoded.
"""
import json
import os
from typing import Dict, Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

IV_LENGTH = 12
TAG_LENGTH = 16


class EncryptionError(ValueError):
    """Raised when a secret cannot be encrypted or decrypted."""


class SecretCipher:
    """Encrypts and decrypts secrets with a hex encoded 256-bit key."""

    def __init__(self, key_hex: str):
        self._key_hex = key_hex or ""

    def _aesgcm(self) -> AESGCM:
        try:
            key = bytes.fromhex(self._key_hex)
        except ValueError:
            key = b""
        if len(key) != 32:
            raise EncryptionError(
                "ENCRYPTION_KEY must be 256 bits, 64 string characters in hex format, "
                "generate via: openssl rand -hex 32"
            )
        return AESGCM(key)

    def encrypt(self, plaintext: str) -> str:
        iv = os.urandom(IV_LENGTH)
        sealed = self._aesgcm().encrypt(iv, plaintext.encode("utf-8"), None)
        ciphertext, tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]
        return f"{iv.hex()}:{ciphertext.hex()}:{tag.hex()}"

    def decrypt(self, token: str) -> str:
        parts = (token or "").split(":")
        if len(parts) != 3:
            raise EncryptionError("Invalid encrypted value format")
        try:
            iv, ciphertext, tag = (bytes.fromhex(p) for p in parts)
        except ValueError as e:
            raise EncryptionError("Invalid encrypted value encoding") from e
        aesgcm = self._aesgcm()
        try:
            plaintext = aesgcm.decrypt(iv, ciphertext + tag, None)
        except InvalidTag as e:
            raise EncryptionError("Failed to decrypt value: authentication failed") from e
        return plaintext.decode("utf-8")

    def decrypt_extra_headers(self, token: Optional[str]) -> Optional[Dict[str, str]]:
        """Decrypt a JSON object of extra HTTP headers; ``None`` when unset."""
        if not token:
            return None
        try:
            headers = json.loads(self.decrypt(token))
        except json.JSONDecodeError as e:
            raise EncryptionError("Extra headers are not valid JSON") from e
        if not isinstance(headers, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in headers.items()
        ):
            raise EncryptionError("Extra headers must be an object of strings")
        return headers
