"""Symmetric encryption for provider tokens kept in the session cookie."""

from __future__ import annotations

import base64
import hashlib
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken


class TokenDecryptError(ValueError):
    """Raised when a session token cannot be decrypted with the current key."""


class TokenCipherService:
    """Encrypt and decrypt tokens using a Fernet key derived from a secret.

    The session cookie is only signed, so anything readable in it is readable
    by the browser; tokens go in as Fernet ciphertext.
    """

    def __init__(self, *, secret: str) -> None:
        if not secret:
            raise ValueError("Token encryption secret must be provided.")
        digest = hashlib.sha256(secret.encode("utf-8")).digest()
        self._fernet = Fernet(base64.urlsafe_b64encode(digest))

    def encrypt(self, plaintext: str) -> str:
        return self._fernet.encrypt(plaintext.encode("utf-8")).decode("utf-8")

    def encrypt_optional(self, plaintext: Optional[str]) -> Optional[str]:
        """Encrypt ``plaintext`` unless it is missing (Discord may omit a refresh token)."""
        return self.encrypt(plaintext) if plaintext else None

    def decrypt(self, ciphertext: str) -> str:
        try:
            plaintext = self._fernet.decrypt(ciphertext.encode("utf-8"))
        except InvalidToken as exc:
            raise TokenDecryptError(
                "Failed to decrypt token; the key changed or the value was altered."
            ) from exc
        return plaintext.decode("utf-8")


__all__ = ["TokenCipherService", "TokenDecryptError"]
