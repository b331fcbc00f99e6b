"""Cifragem AES-GCM de tokens OAuth e webhook URLs.

Formato armazenado: base64(iv || ciphertext || tag). String vazia cifra e
decifra como string vazia, para campos opcionais.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from app.infra.crypto.constants import IV_SIZE, MIN_SECRET_LENGTH, TAG_SIZE
from app.infra.crypto.errors import TokenCipherError
from app.protocols.crypto import TokenCipherProtocol


class AesGcmTokenCipher(TokenCipherProtocol):
    """TokenCipher com chave derivada de ENCRYPTION_KEY."""

    __slots__ = ("_aesgcm",)

    def __init__(self, secret: str) -> None:
        if len(secret) < MIN_SECRET_LENGTH:
            raise TokenCipherError(
                f"ENCRYPTION_KEY must be at least {MIN_SECRET_LENGTH} characters long"
            )
        key = hashlib.sha256(secret.encode("utf-8")).digest()
        self._aesgcm = AESGCM(key)

    def encrypt(self, plaintext: str) -> str:
        if not plaintext:
            return ""
        iv = os.urandom(IV_SIZE)
        encrypted = self._aesgcm.encrypt(iv, plaintext.encode("utf-8"), None)
        return base64.b64encode(iv + encrypted).decode("ascii")

    def decrypt(self, ciphertext: str) -> str:
        if not ciphertext:
            return ""
        try:
            raw = base64.b64decode(ciphertext, validate=True)
        except (ValueError, binascii.Error) as exc:
            raise TokenCipherError("Invalid base64 ciphertext") from exc
        if len(raw) < IV_SIZE + TAG_SIZE:
            raise TokenCipherError("Ciphertext too short")
        try:
            plaintext = self._aesgcm.decrypt(raw[:IV_SIZE], raw[IV_SIZE:], None)
        except InvalidTag as exc:
            raise TokenCipherError("Failed to decrypt data") from exc
        return plaintext.decode("utf-8")
