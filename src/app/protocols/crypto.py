"""Protocolo de cifragem de segredos em repouso (tokens OAuth, webhook URLs)."""

from __future__ import annotations

from abc import ABC, abstractmethod


class TokenCipherProtocol(ABC):
    """Cifra/decifra strings curtas de forma autenticada."""

    @abstractmethod
    def encrypt(self, plaintext: str) -> str:
        """Retorna texto cifrado em ASCII seguro para armazenamento."""

    @abstractmethod
    def decrypt(self, ciphertext: str) -> str:
        """Retorna texto plano.

        Raises:
            TokenCipherError: dado corrompido ou chave incorreta.
        """
