"""Criptografia de segredos em repouso (tokens OAuth, webhook URLs).

Localizado em app/infra/ para manter boundaries corretas: stores usam o
cipher via protocolo, nunca a biblioteca diretamente.
"""

from .constants import IV_SIZE, KEY_SIZE, TAG_SIZE
from .errors import TokenCipherError
from .token_cipher import AesGcmTokenCipher

__all__ = [
    "IV_SIZE",
    "KEY_SIZE",
    "TAG_SIZE",
    "AesGcmTokenCipher",
    "TokenCipherError",
]
