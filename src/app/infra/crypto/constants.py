"""Constantes criptográficas para cifragem de tokens em repouso."""

KEY_SIZE = 32  # 256 bits, derivada via SHA-256 da ENCRYPTION_KEY
IV_SIZE = 12  # 96 bits (recomendado para GCM)
TAG_SIZE = 16  # 128 bits
MIN_SECRET_LENGTH = 32
