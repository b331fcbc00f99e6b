"""Erros de criptografia de tokens em repouso."""


class TokenCipherError(Exception):
    """Chave inválida ou dado cifrado corrompido."""
