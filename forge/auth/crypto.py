"""Token encryption utilities for secure storage of sensitive data."""

import os
import base64
import hashlib
from cryptography.fernet import Fernet, InvalidToken


def _get_encryption_key() -> bytes:
    """Get or derive encryption key from environment.

    Uses ENCRYPTION_KEY if set (must be valid Fernet key),
    otherwise derives a key from SECRET_KEY.
    """
    encryption_key = os.getenv("ENCRYPTION_KEY")
    if encryption_key:
        return encryption_key.encode()

    secret_key = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")
    # Fernet requires 32 url-safe base64-encoded bytes
    derived = hashlib.sha256(secret_key.encode()).digest()
    return base64.urlsafe_b64encode(derived)


def encrypt_token(plaintext: str | None) -> str:
    """Encrypt a Shopify access token before it is written to the profile store.

    Returns an empty string for an empty token.
    """
    if not plaintext:
        return ""

    f = Fernet(_get_encryption_key())
    return f.encrypt(plaintext.encode()).decode()


def decrypt_token(ciphertext: str | None) -> str | None:
    """Decrypt a stored token, or None if it is empty or unreadable."""
    if not ciphertext:
        return None

    try:
        f = Fernet(_get_encryption_key())
        return f.decrypt(ciphertext.encode()).decode()
    except InvalidToken:
        return None
