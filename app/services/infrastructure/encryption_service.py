"""
Encryption service for OAuth tokens.
Uses AES-256-GCM so every stored blob is authenticated: tampering is detected
on decryption instead of yielding garbage plaintext.

Blob layout (hex encoded, one string): nonce (16 bytes) | tag (16 bytes) | ciphertext
"""

import hashlib
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from app.config import settings
from app.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

NONCE_LENGTH = 16
TAG_LENGTH = 16


class EncryptionError(Exception):
    """Custom exception for encryption/decryption errors."""

    pass


def _derive_key() -> bytes:
    """
    Derive the 256-bit AES key from the configured secret.

    The operator may set ENCRYPTION_KEY to any string; it is hashed with SHA-256
    so its length never matters.

    Raises:
        EncryptionError: If encryption key is not configured
    """
    if not settings.ENCRYPTION_KEY:
        raise EncryptionError("ENCRYPTION_KEY not configured in environment")
    return hashlib.sha256(settings.ENCRYPTION_KEY.encode("utf-8")).digest()


def encrypt(text: str) -> str:
    """
    Encrypt a string for database storage.

    Args:
        text: Plain text to encrypt (empty strings are allowed)

    Returns:
        str: Hex blob containing nonce, tag and ciphertext

    Raises:
        EncryptionError: If encryption fails
    """
    if not isinstance(text, str):
        raise EncryptionError("Only strings can be encrypted")

    cipher = AESGCM(_derive_key())
    nonce = os.urandom(NONCE_LENGTH)
    # AESGCM appends the tag to the ciphertext
    sealed = cipher.encrypt(nonce, text.encode("utf-8"), None)
    ciphertext, tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]

    return (nonce + tag + ciphertext).hex()


def decrypt(blob: str) -> str:
    """
    Decrypt a blob produced by ``encrypt``.

    Args:
        blob: Hex blob from database

    Returns:
        str: Decrypted plain text

    Raises:
        EncryptionError: If the blob is malformed, was tampered with, or the key is wrong
    """
    if not isinstance(blob, str):
        raise EncryptionError("Encrypted value must be a string")

    try:
        raw = bytes.fromhex(blob)
    except ValueError as e:
        raise EncryptionError("Encrypted value is not valid hex") from e

    if len(raw) < NONCE_LENGTH + TAG_LENGTH:
        raise EncryptionError("Encrypted value is truncated")

    nonce = raw[:NONCE_LENGTH]
    tag = raw[NONCE_LENGTH : NONCE_LENGTH + TAG_LENGTH]
    ciphertext = raw[NONCE_LENGTH + TAG_LENGTH :]

    try:
        plaintext = AESGCM(_derive_key()).decrypt(nonce, ciphertext + tag, None)
    except InvalidTag as e:
        logger.error("Token decryption failed - authentication tag mismatch")
        raise EncryptionError("Invalid or corrupted token") from e

    return plaintext.decode("utf-8")


def validate_encryption_config() -> bool:
    """
    Validate that encryption is properly configured.

    Returns:
        bool: True if encryption is configured and working
    """
    try:
        test_data = "test_encryption_12345"
        is_valid = decrypt(encrypt(test_data)) == test_data

        if is_valid:
            logger.info("Encryption configuration validated successfully")
        else:
            logger.error("Encryption validation failed - data mismatch")

        return is_valid

    except EncryptionError as e:
        logger.error("Encryption configuration validation failed", error=str(e))
        return False


def encrypt_oauth_tokens(
    access_token: str, refresh_token: str | None = None
) -> tuple[str, str | None]:
    """
    Encrypt OAuth access and refresh tokens.

    Returns:
        tuple: (encrypted_access_token, encrypted_refresh_token)
    """
    encrypted_access = encrypt(access_token)
    encrypted_refresh = encrypt(refresh_token) if refresh_token else None

    logger.debug("OAuth tokens encrypted", has_refresh_token=bool(refresh_token))

    return encrypted_access, encrypted_refresh
