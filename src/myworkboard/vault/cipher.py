"""Fernet encryption keyed from OS-level protected storage."""

from __future__ import annotations

from typing import TYPE_CHECKING

import keyring
from cryptography.fernet import Fernet

from myworkboard.logging import get_logger

if TYPE_CHECKING:
    from keyring.backend import KeyringBackend

logger = get_logger("vault")

DEFAULT_SERVICE = "myworkboard"
DEFAULT_KEY_ACCOUNT = "credential-key"


class CredentialCipher:
    """Encrypts and decrypts the credential with a key held in the OS keyring.

    The Fernet key is created on the first encryption and stored in the keyring
    under ``(service, account)``. Decryption never creates a key: without one
    there is nothing the stored blob could decrypt to.
    """

    def __init__(
        self,
        service: str = DEFAULT_SERVICE,
        account: str = DEFAULT_KEY_ACCOUNT,
        backend: KeyringBackend | None = None,
    ) -> None:
        """Initialize the cipher.

        Args:
            service: Keyring service name.
            account: Keyring account name holding the Fernet key.
            backend: Keyring backend to use. Defaults to the platform keyring.
        """
        self.service = service
        self.account = account
        self._backend = backend

    @property
    def backend(self) -> KeyringBackend:
        """Get the keyring backend (platform default unless one was injected)."""
        if self._backend is None:
            self._backend = keyring.get_keyring()
        return self._backend

    def _load_key(self) -> bytes | None:
        key = self.backend.get_password(self.service, self.account)
        return key.encode("ascii") if key else None

    def _load_or_create_key(self) -> bytes:
        key = self._load_key()
        if key is None:
            logger.info("Generating credential encryption key in keyring (%s)", self.service)
            key = Fernet.generate_key()
            self.backend.set_password(self.service, self.account, key.decode("ascii"))
        return key

    def encrypt(self, secret: str) -> bytes:
        """Encrypt a secret, creating the keyring key if needed.

        Raises:
            keyring.errors.KeyringError: If the keyring cannot be read or written.
        """
        return Fernet(self._load_or_create_key()).encrypt(secret.encode("utf-8"))

    def decrypt(self, blob: bytes) -> str | None:
        """Decrypt a blob.

        Returns:
            The secret, or None when no key exists in the keyring.

        Raises:
            cryptography.fernet.InvalidToken: If the blob does not match the key.
            keyring.errors.KeyringError: If the keyring cannot be read.
        """
        key = self._load_key()
        if key is None:
            return None
        return Fernet(key).decrypt(blob).decode("utf-8")
