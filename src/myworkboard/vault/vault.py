"""CredentialVault - Single-slot encrypted storage for the tracker credential."""

from __future__ import annotations

import binascii

from cryptography.fernet import InvalidToken
from keyring.errors import KeyringError
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError

from myworkboard.logging import get_logger
from myworkboard.vault.cipher import CredentialCipher
from myworkboard.vault.database import Database
from myworkboard.vault.exceptions import StorageError
from myworkboard.vault.models import CREDENTIAL_SLOT, StoredCredential

logger = get_logger("vault")


class CredentialVault:
    """Stores one bearer credential, encrypted at rest.

    ``retrieve`` is deliberately lossy: a credential that was never stored and
    one that can no longer be decrypted both come back as ``None``.
    """

    def __init__(
        self,
        db_path: str = "myworkboard.db",
        cipher: CredentialCipher | None = None,
    ) -> None:
        """Initialize the vault, creating its table if needed.

        Args:
            db_path: Path to the SQLite file holding the encrypted blob.
            cipher: Cipher used for encryption. Defaults to the OS keyring cipher.
        """
        self._db = Database(db_path)
        self._db.create_tables()
        self._cipher = cipher if cipher is not None else CredentialCipher()

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    def store(self, secret: str) -> None:
        """Encrypt and persist a credential, replacing any previous one.

        Args:
            secret: The bearer credential.

        Raises:
            ValueError: If the secret is empty or whitespace.
            StorageError: If encryption or the database write fails.
        """
        if not secret or not secret.strip():
            raise ValueError("Credential must not be empty")

        try:
            ciphertext = self._cipher.encrypt(secret)
        except (KeyringError, ValueError) as e:
            logger.error("Failed to encrypt credential: %s", type(e).__name__)
            raise StorageError("Failed to encrypt credential") from e

        session = self._db.get_session()
        try:
            stored = session.get(StoredCredential, CREDENTIAL_SLOT)
            if stored is None:
                session.add(StoredCredential(id=CREDENTIAL_SLOT, ciphertext=ciphertext))
            else:
                stored.ciphertext = ciphertext
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Failed to write credential: %s", e)
            raise StorageError("Failed to write credential") from e
        finally:
            session.close()
        logger.info("Credential stored")

    def retrieve(self) -> str | None:
        """Read and decrypt the credential.

        Returns:
            The credential, or None if it is absent or cannot be decrypted.
        """
        session = self._db.get_session()
        try:
            stored = session.get(StoredCredential, CREDENTIAL_SLOT)
            ciphertext = stored.ciphertext if stored is not None else None
        except SQLAlchemyError as e:
            logger.warning("Failed to read credential: %s", e)
            return None
        finally:
            session.close()

        if ciphertext is None:
            logger.debug("No credential stored")
            return None

        try:
            secret = self._cipher.decrypt(ciphertext)
        except (InvalidToken, KeyringError, ValueError, binascii.Error) as e:
            logger.warning("Stored credential could not be decrypted: %s", type(e).__name__)
            return None
        if secret is None:
            logger.warning("Stored credential has no encryption key in the keyring")
        return secret

    def clear(self) -> None:
        """Delete the credential. Clearing an absent credential succeeds.

        Raises:
            StorageError: If the database delete fails.
        """
        session = self._db.get_session()
        try:
            session.execute(delete(StoredCredential).where(StoredCredential.id == CREDENTIAL_SLOT))
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Failed to clear credential: %s", e)
            raise StorageError("Failed to clear credential") from e
        finally:
            session.close()
        logger.info("Credential cleared")

    def has_credential(self) -> bool:
        """Check whether a usable credential is stored."""
        return self.retrieve() is not None
