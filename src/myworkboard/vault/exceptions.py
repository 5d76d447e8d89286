"""Custom exceptions for the Credential Vault."""


class VaultError(Exception):
    """Base exception for Credential Vault errors."""


class StorageError(VaultError):
    """Encrypted write or delete of the credential failed."""
