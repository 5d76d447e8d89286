"""Credential Vault - Encrypted at-rest storage for the tracker bearer credential."""

from myworkboard.vault.cipher import CredentialCipher
from myworkboard.vault.exceptions import StorageError, VaultError
from myworkboard.vault.vault import CredentialVault

__all__ = [
    "CredentialCipher",
    "CredentialVault",
    "StorageError",
    "VaultError",
]
