"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import pytest
from keyring.backend import KeyringBackend
from keyring.errors import KeyringError, PasswordDeleteError

from myworkboard.vault import CredentialCipher, CredentialVault


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")
    config.addinivalue_line("markers", "real: talks to a live tracker (local only)")


class MemoryKeyring(KeyringBackend):
    """In-process keyring backend standing in for the OS keychain."""

    priority = 1  # type: ignore[assignment]

    def __init__(self) -> None:
        super().__init__()
        self.passwords: dict[tuple[str, str], str] = {}

    def get_password(self, service: str, username: str) -> str | None:
        return self.passwords.get((service, username))

    def set_password(self, service: str, username: str, password: str) -> None:
        self.passwords[(service, username)] = password

    def delete_password(self, service: str, username: str) -> None:
        if self.passwords.pop((service, username), None) is None:
            raise PasswordDeleteError(username)


class LockedKeyring(MemoryKeyring):
    """Keyring backend whose every call fails, like a locked keychain."""

    def get_password(self, service: str, username: str) -> str | None:
        raise KeyringError("keyring is locked")

    def set_password(self, service: str, username: str, password: str) -> None:
        raise KeyringError("keyring is locked")


@pytest.fixture
def memory_keyring() -> MemoryKeyring:
    """Create an empty in-memory keyring."""
    return MemoryKeyring()


@pytest.fixture
def cipher(memory_keyring: MemoryKeyring) -> CredentialCipher:
    """Create a CredentialCipher backed by the in-memory keyring."""
    return CredentialCipher(service="myworkboard-test", backend=memory_keyring)


@pytest.fixture
def vault(cipher: CredentialCipher):
    """Create an in-memory CredentialVault."""
    v = CredentialVault(":memory:", cipher=cipher)
    yield v
    v.close()


@pytest.fixture
def locked_keyring() -> LockedKeyring:
    """Create a keyring that fails every call."""
    return LockedKeyring()
