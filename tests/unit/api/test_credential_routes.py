"""Unit tests for credential routes."""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from myworkboard.api.app import register_exception_handlers
from myworkboard.api.dependencies import get_vault
from myworkboard.api.routes import credential
from myworkboard.vault import CredentialVault, StorageError


def _build_app(vault) -> FastAPI:
    app = FastAPI()

    def override_get_vault():
        yield vault

    app.dependency_overrides[get_vault] = override_get_vault
    register_exception_handlers(app)
    app.include_router(credential.router, prefix="/api/v1")
    return app


@pytest.fixture
def client(vault: CredentialVault):
    """Create a test client over an in-memory vault."""
    with TestClient(_build_app(vault), raise_server_exceptions=False) as client:
        yield client


@pytest.mark.unit
class TestGetCredential:
    """Tests for GET /api/v1/credential."""

    def test_get_credential_absent(self, client: TestClient) -> None:
        """Nothing stored reports stored=false."""
        response = client.get("/api/v1/credential")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "data": {"stored": False, "credential": None},
            "error": None,
        }

    def test_get_credential_present(self, client: TestClient, vault: CredentialVault) -> None:
        """A stored credential is returned."""
        vault.store("pat-123")

        response = client.get("/api/v1/credential")

        assert response.json()["data"] == {"stored": True, "credential": "pat-123"}


@pytest.mark.unit
class TestSaveCredential:
    """Tests for PUT /api/v1/credential."""

    def test_save_credential(self, client: TestClient, vault: CredentialVault) -> None:
        """Credential is trimmed and stored."""
        response = client.put("/api/v1/credential", json={"credential": "  pat-123  "})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"] == {"stored": True, "credential": None}
        assert vault.retrieve() == "pat-123"

    @pytest.mark.parametrize("body", [{}, {"credential": ""}, {"credential": "   "}])
    def test_save_blank_credential_rejected(
        self, client: TestClient, vault: CredentialVault, body: dict
    ) -> None:
        """Missing or blank credentials are rejected."""
        response = client.put("/api/v1/credential", json=body)

        assert response.status_code == 422
        assert vault.retrieve() is None

    def test_save_storage_failure(self) -> None:
        """StorageError maps to 500 with an error message."""
        failing_vault = MagicMock()
        failing_vault.store.side_effect = StorageError("disk full")

        with TestClient(_build_app(failing_vault), raise_server_exceptions=False) as client:
            response = client.put("/api/v1/credential", json={"credential": "pat-123"})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"data": None, "error": "Credential storage failed"}


@pytest.mark.unit
class TestClearCredential:
    """Tests for DELETE /api/v1/credential."""

    def test_clear_credential(self, client: TestClient, vault: CredentialVault) -> None:
        """Stored credential is removed."""
        vault.store("pat-123")

        response = client.delete("/api/v1/credential")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"] == {"stored": False, "credential": None}
        assert vault.retrieve() is None

    def test_clear_absent_credential_succeeds(self, client: TestClient) -> None:
        """Clearing when nothing is stored still succeeds."""
        response = client.delete("/api/v1/credential")

        assert response.status_code == status.HTTP_200_OK
