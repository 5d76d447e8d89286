"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends

from myworkboard.aggregator import WorkAggregator
from myworkboard.tracker import IssueQueryClient
from myworkboard.vault import CredentialCipher, CredentialVault

# Global CredentialVault instance (initialized on app startup)
_vault: CredentialVault | None = None


def init_vault(
    db_path: str = "myworkboard.db", cipher: CredentialCipher | None = None
) -> CredentialVault:
    """Initialize the global CredentialVault instance."""
    global _vault  # noqa: PLW0603
    _vault = CredentialVault(db_path, cipher=cipher)
    return _vault


def close_vault() -> None:
    """Close the global CredentialVault instance."""
    global _vault  # noqa: PLW0603
    if _vault is not None:
        _vault.close()
        _vault = None


def get_vault() -> Generator[CredentialVault, None, None]:
    """Dependency that provides the CredentialVault instance."""
    if _vault is None:
        raise RuntimeError("CredentialVault not initialized. Call init_vault() first.")
    yield _vault


VaultDep = Annotated[CredentialVault, Depends(get_vault)]

# Global IssueQueryClient instance, shared by all requests
_query_client: IssueQueryClient | None = None


def init_query_client(timeout: float) -> IssueQueryClient:
    """Initialize the global IssueQueryClient instance."""
    global _query_client  # noqa: PLW0603
    _query_client = IssueQueryClient(timeout=timeout)
    return _query_client


async def close_query_client() -> None:
    """Close the global IssueQueryClient instance."""
    global _query_client  # noqa: PLW0603
    if _query_client is not None:
        await _query_client.aclose()
        _query_client = None


# Global WorkAggregator instance
_aggregator: WorkAggregator | None = None


def init_aggregator(aggregator: WorkAggregator) -> None:
    """Initialize the global WorkAggregator instance."""
    global _aggregator  # noqa: PLW0603
    _aggregator = aggregator


def close_aggregator() -> None:
    """Close the global WorkAggregator instance."""
    global _aggregator  # noqa: PLW0603
    _aggregator = None


def get_aggregator() -> Generator[WorkAggregator, None, None]:
    """Dependency that provides the WorkAggregator instance."""
    if _aggregator is None:
        raise RuntimeError("WorkAggregator not initialized. Call init_aggregator() first.")
    yield _aggregator


AggregatorDep = Annotated[WorkAggregator, Depends(get_aggregator)]
