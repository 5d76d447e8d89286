"""SQLAlchemy models for the Credential Vault."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - used at runtime for SQLAlchemy

from sqlalchemy import DateTime, Integer, LargeBinary, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# The vault holds exactly one credential; every write targets this row.
CREDENTIAL_SLOT = 1


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class StoredCredential(Base):
    """Encrypted credential blob. Never holds plaintext."""

    __tablename__ = "credentials"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    ciphertext: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<StoredCredential(id={self.id!r}, updated_at={self.updated_at!r})>"
