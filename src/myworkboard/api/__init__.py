"""REST API for MyWorkBoard."""

from myworkboard.api.app import create_app
from myworkboard.api.models import (
    APIResponse,
    CredentialResponse,
    CredentialSave,
    FetchMyWorkRequest,
    KanbanResponse,
)

__all__ = [
    "APIResponse",
    "CredentialResponse",
    "CredentialSave",
    "FetchMyWorkRequest",
    "KanbanResponse",
    "create_app",
]
