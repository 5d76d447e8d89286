"""Credential endpoints: get, save and clear the tracker credential."""

from fastapi import APIRouter

from myworkboard.api.dependencies import VaultDep
from myworkboard.api.models import APIResponse, CredentialResponse, CredentialSave

router = APIRouter(tags=["credential"])


@router.get("/credential", response_model=APIResponse[CredentialResponse])
def get_credential(vault: VaultDep) -> APIResponse[CredentialResponse]:
    """Return the stored credential, or stored=false when absent or unreadable."""
    credential = vault.retrieve()
    return APIResponse(
        data=CredentialResponse(stored=credential is not None, credential=credential)
    )


@router.put("/credential", response_model=APIResponse[CredentialResponse])
def save_credential(
    credential: CredentialSave, vault: VaultDep
) -> APIResponse[CredentialResponse]:
    """Encrypt and store the credential, replacing any previous one."""
    vault.store(credential.credential)
    return APIResponse(data=CredentialResponse(stored=True))


@router.delete("/credential", response_model=APIResponse[CredentialResponse])
def clear_credential(vault: VaultDep) -> APIResponse[CredentialResponse]:
    """Clear the credential. Succeeds when nothing is stored."""
    vault.clear()
    return APIResponse(data=CredentialResponse(stored=False))
