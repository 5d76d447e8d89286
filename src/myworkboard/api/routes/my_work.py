"""My Work endpoint: builds the kanban board for a user."""

from fastapi import APIRouter

from myworkboard.api.dependencies import AggregatorDep
from myworkboard.api.models import (
    APIResponse,
    FetchMyWorkRequest,
    KanbanResponse,
    kanban_to_response,
)

router = APIRouter(tags=["my-work"])


@router.post(
    "/my-work", response_model=APIResponse[KanbanResponse], response_model_by_alias=True
)
async def fetch_my_work(
    query: FetchMyWorkRequest, aggregator: AggregatorDep
) -> APIResponse[KanbanResponse]:
    """Fetch the user's sub-tasks and their initiatives, grouped by status."""
    model = await aggregator.fetch_my_work(
        query.base_url,
        query.project_key,
        query.issue_type_name,
        query.username,
    )
    return APIResponse(data=kanban_to_response(model))
