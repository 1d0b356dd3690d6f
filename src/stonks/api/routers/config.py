"""Config API: POST /config dispatches ledger mutations by action name."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from stonks.api.deps import get_config_action_service
from stonks.api.schemas import ConfigActionRequest, ConfigActionResponse
from stonks.services import ConfigActionService

router = APIRouter(prefix="/config", tags=["config"])


@router.post("", response_model=ConfigActionResponse)
def post_config_action(
    request: ConfigActionRequest,
    service: ConfigActionService = Depends(get_config_action_service),
):
    """
    Apply one mutation.

    Actions: update_settings, add_holding, update_holding, delete_holding,
    toggle_visibility, add_transaction, delete_transaction. A rejected or
    failed action answers 400 with ``{"success": false, "error": ...}``.
    """
    result = service.dispatch(request.action, request.params)
    body = ConfigActionResponse(success=result.success, error=result.error)
    if not result.success:
        return JSONResponse(status_code=400, content=body.model_dump())
    return body
