"""FastAPI routes for the Notifications context.

Thin adapter over the staff chat broadcast; no business logic.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from notifications.api.schemas import SendMessageRequest, SendMessageResponse
from notifications.dispatch import broadcast

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.post("/messages", response_model=SendMessageResponse)
async def send_message(body: SendMessageRequest):
    """Send free text to every configured staff chat."""
    result = broadcast(body.text, parse_mode=body.parse_mode)
    response = SendMessageResponse(
        success=result.success,
        delivered=result.delivered,
        failed=result.failed,
        errors=result.errors,
    )
    if not result.success:
        return JSONResponse(status_code=502, content=response.model_dump())
    return response
