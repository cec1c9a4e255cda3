# =============================================================================
# app/routers/notifications.py - Notification Endpoints
# =============================================================================
# Diagnostic endpoint that fires a Novu workflow, used to verify the provider
# credentials and workflow wiring of an environment end to end.
# =============================================================================

import logging
import re
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from app.dependencies import NotificationClientDep, RequestContextDep
from app.exceptions import ApiError
from core.models.errors import ErrorCode, error_schema_for
from lib.notifications import NotificationError

logger = logging.getLogger(__name__)

router = APIRouter()

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


# =============================================================================
# Request/Response Models
# =============================================================================

class NotificationTestRequest(BaseModel):
    """Subscriber and workflow to send a test notification to."""
    workflow_id: str = Field(default="test-workflow-1234", min_length=1, max_length=255)
    subscriber_id: str = Field(..., min_length=1, max_length=255, examples=["omar-12345"])
    email: str = Field(..., examples=["omar@mando.cx"])
    first_name: str | None = Field(default=None, max_length=255, examples=["Omar"])

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "workflowId": "test-workflow-1234",
                "subscriberId": "omar-12345",
                "email": "omar@mando.cx",
                "firstName": "Omar",
            }
        },
    )

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        if not EMAIL_PATTERN.match(value):
            raise PydanticCustomError("invalid_email", "Invalid email")
        return value

    def subscriber(self) -> dict[str, Any]:
        """Novu "to" object."""
        to = {"subscriberId": self.subscriber_id, "email": self.email}
        if self.first_name:
            to["firstName"] = self.first_name
        return to


class NotificationTestResponse(BaseModel):
    novu_response: dict[str, Any]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Endpoints
# =============================================================================

@router.post(
    "/test",
    response_model=NotificationTestResponse,
    responses={
        400: {"model": error_schema_for(ErrorCode.BAD_REQUEST)},
        500: {"model": error_schema_for(ErrorCode.INTERNAL_SERVER_ERROR)},
    },
)
async def send_test_notification(
    body: NotificationTestRequest,
    novu: NotificationClientDep,
    context: RequestContextDep,
):
    """
    Trigger a Novu workflow for one subscriber.

    The payload carries the current timestamp so the delivered message can be
    matched to this request.
    """
    now = datetime.now(timezone.utc).isoformat()

    try:
        novu_response = await novu.trigger(
            body.workflow_id,
            to=body.subscriber(),
            payload={"now": now, "requestId": context.request_id},
        )
    except NotificationError as e:
        logger.warning(f"Test notification failed for request {context.request_id}: {e}")
        raise ApiError(ErrorCode.INTERNAL_SERVER_ERROR, e.message) from e

    return NotificationTestResponse(novu_response=novu_response)
