"""Workflow event dispatch endpoint."""

import structlog
from fastapi import APIRouter, HTTPException, Depends
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError

from slack_binding.api.v1.dependencies import get_workflow_registry
from slack_binding.core import UnknownEventError
from slack_binding.models.schemas import EventType, WorkflowResultResponse

router = APIRouter(prefix="/api/workflows", tags=["workflows"])
logger = structlog.get_logger()


@router.post("/events/{event_type}", response_model=WorkflowResultResponse)
async def dispatch_event(
    event_type: str,
    payload: dict,
    registry = Depends(get_workflow_registry),
):
    """
    Dispatch a workflow event by name (e.g. "slack.send_message").

    The workflow's return value is passed through unchanged.
    """
    try:
        event = EventType(event_type)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown event type: {event_type}")

    try:
        result = await registry.dispatch(event, payload)
    except UnknownEventError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=jsonable_encoder(e.errors()))

    logger.info("workflow_event_dispatched", event_type=event.value)
    return WorkflowResultResponse(result=result)
