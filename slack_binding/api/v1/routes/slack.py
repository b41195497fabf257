"""Slack send/receive endpoints."""

import structlog
from fastapi import APIRouter, Depends

from slack_binding.adapters.slack import is_error
from slack_binding.api.v1.dependencies import get_slack_adapter
from slack_binding.models.schemas import SendSlackMessage, WorkflowResultResponse

router = APIRouter(prefix="/api/slack", tags=["slack"])
logger = structlog.get_logger()


@router.post("/send", response_model=WorkflowResultResponse)
async def send_message(
    event: SendSlackMessage,
    slack_adapter = Depends(get_slack_adapter),
):
    """
    Post a message to the configured Slack channel.

    Returns the message timestamp token, or {"error": ...} in the result field.
    """
    result = await slack_adapter.send(event.channel, event.message)
    logger.info("slack_send_requested", failed=is_error(result))
    return WorkflowResultResponse(result=result)


@router.get("/replies/{thread_id}", response_model=WorkflowResultResponse)
async def receive_reply(
    thread_id: str,
    slack_adapter = Depends(get_slack_adapter),
):
    """
    Wait for a reply in the thread started by thread_id.

    Blocks for the fixed reply wait before polling Slack once.
    """
    result = await slack_adapter.receive(thread_id)
    return WorkflowResultResponse(result=result)
