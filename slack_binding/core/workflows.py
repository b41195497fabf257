"""
Declarative event/workflow bindings for the Slack integration.

A workflow engine dispatches an event by name with a payload; the registry
validates the payload and awaits the bound workflow, returning its value
unchanged. The Slack binding has no control flow of its own: it awaits
SlackAdapter.send with the event's channel and message.
"""

from typing import Any, Awaitable, Callable, Dict, Optional, Type
import structlog
from pydantic import BaseModel

from slack_binding.adapters.integration import IntegrationManager, load_integration_manager
from slack_binding.adapters.slack import SlackAdapter
from slack_binding.config.settings import Settings, settings as default_settings
from slack_binding.config.store import ConfigStore
from slack_binding.models.schemas import EventType, SendSlackMessage

logger = structlog.get_logger()


class UnknownEventError(Exception):
    """Raised when dispatching an event that has no bound workflow"""

    pass


class WorkflowRegistry:
    """Maps event types to their payload model and workflow coroutine."""

    def __init__(self):
        self._bindings: Dict[EventType, tuple] = {}

    def register(
        self,
        event_type: EventType,
        model: Type[BaseModel],
        workflow: Callable[[BaseModel], Awaitable[Any]],
    ):
        """
        Bind a workflow to an event type.

        Args:
            event_type: The event that triggers the workflow
            model: Pydantic model the payload must satisfy
            workflow: Async function receiving the validated event
        """
        self._bindings[event_type] = (model, workflow)
        logger.info("workflow_registered", event_type=event_type.value, workflow=workflow.__name__)

    def is_bound(self, event_type: EventType) -> bool:
        return event_type in self._bindings

    async def dispatch(self, event_type: EventType, payload: dict) -> Any:
        """
        Validate the payload and run the bound workflow.

        Raises:
            UnknownEventError: If nothing is bound to event_type
            pydantic.ValidationError: If the payload does not match the event model
        """
        if event_type not in self._bindings:
            raise UnknownEventError(f"No workflow bound to event: {event_type}")

        model, workflow = self._bindings[event_type]
        event = model.model_validate(payload)

        logger.debug("dispatching_event", event_type=event_type.value, workflow=workflow.__name__)
        return await workflow(event)


def register_slack_workflows(registry: WorkflowRegistry, adapter: SlackAdapter):
    """Bind the Slack events to the adapter"""

    async def send_slack_message(event: SendSlackMessage):
        return await adapter.send(event.channel, event.message)

    registry.register(EventType.SEND_SLACK_MESSAGE, SendSlackMessage, send_slack_message)


def initialize_slack_config(
    config: Optional[dict],
    store: ConfigStore,
    settings: Optional[Settings] = None,
) -> Optional[IntegrationManager]:
    """
    Seed the local store and load the integration manager.

    Args:
        config: Explicit configuration (wins over persisted values)
        store: The store to initialize
        settings: Environment settings; defaults to the global instance

    Returns:
        The integration manager, or None if none is available
    """
    store.init(config)
    return load_integration_manager(settings or default_settings)
