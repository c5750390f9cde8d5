import logging

from src.app.services.event_sink import DomainEvent, IEventSink

logger = logging.getLogger(__name__)


class LoggingEventSink(IEventSink):
    """Writes events to the application log; stands in for a push transport"""

    async def publish(self, event: DomainEvent) -> None:
        logger.info(
            f"event={event.name} kind={event.entity_kind} id={event.entity_id} "
            f"org={event.organization_id} actor={event.actor_id} payload={event.payload}"
        )
