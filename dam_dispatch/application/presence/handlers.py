"""Device presence command and query handlers."""
import logging
from typing import Optional

from dam_dispatch.application.cancellation import CancellationToken
from dam_dispatch.application.decorators import command_handler, query_handler
from dam_dispatch.application.dto.responses import PaginatedResult
from dam_dispatch.application.interfaces.cache_port import CachePort
from dam_dispatch.application.interfaces.command_query import CommandHandler, QueryHandler
from dam_dispatch.domain.presence import DevicePresence, DevicePresenceRepository

from .commands import CreateDevicePresenceCommand
from .dto import DevicePresenceDTO
from .queries import GetPresenceByIdQuery, GetPresencesQuery

logger = logging.getLogger(__name__)


@command_handler(CreateDevicePresenceCommand)
class CreateDevicePresenceHandler(CommandHandler[CreateDevicePresenceCommand, int]):
    """
    Stores a presence event and drops cached presence listings.

    Listings are invalidated as a whole because a new record can land on
    any page of any filter.
    """

    def __init__(
        self,
        repository: DevicePresenceRepository,
        cache: Optional[CachePort] = None,
    ):
        self.repository = repository
        self.cache = cache

    async def handle(
        self, message: CreateDevicePresenceCommand, cancellation: CancellationToken
    ) -> int:
        cancellation.raise_if_cancelled()
        presence = self.repository.add(
            DevicePresence(
                serial_number=message.serial_number,
                timestamp=message.timestamp,
                device_activity_id=message.device_activity_id,
            )
        )

        if self.cache is not None:
            removed = self.cache.invalidate_prefix(GetPresencesQuery.cache_prefix())
            logger.debug(f"Invalidated {removed} cached presence listing(s)")

        logger.info(
            f"Recorded presence {presence.id} of device {presence.serial_number} "
            f"for activity {presence.device_activity_id}"
        )
        return presence.id


@query_handler(GetPresencesQuery)
class GetPresencesHandler(QueryHandler[GetPresencesQuery, PaginatedResult[DevicePresenceDTO]]):
    """Lists presence events newest first, optionally for one activity."""

    def __init__(self, repository: DevicePresenceRepository):
        self.repository = repository

    async def handle(
        self, message: GetPresencesQuery, cancellation: CancellationToken
    ) -> PaginatedResult[DevicePresenceDTO]:
        query_filter = message.filter
        presences = self.repository.find_all()
        if query_filter.activity_id is not None:
            presences = [
                p for p in presences if p.device_activity_id == query_filter.activity_id
            ]
        presences.sort(key=lambda p: p.timestamp, reverse=True)

        cancellation.raise_if_cancelled()
        page = PaginatedResult.from_sequence(
            presences, query_filter.page_number, query_filter.page_size
        )
        return page.map(DevicePresenceDTO.from_entity)


@query_handler(GetPresenceByIdQuery)
class GetPresenceByIdHandler(QueryHandler[GetPresenceByIdQuery, Optional[DevicePresenceDTO]]):
    """Looks up one presence event."""

    def __init__(self, repository: DevicePresenceRepository):
        self.repository = repository

    async def handle(
        self, message: GetPresenceByIdQuery, cancellation: CancellationToken
    ) -> Optional[DevicePresenceDTO]:
        presence = self.repository.get_by_id(message.id)
        return DevicePresenceDTO.from_entity(presence) if presence is not None else None
