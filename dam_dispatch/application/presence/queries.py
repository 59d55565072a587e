"""Device presence queries."""
from pydantic import Field

from dam_dispatch.application.dto.base import BaseQuery

from .dto import PresenceFilter


class GetPresencesQuery(BaseQuery):
    """
    Page through the presence history, newest first.

    Result: ``PaginatedResult[DevicePresenceDTO]``
    """
    cacheable = True

    filter: PresenceFilter = Field(default_factory=PresenceFilter)


class GetPresenceByIdQuery(BaseQuery):
    """
    Detail of a single presence event.

    Result: ``Optional[DevicePresenceDTO]``
    """
    cacheable = True

    id: int
