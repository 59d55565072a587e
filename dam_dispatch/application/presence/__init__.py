"""Device presence feature - commands, queries, handlers and validation rules."""

from .commands import CreateDevicePresenceCommand
from .dto import DevicePresenceDTO, PresenceFilter
from .handlers import (
    CreateDevicePresenceHandler,
    GetPresenceByIdHandler,
    GetPresencesHandler,
)
from .queries import GetPresenceByIdQuery, GetPresencesQuery
from .validators import register_validators

MESSAGES = (CreateDevicePresenceCommand, GetPresencesQuery, GetPresenceByIdQuery)

__all__: list[str] = [
    "CreateDevicePresenceCommand",
    "DevicePresenceDTO",
    "PresenceFilter",
    "GetPresencesQuery",
    "GetPresenceByIdQuery",
    "CreateDevicePresenceHandler",
    "GetPresencesHandler",
    "GetPresenceByIdHandler",
    "register_validators",
    "MESSAGES",
]
