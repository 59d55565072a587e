"""Device presence message validation rules."""
from dam_dispatch.application.validation import (
    ValidatorRegistry,
    greater_than,
    is_set,
    not_empty,
    pagination_rules,
)

from .commands import CreateDevicePresenceCommand
from .queries import GetPresenceByIdQuery, GetPresencesQuery

SERIAL_NUMBER_REASON = "El Serial Number es obligatorio."
TIMESTAMP_REASON = "La fecha y hora de presencia es obligatoria."
DEVICE_ACTIVITY_REASON = "Se requiere un ID de actividad de dispositivo válido."
ACTIVITY_FILTER_REASON = "Si filtra por actividad, el ID no puede estar vacío."
PRESENCE_ID_REASON = "Se requiere un ID de presencia válido."


def register_validators(registry: ValidatorRegistry) -> None:
    registry.register(
        CreateDevicePresenceCommand,
        not_empty("serial_number", SERIAL_NUMBER_REASON),
        not_empty("timestamp", TIMESTAMP_REASON),
        greater_than("device_activity_id", 0, DEVICE_ACTIVITY_REASON),
    )
    registry.register(
        GetPresencesQuery,
        *pagination_rules("filter"),
        greater_than(
            "filter.activity_id", 0, ACTIVITY_FILTER_REASON, when=is_set("filter.activity_id")
        ),
    )
    registry.register(GetPresenceByIdQuery, greater_than("id", 0, PRESENCE_ID_REASON))
