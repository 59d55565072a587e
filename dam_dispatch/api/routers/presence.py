"""Device presence API routes."""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from dam_dispatch.api.dependencies import get_cancellation, get_dispatcher
from dam_dispatch.api.responses import envelope_to_response, not_found
from dam_dispatch.application.cancellation import CancellationToken
from dam_dispatch.application.dto.responses import ApiResponse
from dam_dispatch.application.presence import (
    CreateDevicePresenceCommand,
    GetPresenceByIdQuery,
    GetPresencesQuery,
    PresenceFilter,
)
from dam_dispatch.infrastructure.dispatch import Dispatcher

router = APIRouter(prefix="/presences", tags=["Presence"])


class CreatePresenceRequest(BaseModel):
    """
    Body of a presence notification.

    Fields are lenient here so that missing values are reported by the
    dispatcher's validation rules rather than by request parsing.
    """
    serial_number: str = ""
    timestamp: Optional[datetime] = None
    device_activity_id: int = Field(0, description="Activity the device was seen in")


@router.get("", summary="List Presences", description="Presence history, newest first")
async def list_presences(
    page_number: int = Query(1, description="1-based page number"),
    page_size: int = Query(10, description="Presences per page"),
    activity_id: Optional[int] = Query(None, description="Only presences of this activity"),
    dispatcher: Dispatcher = Depends(get_dispatcher),
    cancellation: CancellationToken = Depends(get_cancellation),
) -> JSONResponse:
    query = GetPresencesQuery(
        filter=PresenceFilter(page_number=page_number, page_size=page_size, activity_id=activity_id)
    )
    return envelope_to_response(await dispatcher.query(query, cancellation))


@router.get("/{presence_id}", summary="Get Presence", description="Get one presence event by id")
async def get_presence(
    presence_id: int,
    dispatcher: Dispatcher = Depends(get_dispatcher),
    cancellation: CancellationToken = Depends(get_cancellation),
) -> JSONResponse:
    response = await dispatcher.query(GetPresenceByIdQuery(id=presence_id), cancellation)
    if response.success and response.data is None:
        return not_found(f"No se encontró presencia con ID: {presence_id}")
    return envelope_to_response(response)


@router.post("", summary="Notify Presence", description="Record that a device was seen")
async def create_presence(
    body: CreatePresenceRequest,
    dispatcher: Dispatcher = Depends(get_dispatcher),
    cancellation: CancellationToken = Depends(get_cancellation),
) -> JSONResponse:
    command = CreateDevicePresenceCommand(
        serial_number=body.serial_number,
        timestamp=body.timestamp,
        device_activity_id=body.device_activity_id,
    )
    response = await dispatcher.send(command, cancellation)
    if response.success:
        response = ApiResponse.ok(response.data, message="Historial de presencia actualizado.")
    return envelope_to_response(response, success_status=201)
