from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from app.api.v1.schemas import (
    BookingListResponseSchema,
    BookingResponseSchema,
    BookingSchema,
    CreateBookingRequestSchema,
    ErrorResponseSchema,
)
from app.application.exceptions import ConflictError, NotFoundError, PersistenceError, ValidationError
from app.application.use_cases.booking import BookingUseCase
from app.core.config import settings
from app.wiring.dependencies import get_booking_use_case

router = APIRouter()
logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, conflict: BookingSchema | None = None) -> JSONResponse:
    body = ErrorResponseSchema(error=message, conflict=conflict)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True, exclude_none=True))


def storage_error(e: PersistenceError) -> JSONResponse:
    logger.exception("Booking storage failure", extra={"reason": str(e)})
    return error_response(500, "Storage unavailable.")


@router.get("/bookings")
def list_bookings(uc: BookingUseCase = Depends(get_booking_use_case)):
    try:
        bookings = uc.list_bookings()
    except PersistenceError as e:
        return storage_error(e)
    response = BookingListResponseSchema(bookings=[BookingSchema.from_entity(b) for b in bookings])
    return response.model_dump(by_alias=True)


@router.post("/bookings")
async def create_booking(request: Request, uc: BookingUseCase = Depends(get_booking_use_case)):
    body = await request.body()
    if len(body) > settings.MAX_BODY_BYTES:
        return error_response(413, "Payload too large")

    try:
        payload = json.loads(body.decode("utf-8")) if body else {}
    except (UnicodeDecodeError, json.JSONDecodeError):
        return error_response(400, "Invalid JSON")

    req = CreateBookingRequestSchema.model_validate(payload if isinstance(payload, dict) else {})

    try:
        booking = await run_in_threadpool(uc.create_booking, req.date, req.time, req.duration)
    except ValidationError as e:
        return error_response(400, e.message)
    except ConflictError as e:
        return error_response(409, str(e), conflict=BookingSchema.from_entity(e.conflict))
    except PersistenceError as e:
        return storage_error(e)

    response = BookingResponseSchema(booking=BookingSchema.from_entity(booking))
    return JSONResponse(status_code=201, content=response.model_dump(by_alias=True))


@router.delete("/bookings/{booking_id:path}")
def delete_booking(booking_id: str, uc: BookingUseCase = Depends(get_booking_use_case)):
    try:
        uc.delete_booking(booking_id)
    except NotFoundError:
        return error_response(404, "Booking not found.")
    except PersistenceError as e:
        return storage_error(e)
    return {"ok": True}


@router.api_route(
    "/{path:path}",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    include_in_schema=False,
)
def api_not_found(path: str):
    return error_response(404, "Not found.")
