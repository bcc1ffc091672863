from fastapi import APIRouter, Depends, HTTPException

from app.api.v1.schemas import BookingSchema, CreateBookingRequestSchema
from app.application.exceptions import BookingConflictError, BookingNotFoundError, BookingValidationError
from app.application.use_cases.bookings import BookingsUseCase
from app.wiring.dependencies import get_bookings_use_case

router = APIRouter(prefix="/bookings")


@router.post("", response_model=BookingSchema, status_code=201)
def create_booking(
    req: CreateBookingRequestSchema,
    uc: BookingsUseCase = Depends(get_bookings_use_case),
):
    try:
        booking = uc.create(req.to_command())
    except BookingValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except BookingConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return BookingSchema.from_entity(booking)


@router.get("", response_model=list[BookingSchema])
def list_bookings(uc: BookingsUseCase = Depends(get_bookings_use_case)):
    return [BookingSchema.from_entity(b) for b in uc.list_all()]


@router.get("/{identifier}", response_model=BookingSchema)
def get_booking(identifier: str, uc: BookingsUseCase = Depends(get_bookings_use_case)):
    try:
        booking = uc.get(identifier)
    except BookingNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return BookingSchema.from_entity(booking)


@router.delete("/{identifier}", response_model=BookingSchema)
def cancel_booking(identifier: str, uc: BookingsUseCase = Depends(get_bookings_use_case)):
    try:
        booking = uc.cancel(identifier)
    except BookingNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return BookingSchema.from_entity(booking)
