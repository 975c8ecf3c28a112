"""Amenity Routes — room bookings and event joins via AmenitiesNFT."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portal.config import get_settings
from portal.infrastructure.chain_client import ChainClient, get_chain
from portal.infrastructure.database import get_db
from portal.models.booking import Booking
from portal.schemas.actions import EventJoinRequest, RoomBookingRequest
from portal.services.handle_amenities import AmenityHandlers

router = APIRouter(prefix="/api/v1", tags=["amenities"])


def _booking_response(booking: Booking) -> dict:
    return {
        "booking_id": booking.booking_id,
        "user_id": booking.user_id,
        "room_id": booking.room_id,
        "event_id": booking.event_id,
        "booking_date": booking.booking_date.isoformat(),
        "start_time": booking.start_time.isoformat() if booking.start_time else None,
        "end_time": booking.end_time.isoformat() if booking.end_time else None,
        "token_uri": booking.token_uri,
        "transaction_hash": booking.transaction_hash,
    }


@router.post("/bookings/rooms", status_code=status.HTTP_201_CREATED)
async def book_room(
    body: RoomBookingRequest,
    db: AsyncSession = Depends(get_db),
    chain: ChainClient = Depends(get_chain),
):
    booking, receipt = await AmenityHandlers(db, chain, get_settings()).book_room(body)
    return {
        "success": True,
        "booking": _booking_response(booking),
        "receipt": receipt.to_response(),
    }


@router.post("/events/{event_id}/join", status_code=status.HTTP_201_CREATED)
async def join_event(
    event_id: int,
    body: EventJoinRequest,
    db: AsyncSession = Depends(get_db),
    chain: ChainClient = Depends(get_chain),
):
    booking, receipt = await AmenityHandlers(db, chain, get_settings()).join_event(
        event_id, body,
    )
    return {
        "success": True,
        "booking": _booking_response(booking),
        "receipt": receipt.to_response(),
    }
