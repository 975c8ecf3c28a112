"""Amenity Handlers — book_room and join_event, both minted on the amenities contract.

Invariants:
    - book_room: room exists, date not past, [start, end) free for that room and date
    - join_event: event not past, user not already joined, joined < capacity
    - Booking rows are flushed first: the booking id is part of the token URI

Design Decisions:
    - Overlap and capacity are pre-check-then-insert; two concurrent requests can
      both pass the check
"""

from datetime import date

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.config import Settings
from portal.core.domain_types import ContractName
from portal.core.enforce_amenities import (
    check_event_capacity, check_not_in_past, check_slot_free,
)
from portal.core.errors import DuplicateRecordError, ErrorContext
from portal.core.token_metadata import booking_token_uri
from portal.infrastructure.chain_client import ChainClient, ChainReceipt
from portal.models.booking import Booking
from portal.models.event import Event
from portal.models.room import Room
from portal.schemas.actions import EventJoinRequest, RoomBookingRequest
from portal.services.dual_write import record_dual_write
from portal.services.lookups import get_or_404, get_user_with_identity, resolve_wallet


async def count_event_joins(db: AsyncSession, event_id: int) -> int:
    result = await db.execute(
        select(func.count(Booking.booking_id)).where(Booking.event_id == event_id)
    )
    return int(result.scalar_one())


class AmenityHandlers:
    """Room and event bookings mirrored onto the Amenities contract."""

    def __init__(self, db: AsyncSession, chain: ChainClient, settings: Settings):
        self.db = db
        self.chain = chain
        self.settings = settings

    async def book_room(self, body: RoomBookingRequest) -> tuple[Booking, ChainReceipt]:
        user = await get_user_with_identity(self.db, body.user_id)
        room = await get_or_404(self.db, Room, body.room_id, "Room")
        check_not_in_past(body.booking_date, date.today(), "Booking")

        result = await self.db.execute(
            select(Booking.start_time, Booking.end_time)
            .where(Booking.room_id == room.room_id)
            .where(Booking.booking_date == body.booking_date)
        )
        check_slot_free(room.room_id, body.start_time, body.end_time, result.all())
        wallet = resolve_wallet(body.wallet_address, user.wallet_address)

        booking = Booking(
            user_id=user.user_id,
            room_id=room.room_id,
            booking_date=body.booking_date,
            start_time=body.start_time,
            end_time=body.end_time,
        )
        self.db.add(booking)
        await self.db.flush()
        booking.token_uri = booking_token_uri(
            self.settings.public_base_url, booking.booking_id,
        )

        def apply(receipt: ChainReceipt) -> None:
            booking.transaction_hash = receipt.tx_hash

        receipt = await record_dual_write(
            self.db,
            self.chain.transact(
                ContractName.AMENITIES, "bookRoom", wallet, room.room_id, booking.token_uri,
                context=ErrorContext(user_id=user.user_id),
            ),
            apply,
            action="book_room",
            log_extra={"user_id": user.user_id, "room_id": room.room_id},
        )
        return booking, receipt

    async def join_event(
        self, event_id: int, body: EventJoinRequest,
    ) -> tuple[Booking, ChainReceipt]:
        user = await get_user_with_identity(self.db, body.user_id)
        event = await get_or_404(self.db, Event, event_id, "Event")
        check_not_in_past(event.event_date, date.today(), "Event")

        result = await self.db.execute(
            select(Booking.booking_id)
            .where(Booking.event_id == event.event_id)
            .where(Booking.user_id == user.user_id)
        )
        if result.first() is not None:
            raise DuplicateRecordError(
                f"User {user.user_id} already joined event {event.event_id}",
            )
        joined = await count_event_joins(self.db, event.event_id)
        check_event_capacity(event.event_id, joined, event.capacity)
        wallet = resolve_wallet(body.wallet_address, user.wallet_address)

        booking = Booking(
            user_id=user.user_id,
            event_id=event.event_id,
            booking_date=event.event_date,
        )
        self.db.add(booking)
        await self.db.flush()
        booking.token_uri = booking_token_uri(
            self.settings.public_base_url, booking.booking_id,
        )

        def apply(receipt: ChainReceipt) -> None:
            booking.transaction_hash = receipt.tx_hash

        receipt = await record_dual_write(
            self.db,
            self.chain.transact(
                ContractName.AMENITIES, "joinEvent", wallet, event.event_id, booking.token_uri,
                context=ErrorContext(user_id=user.user_id),
            ),
            apply,
            action="join_event",
            log_extra={"user_id": user.user_id, "event_id": event.event_id},
        )
        return booking, receipt
