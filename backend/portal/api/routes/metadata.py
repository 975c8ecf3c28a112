"""Token Metadata Routes — the JSON every minted tokenURI resolves to.

Invariants:
    - Paths match the URIs built in core/token_metadata.py
    - Unknown ids return 404 in the standard error envelope
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.token_metadata import METADATA_PREFIX
from portal.infrastructure.database import get_db
from portal.services.metadata_views import MetadataViews

router = APIRouter(prefix=METADATA_PREFIX, tags=["metadata"])


@router.get("/identity/{user_id}")
async def identity_metadata(user_id: int, db: AsyncSession = Depends(get_db)):
    return await MetadataViews(db).identity(user_id)


@router.get("/faculty/{faculty_id}")
async def faculty_metadata(faculty_id: int, db: AsyncSession = Depends(get_db)):
    return await MetadataViews(db).faculty(faculty_id)


@router.get("/certificates/{user_id}-{course_id}.json")
async def certificate_metadata(
    user_id: int, course_id: int, db: AsyncSession = Depends(get_db),
):
    return await MetadataViews(db).certificate(user_id, course_id)


@router.get("/fees/{user_id}-{semester_id}.json")
async def fee_metadata(
    user_id: int, semester_id: int, db: AsyncSession = Depends(get_db),
):
    return await MetadataViews(db).fee_receipt(user_id, semester_id)


@router.get("/bookings/{booking_id}.json")
async def booking_metadata(booking_id: int, db: AsyncSession = Depends(get_db)):
    return await MetadataViews(db).booking(booking_id)
