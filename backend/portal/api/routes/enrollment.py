"""Course Registration Route — DB row + MyCourseReg.registerCourse."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portal.config import get_settings
from portal.infrastructure.chain_client import ChainClient, get_chain
from portal.infrastructure.database import get_db
from portal.schemas.actions import CourseRegistrationRequest
from portal.services.handle_enrollment import EnrollmentHandlers

router = APIRouter(prefix="/api/v1/registrations", tags=["enrollment"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def register_course(
    body: CourseRegistrationRequest,
    db: AsyncSession = Depends(get_db),
    chain: ChainClient = Depends(get_chain),
):
    registration, receipt = await EnrollmentHandlers(
        db, chain, get_settings(),
    ).register_course(body)
    return {
        "success": True,
        "registration": {
            "registration_id": registration.registration_id,
            "user_id": registration.user_id,
            "course_id": registration.course_id,
            "registration_date": registration.registration_date.isoformat(),
            "transaction_hash": registration.transaction_hash,
        },
        "receipt": receipt.to_response(),
    }
