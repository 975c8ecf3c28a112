"""Faculty Routes — registration (identity NFT), login, taught courses, grading."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portal.config import get_settings
from portal.infrastructure.chain_client import ChainClient, get_chain
from portal.infrastructure.database import get_db
from portal.models.faculty import Faculty
from portal.schemas.people import (
    FacultyCreate, FacultyResponse, GradeAssign, LoginRequest,
)
from portal.services.account_views import AccountViews
from portal.services.handle_enrollment import EnrollmentHandlers
from portal.services.handle_identity import IdentityHandlers
from portal.services.lookups import get_or_404

router = APIRouter(prefix="/api/v1/faculty", tags=["faculty"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def register_faculty(
    body: FacultyCreate,
    db: AsyncSession = Depends(get_db),
    chain: ChainClient = Depends(get_chain),
):
    handlers = IdentityHandlers(db, chain, get_settings())
    faculty, receipt = await handlers.register_faculty(body)
    return {
        "success": True,
        "faculty": FacultyResponse.model_validate(faculty).model_dump(mode="json"),
        "receipt": receipt.to_response(),
    }


@router.post("/login")
async def login_faculty(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    faculty = await IdentityHandlers(db, None, get_settings()).login_faculty(body)
    return {"success": True, "faculty_id": faculty.faculty_id, "name": faculty.name}


@router.get("/{faculty_id}")
async def get_faculty(faculty_id: int, db: AsyncSession = Depends(get_db)):
    faculty = await get_or_404(db, Faculty, faculty_id, "Faculty")
    return FacultyResponse.model_validate(faculty).model_dump(mode="json")


@router.get("/{faculty_id}/courses")
async def list_faculty_courses(faculty_id: int, db: AsyncSession = Depends(get_db)):
    courses = await AccountViews(db).faculty_courses(faculty_id)
    return {"faculty_id": faculty_id, "courses": courses}


@router.post("/{faculty_id}/grades")
async def assign_grade(
    faculty_id: int, body: GradeAssign, db: AsyncSession = Depends(get_db),
):
    """Record a grade on one of the faculty member's course registrations."""
    registration = await EnrollmentHandlers(db, None, get_settings()).assign_grade(
        faculty_id, body,
    )
    return {
        "success": True,
        "registration_id": registration.registration_id,
        "course_id": registration.course_id,
        "user_id": registration.user_id,
        "grade": registration.grade,
    }
