"""User Routes — registration (identity NFT), login, and dashboard views.

Invariants:
    - POST /users mints the identity NFT before responding (201)
    - Responses never include password_hash
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portal.config import get_settings
from portal.infrastructure.chain_client import ChainClient, get_chain
from portal.infrastructure.database import get_db
from portal.models.user import User
from portal.schemas.people import LoginRequest, UserCreate, UserResponse
from portal.services.account_views import AccountViews
from portal.services.handle_identity import IdentityHandlers
from portal.services.lookups import get_or_404

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def register_user(
    body: UserCreate,
    db: AsyncSession = Depends(get_db),
    chain: ChainClient = Depends(get_chain),
):
    """Store the user and mint their identity NFT."""
    handlers = IdentityHandlers(db, chain, get_settings())
    user, receipt = await handlers.register_user(body)
    return {
        "success": True,
        "user": UserResponse.model_validate(user).model_dump(mode="json"),
        "receipt": receipt.to_response(),
    }


@router.post("/login")
async def login_user(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    user = await IdentityHandlers(db, None, get_settings()).login_user(body)
    return {"success": True, "user_id": user.user_id, "name": user.name}


@router.get("/{user_id}")
async def get_user(user_id: int, db: AsyncSession = Depends(get_db)):
    user = await get_or_404(db, User, user_id, "User")
    return UserResponse.model_validate(user).model_dump(mode="json")


@router.get("/{user_id}/courses")
async def list_user_courses(user_id: int, db: AsyncSession = Depends(get_db)):
    """Dashboard: courses the user is registered for."""
    courses = await AccountViews(db).user_courses(user_id)
    return {"user_id": user_id, "courses": courses}


@router.get("/{user_id}/certificates/eligible")
async def list_certificate_eligibility(user_id: int, db: AsyncSession = Depends(get_db)):
    courses = await AccountViews(db).certificate_status(user_id)
    return {"user_id": user_id, "courses": courses}


@router.get("/{user_id}/fees")
async def get_fee_summary(user_id: int, db: AsyncSession = Depends(get_db)):
    return await AccountViews(db).fee_summary(user_id)


@router.get("/{user_id}/bookings")
async def list_user_bookings(user_id: int, db: AsyncSession = Depends(get_db)):
    bookings = await AccountViews(db).user_bookings(user_id)
    return {"user_id": user_id, **bookings}
