"""Account Schemas — user/faculty registration, login, and profiles.

Invariants:
    - email lower-cased and stripped before it reaches the DB
    - password 8-72 chars (bcrypt limit)
    - wallet_address is checksummed later by the chain layer, here only shape-checked
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

WALLET_PATTERN = r"^0x[0-9a-fA-F]{40}$"


class _EmailNormalized(BaseModel):
    @field_validator("email", mode="before", check_fields=False)
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class UserCreate(_EmailNormalized):
    """Student registration."""
    roll_number: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=8, max_length=72)
    dob: date | None = None
    wallet_address: str = Field(pattern=WALLET_PATTERN)

    @field_validator("roll_number", "name")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v


class FacultyCreate(_EmailNormalized):
    """Faculty registration."""
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=8, max_length=72)
    department: str | None = Field(None, max_length=100)
    wallet_address: str = Field(pattern=WALLET_PATTERN)


class LoginRequest(_EmailNormalized):
    email: EmailStr
    password: str = Field(min_length=1, max_length=72)


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    roll_number: str
    name: str
    email: str
    dob: date | None
    wallet_address: str | None
    identity_token_id: int | None
    identity_tx_hash: str | None
    created_at: datetime


class FacultyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    faculty_id: int
    name: str
    email: str
    department: str | None
    wallet_address: str | None
    identity_token_id: int | None
    identity_tx_hash: str | None
    created_at: datetime


class GradeAssign(BaseModel):
    """Faculty grade for one registration."""
    registration_id: int = Field(ge=1)
    grade: int = Field(ge=0, le=100)
