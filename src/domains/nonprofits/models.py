"""Pydantic models for nonprofit registration and verification."""

from enum import StrEnum

from pydantic import BaseModel, EmailStr, Field


class VerificationStatus(StrEnum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class TrustLevel(StrEnum):
    NEW = "new"
    TRUSTED = "trusted"
    WHITELISTED = "whitelisted"
    BLACKLISTED = "blacklisted"


class NonprofitCategory(StrEnum):
    EDUCATION = "education"
    HEALTHCARE = "healthcare"
    ENVIRONMENT = "environment"
    SOCIAL = "social"
    RELIGIOUS = "religious"
    ARTS = "arts"
    ANIMALS = "animals"
    HUMAN_RIGHTS = "human_rights"
    OTHER = "other"


class IRSData(BaseModel):
    name: str
    status: str = ""
    ntee_code: str = ""
    deductibility: str = ""
    classification: str = ""
    city: str = ""
    state: str = ""


class VerificationResult(BaseModel):
    is_valid: bool
    verification_status: VerificationStatus
    trust_level: TrustLevel
    trust_score: float = Field(ge=0.0, le=1.0)
    irs_data: IRSData | None = None
    error: str | None = None


class NonprofitRegisterRequest(BaseModel):
    ein: str = Field(pattern=r"^\d{2}-?\d{7}$")
    name: str = Field(min_length=2, max_length=200)
    contact_email: EmailStr
    address: str = Field(default="", max_length=500)
    category: NonprofitCategory = NonprofitCategory.OTHER
    description: str = Field(default="", max_length=1000)


class NonprofitUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=200)
    contact_email: EmailStr | None = None
    address: str | None = Field(default=None, max_length=500)
    category: NonprofitCategory | None = None
    description: str | None = Field(default=None, max_length=1000)
    verification_status: VerificationStatus | None = None
    trust_level: TrustLevel | None = None
