"""SQLAlchemy ORM models for CharityGuard."""

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Float, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Transaction(Base):
    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    transaction_hash: Mapped[str] = mapped_column(String, unique=True, index=True)
    nonprofit_name: Mapped[str] = mapped_column(String)
    nonprofit_ein: Mapped[str] = mapped_column(String, default="Unknown", index=True)
    donor_address: Mapped[str] = mapped_column(String, index=True)
    recipient_address: Mapped[str] = mapped_column(String)
    amount: Mapped[float] = mapped_column(Float)
    block_number: Mapped[int] = mapped_column(BigInteger, default=0)
    gas_used: Mapped[str] = mapped_column(String, default="21000")
    status: Mapped[str] = mapped_column(String, default="pending", index=True)
    is_fraudulent: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    fraud_score: Mapped[float] = mapped_column(Float, default=0.0, index=True)
    risk_flags: Mapped[list] = mapped_column(JSONB, default=list)
    ai_analysis: Mapped[dict] = mapped_column(JSONB, default=dict)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "transaction_hash": self.transaction_hash,
            "nonprofit_name": self.nonprofit_name,
            "nonprofit_ein": self.nonprofit_ein,
            "donor_address": self.donor_address,
            "recipient_address": self.recipient_address,
            "amount": self.amount,
            "block_number": self.block_number,
            "gas_used": self.gas_used,
            "status": self.status,
            "is_fraudulent": self.is_fraudulent,
            "fraud_score": self.fraud_score,
            "risk_flags": list(self.risk_flags or []),
            "ai_analysis": dict(self.ai_analysis or {}),
            "notes": self.notes,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }


class Nonprofit(Base):
    __tablename__ = "nonprofits"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, index=True)
    registration_number: Mapped[str] = mapped_column(String, unique=True, index=True)
    contact_email: Mapped[str | None] = mapped_column(String, nullable=True)
    address: Mapped[str] = mapped_column(String, default="")
    category: Mapped[str] = mapped_column(String, default="other")
    description: Mapped[str] = mapped_column(Text, default="")
    verification_status: Mapped[str] = mapped_column(String, default="pending", index=True)
    trust_level: Mapped[str] = mapped_column(String, default="new", index=True)
    trust_score: Mapped[float] = mapped_column(Float, default=0.25)
    irs_verified: Mapped[bool] = mapped_column(Boolean, default=False)
    verified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    verified_by: Mapped[str | None] = mapped_column(String, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "registration_number": self.registration_number,
            "contact_email": self.contact_email,
            "address": self.address,
            "category": self.category,
            "description": self.description,
            "verification_status": self.verification_status,
            "trust_level": self.trust_level,
            "trust_score": self.trust_score,
            "irs_verified": self.irs_verified,
            "verified_at": self.verified_at.isoformat() if self.verified_at else None,
            "verified_by": self.verified_by,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class IRSOrg(Base):
    """One row of the IRS exempt-organization business master file."""

    __tablename__ = "irs_orgs"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    ein: Mapped[str] = mapped_column(String, unique=True, index=True)
    name: Mapped[str] = mapped_column(String, index=True)
    street: Mapped[str] = mapped_column(String, default="")
    city: Mapped[str] = mapped_column(String, default="")
    state: Mapped[str] = mapped_column(String, default="")
    zip_code: Mapped[str] = mapped_column(String, default="")
    ntee_code: Mapped[str] = mapped_column(String, default="")
    deductibility: Mapped[str] = mapped_column(String, default="")
    status: Mapped[str] = mapped_column(String, default="")
    classification: Mapped[str] = mapped_column(String, default="")
    subsection: Mapped[str] = mapped_column(String, default="")
    foundation: Mapped[str] = mapped_column(String, default="")
    ruling: Mapped[str] = mapped_column(String, default="")
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
