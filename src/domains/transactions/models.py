"""Pydantic models for donation transactions."""

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator


class TransactionStatus(StrEnum):
    PENDING = "pending"
    VERIFIED = "verified"
    FLAGGED = "flagged"
    BLOCKED = "blocked"


class ExportFormat(StrEnum):
    JSON = "json"
    CSV = "csv"


class TransactionCreateRequest(BaseModel):
    transaction_hash: str = Field(min_length=1)
    nonprofit_name: str = Field(min_length=1)
    nonprofit_ein: str = "Unknown"
    donor_address: str = Field(min_length=1)
    recipient_address: str = Field(min_length=1)
    amount: float = Field(gt=0, allow_inf_nan=False)
    block_number: int = Field(default=0, ge=0)
    gas_used: str = "21000"

    @field_validator("nonprofit_ein", mode="before")
    @classmethod
    def _default_missing_ein(cls, value: str | None) -> str:
        if value is None or not str(value).strip():
            return "Unknown"
        return str(value).strip()


class StatusUpdateRequest(BaseModel):
    status: TransactionStatus
    notes: str | None = Field(default=None, max_length=1000)


class BulkUpdateFields(BaseModel):
    """Fields an operator may overwrite in bulk; scoring output stays untouched."""

    status: TransactionStatus | None = None
    notes: str | None = Field(default=None, max_length=1000)


class BulkUpdateRequest(BaseModel):
    transaction_ids: list[int] = Field(min_length=1)
    updates: BulkUpdateFields
