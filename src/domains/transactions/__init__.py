"""Donation transaction domain."""

from .models import (
    BulkUpdateFields,
    BulkUpdateRequest,
    ExportFormat,
    StatusUpdateRequest,
    TransactionCreateRequest,
    TransactionStatus,
)
from .recorder import TransactionRecorder

__all__ = [
    "BulkUpdateFields",
    "BulkUpdateRequest",
    "ExportFormat",
    "StatusUpdateRequest",
    "TransactionCreateRequest",
    "TransactionRecorder",
    "TransactionStatus",
]
