"""Service-level exceptions mapped to HTTP responses by the global handler."""


class NotFoundError(LookupError):
    """A requested record does not exist."""


class DuplicateTransactionError(Exception):
    """A transaction hash was already recorded; the existing record is attached."""

    def __init__(self, transaction_hash: str, existing: dict | None = None) -> None:
        super().__init__(f"Transaction already recorded: {transaction_hash}")
        self.transaction_hash = transaction_hash
        self.existing = existing
