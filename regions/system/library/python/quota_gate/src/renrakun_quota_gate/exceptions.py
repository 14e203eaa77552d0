"""quota_gate exceptions."""

from __future__ import annotations


class QuotaGateError(Exception):
    """Base quota gate error."""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class QuotaGateErrorCodes:
    """QuotaGateError code constants."""

    INVALID_CONSUME_PAYLOAD: str = "INVALID_CONSUME_PAYLOAD"
    INVALID_RESET_PAYLOAD: str = "INVALID_RESET_PAYLOAD"
    STORAGE_ERROR: str = "STORAGE_ERROR"
    NOT_FOUND: str = "NOT_FOUND"


class InvalidPayloadError(QuotaGateError):
    """Caller supplied a malformed consume/force-reset payload."""


class StorageError(QuotaGateError):
    """Durable storage read or write failed."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(QuotaGateErrorCodes.STORAGE_ERROR, message, cause)
