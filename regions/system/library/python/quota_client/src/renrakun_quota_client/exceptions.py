"""Quota client exceptions."""

from __future__ import annotations


class QuotaClientError(Exception):
    """Base quota client error.

    Raised whenever the gate could not give a usable answer. Callers must
    treat the outcome of a consume as unknown and reject the write.
    """

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


class QuotaClientErrorCodes:
    """QuotaClientError code constants."""

    HTTP_ERROR: str = "HTTP_ERROR"
    TIMEOUT: str = "TIMEOUT"
    INVALID_REQUEST: str = "INVALID_REQUEST"
    INVALID_RESPONSE: str = "INVALID_RESPONSE"
    GATE_ERROR: str = "GATE_ERROR"


class QuotaExceededError(Exception):
    """Today's write budget is exhausted."""

    code = "SERVICE_PAUSED_DAILY_QUOTA"

    def __init__(self, resume_at: str) -> None:
        self.resume_at = resume_at
        super().__init__(f"Daily write quota reached, resume at {resume_at}")
