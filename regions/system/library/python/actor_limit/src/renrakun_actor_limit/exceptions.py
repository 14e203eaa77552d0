"""Actor limit exceptions."""

from __future__ import annotations


class ActorLimitError(Exception):
    """Actor exceeded its daily create/join limit."""

    def __init__(
        self,
        message: str,
        code: str = "LIMIT_EXCEEDED",
        actor_key: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.actor_key = actor_key


class ActorLimitStoreError(Exception):
    """Actor limit store read or write failed."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.code = "STORE_ERROR"
        if cause is not None:
            self.__cause__ = cause
