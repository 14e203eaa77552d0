"""renrakun quota gate library."""

from .exceptions import (
    InvalidPayloadError,
    QuotaGateError,
    QuotaGateErrorCodes,
    StorageError,
)
from .gate import STORAGE_KEY, QuotaGate
from .memory import InMemoryStorage
from .models import EMPTY_STATUS, QuotaRecord, QuotaState, WindowInput
from .namespace import GLOBAL_GATE, GateId, QuotaGateNamespace
from .server import create_app
from .sqlite import SqliteStorage
from .store import DurableStorage

__all__ = [
    "DurableStorage",
    "EMPTY_STATUS",
    "GLOBAL_GATE",
    "GateId",
    "InMemoryStorage",
    "InvalidPayloadError",
    "QuotaGate",
    "QuotaGateError",
    "QuotaGateErrorCodes",
    "QuotaGateNamespace",
    "QuotaRecord",
    "QuotaState",
    "STORAGE_KEY",
    "SqliteStorage",
    "StorageError",
    "WindowInput",
    "create_app",
]
