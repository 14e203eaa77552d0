"""renrakun actor limit library."""

from .exceptions import ActorLimitError, ActorLimitStoreError
from .headers import JOIN_CREATE_PREFIX, UNKNOWN_ACTOR, join_create_actor_key, read_actor_ip
from .limiter import ActorLimiter
from .store import ActorLimitStore, InMemoryActorLimitStore, SqliteActorLimitStore
from .types import ActorLimitResult

__all__ = [
    "ActorLimitError",
    "ActorLimitResult",
    "ActorLimitStore",
    "ActorLimitStoreError",
    "ActorLimiter",
    "InMemoryActorLimitStore",
    "JOIN_CREATE_PREFIX",
    "SqliteActorLimitStore",
    "UNKNOWN_ACTOR",
    "join_create_actor_key",
    "read_actor_ip",
]
