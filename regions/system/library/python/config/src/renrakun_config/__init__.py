"""renrakun config library."""

from .exceptions import ConfigError, ConfigErrorCodes
from .loader import ENV_OVERRIDES, apply_env_overrides, load
from .merger import deep_merge, set_path
from .models import (
    ActorLimitSection,
    AppConfig,
    AppSection,
    CorsSection,
    LogSection,
    ObservabilitySection,
    QuotaSection,
    ServerSection,
    StorageSection,
)

__all__ = [
    "AppSection",
    "ServerSection",
    "QuotaSection",
    "StorageSection",
    "ActorLimitSection",
    "CorsSection",
    "LogSection",
    "ObservabilitySection",
    "AppConfig",
    "ENV_OVERRIDES",
    "apply_env_overrides",
    "load",
    "deep_merge",
    "set_path",
    "ConfigError",
    "ConfigErrorCodes",
]
