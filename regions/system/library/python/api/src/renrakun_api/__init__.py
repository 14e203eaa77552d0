"""renrakun API library."""

from .app import SERVICE_NAME, create_app
from .bootstrap import ApiComponents, build_app, build_components
from .dependencies import get_actor_limiter, get_quota, require_actor_limit, require_write_quota
from .errors import ApiErrorCodes, error_body, install_error_handlers

__all__ = [
    "ApiComponents",
    "ApiErrorCodes",
    "SERVICE_NAME",
    "build_app",
    "build_components",
    "create_app",
    "error_body",
    "get_actor_limiter",
    "get_quota",
    "install_error_handlers",
    "require_actor_limit",
    "require_write_quota",
]
