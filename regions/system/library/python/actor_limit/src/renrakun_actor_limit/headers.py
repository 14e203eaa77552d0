"""Caller identification from request headers."""

from __future__ import annotations

from collections.abc import Mapping

UNKNOWN_ACTOR = "unknown"
JOIN_CREATE_PREFIX = "join-create"

_IP_HEADERS = ("cf-connecting-ip", "x-forwarded-for", "x-real-ip")


def read_actor_ip(headers: Mapping[str, str]) -> str:
    """First client address found in the proxy headers.

    headers must look up names case-insensitively (starlette ``Headers``) or
    use lowercase keys.
    """
    for name in _IP_HEADERS:
        value = headers.get(name)
        if value is not None:
            return value.split(",")[0].strip() or UNKNOWN_ACTOR
    return UNKNOWN_ACTOR


def join_create_actor_key(headers: Mapping[str, str]) -> str:
    return f"{JOIN_CREATE_PREFIX}:{read_actor_ip(headers)}"
