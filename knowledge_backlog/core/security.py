"""
Caller identity handling.

The reverse proxy authenticates the caller and forwards the result in a
trusted header (X-Auth-User by default), usually as ``DOMAIN\\user``.
Nothing here verifies that value: it is normalised and handed to the
services as an explicit Identity.
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from knowledge_backlog.core.config import settings


@dataclass(frozen=True)
class Identity:
    """Raw and display form of the caller"""
    raw: str
    username: str

    @property
    def is_admin(self) -> bool:
        return settings.is_admin(self.username)


def extract_username(raw_identity: str) -> str:
    """Strip a ``DOMAIN\\`` or ``DOMAIN/`` prefix"""
    if not raw_identity:
        return ""
    for separator in ("\\", "/"):
        if separator in raw_identity:
            return raw_identity.split(separator)[-1]
    return raw_identity


def parse_identity(raw_identity: Optional[str]) -> Optional[Identity]:
    """Build an Identity from the header value (None when absent or blank)"""
    if not raw_identity or not raw_identity.strip():
        return None
    raw = raw_identity.strip().lower()
    return Identity(raw=raw, username=extract_username(raw))


def identity_from_request(request: Request) -> Optional[Identity]:
    return parse_identity(request.headers.get(settings.AUTH_HEADER_NAME))
