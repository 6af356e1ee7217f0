"""Client identification for rate-limit keys.

Raw IPs never reach the store; they are hashed with a deployment salt.
"""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from starlette.requests import Request


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    if request.client is not None:
        return request.client.host
    return "unknown"


def hash_identifier(value: str, salt: str) -> str:
    return hashlib.sha256(f"{value}:{salt}".encode()).hexdigest()[:16]


def limiter_key(policy_name: str, ip: str, salt: str) -> str:
    """``{policy}:{sha256(ip:salt)[:16]}``."""
    return f"{policy_name}:{hash_identifier(ip, salt)}"
