from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from innovaport.config import settings


def get_client_identifier(request: Request) -> str:
    """Rate-limit key: first X-Forwarded-For hop, then X-Real-IP, then the socket peer"""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        ip = forwarded_for.split(",")[0].strip()
        if ip:
            return f"ip:{ip}"
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return f"ip:{real_ip.strip()}"
    return f"ip:{get_remote_address(request) or 'unknown'}"


limiter = Limiter(
    key_func=get_client_identifier,
    default_limits=[settings.rate_limit],
    headers_enabled=False,
)
