from __future__ import annotations

import secrets

from fastapi import HTTPException, Request

from weatherservice.config import settings

# Paths reachable without a key even when auth is on
_OPEN_PATHS = frozenset({"/healthz"})


async def verify_api_key(request: Request) -> None:
    """Require a matching X-API-KEY header once WEATHER_API_KEY is set."""
    if not settings.API_KEY or request.url.path in _OPEN_PATHS:
        return
    supplied = request.headers.get("X-API-KEY", "")
    if not secrets.compare_digest(supplied, settings.API_KEY):
        raise HTTPException(status_code=401, detail="Invalid or missing API key")
