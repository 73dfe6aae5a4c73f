"""X-API-Key check guarding every gateway route.

Identity hosts post subjects' attributes here, so the key is compared in
constant time. An empty configured key (GENUNIQUEID_API_KEY unset) leaves
the gateway open, which is only meant for local development.
"""

from __future__ import annotations

import hmac

from fastapi import HTTPException, Security
from fastapi.security import APIKeyHeader

_api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def make_api_key_checker(expected_key: str):
    """Return a FastAPI dependency that checks the API key.

    If expected_key is empty, all requests are allowed (development mode).
    """

    async def check_api_key(
        api_key: str | None = Security(_api_key_header),
    ) -> str | None:
        if not expected_key:
            return None
        if api_key is None or not hmac.compare_digest(api_key.encode(), expected_key.encode()):
            raise HTTPException(
                status_code=401,
                detail="Invalid or missing API key",
            )
        return api_key

    return check_api_key
