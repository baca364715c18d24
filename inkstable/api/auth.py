"""Optional API key check."""

from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

from .settings import settings

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def verify_api_key(api_key: str = Security(api_key_header)) -> str:
    """Reject requests without a configured key.

    With no keys configured every request is accepted.
    """
    valid_keys = settings.get_valid_api_keys()
    if not valid_keys:
        return "anonymous"

    if not api_key or api_key not in valid_keys:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid X-API-Key header",
        )
    return api_key
