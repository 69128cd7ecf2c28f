import logging
import secrets

from fastapi import HTTPException, Request, Security
from fastapi.security import APIKeyHeader

from nurse_mail.config import settings

logger = logging.getLogger(__name__)

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def _get_client_ip(request: Request) -> str:
    cf_ip = request.headers.get("CF-Connecting-IP")
    if cf_ip:
        return cf_ip
    xff = request.headers.get("X-Forwarded-For")
    if xff:
        return xff.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def require_api_key(
    request: Request,
    api_key: str = Security(api_key_header),
) -> str:
    """Only the registration backend, holding ADMIN_API_KEY, may trigger mail."""
    if not api_key:
        raise HTTPException(status_code=401, detail="Missing API key")

    # An unset admin key must never match, not even an empty header
    if settings.admin_api_key and secrets.compare_digest(api_key, settings.admin_api_key):
        return api_key

    logger.warning("Failed auth attempt from %s", _get_client_ip(request))
    raise HTTPException(status_code=401, detail="Invalid API key")
