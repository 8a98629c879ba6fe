from typing import Optional

from fastapi import Depends, HTTPException, Security
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_500_INTERNAL_SERVER_ERROR

from blog_api.settings import Settings, settings

WEBHOOK_SECRET_HEADER = "x-n8n-secret"

bearer_scheme = HTTPBearer(auto_error=False)
webhook_secret_header = APIKeyHeader(name=WEBHOOK_SECRET_HEADER, auto_error=False)


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def require_admin_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    current_settings: Settings = Depends(get_settings),
) -> str:
    expected = current_settings.ADMIN_BEARER_TOKEN
    if not expected:
        raise HTTPException(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server configuration error: ADMIN_BEARER_TOKEN not set",
        )
    if credentials is None:
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED,
            detail="Authorization header required. Format: Bearer <token>",
        )
    if credentials.credentials != expected:
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
        )
    return credentials.credentials


def require_webhook_secret(
    provided: Optional[str] = Security(webhook_secret_header),
    current_settings: Settings = Depends(get_settings),
) -> str:
    expected = current_settings.N8N_WEBHOOK_SECRET
    if not expected:
        raise HTTPException(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server configuration error: N8N_WEBHOOK_SECRET not set",
        )
    if not provided:
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED,
            detail=f"{WEBHOOK_SECRET_HEADER} header required",
        )
    if provided != expected:
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED, detail="Invalid webhook secret"
        )
    return provided
