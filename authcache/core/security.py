"""Operator authentication for cache management endpoints."""
from fastapi import Security, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from authcache.core.config import ADMIN_API_KEY

security_scheme = HTTPBearer()


def verify_admin_key(credentials: HTTPAuthorizationCredentials = Security(security_scheme)):
    """Verifies the operator token provided in the Authorization header."""
    if credentials.credentials != ADMIN_API_KEY:
        raise HTTPException(
            status_code=403,
            detail="Invalid or missing API Key for cache management."
        )
    return True
