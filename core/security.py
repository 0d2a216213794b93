# Shipment Memo Service
# Pre-shipment documentation and export memo management
# v1.0.0.0

from typing import Optional

from fastapi import Depends, HTTPException, status, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from core.database import get_db
from models.user import User
from services.auth_service import AuthService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


def get_current_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """Dependency to get current authenticated user (header first, then cookie)."""
    if token:
        return AuthService.get_user_from_token(token, db)

    token_from_cookie = request.cookies.get("access_token")
    if token_from_cookie:
        return AuthService.get_user_from_token(token_from_cookie, db)

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )
