# Shipment Memo Service
# Pre-shipment documentation and export memo management
# v1.0.0.0

from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from core.database import get_db
from core.security import get_current_user
from models.user import User
from schemas.common import success_response
from schemas.user import UserResponse
from services.auth_service import AuthService, ACCESS_TOKEN_EXPIRE_MINUTES
from services.config_service import is_production

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/login")
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """Authenticate by username or email and return an access token."""
    user = AuthService.authenticate_user(form_data.username, form_data.password, db)
    access_token = AuthService.create_access_token(
        data={"sub": str(user.id), "role": user.role}
    )

    response = JSONResponse(content={
        "success": True,
        "message": "Login successful",
        "data": {
            "token": access_token,
            "access_token": access_token,
            "token_type": "bearer",
            "user": UserResponse.model_validate(user).model_dump(mode="json", by_alias=True),
        },
    })

    response.set_cookie(
        key="access_token",
        value=access_token,
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=is_production()
    )

    return response


@router.get("/me")
def get_me(current_user: User = Depends(get_current_user)):
    """Get current authenticated user profile."""
    return success_response(UserResponse.model_validate(current_user))
