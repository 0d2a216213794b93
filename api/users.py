"""
Admin endpoints for user management.
"""
from fastapi import APIRouter, Depends

from api.dependencies import get_user_service, require_admin
from models.user import User
from schemas.common import success_response
from schemas.user import UserCreate, UserResponse, UserUpdate
from services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(require_admin)])


@router.get("")
def list_users(users: UserService = Depends(get_user_service)):
    """List all users for admin management."""
    return success_response([UserResponse.model_validate(user) for user in users.list_users()])


@router.post("", status_code=201)
def create_user(
    payload: UserCreate,
    users: UserService = Depends(get_user_service),
):
    """Create a new staff user."""
    user = users.create_user(payload)
    return success_response(UserResponse.model_validate(user), message="User created successfully")


@router.put("/{user_id}")
def update_user(
    user_id: str,
    payload: UserUpdate,
    users: UserService = Depends(get_user_service),
    current_user: User = Depends(require_admin),
):
    user = users.update_user(user_id, payload, acting_user_id=str(current_user.id))
    return success_response(UserResponse.model_validate(user), message="User updated successfully")


@router.delete("/{user_id}")
def deactivate_user(
    user_id: str,
    users: UserService = Depends(get_user_service),
    current_user: User = Depends(require_admin),
):
    """Deactivate a user account (never the caller's own)."""
    user = users.deactivate_user(user_id, acting_user_id=str(current_user.id))
    return success_response(UserResponse.model_validate(user), message="User deactivated")
