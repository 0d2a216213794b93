"""
User administration: staff accounts with ADMIN or VIEWER roles.
"""
import logging
from typing import List

from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, ValidationError
from models.user import User
from schemas.user import UserCreate, UserUpdate
from services.auth_service import AuthService

log = logging.getLogger(__name__)


class UserService:
    """Service layer for user accounts."""

    def __init__(self, db: Session):
        self.db = db

    def list_users(self) -> List[User]:
        return self.db.query(User).order_by(User.created_at.desc()).all()

    def get_user(self, user_id: str) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")
        return user

    def create_user(self, user_in: UserCreate) -> User:
        existing = self.db.query(User).filter(  # type: ignore
            (User.email == user_in.email) | (User.username == user_in.username)
        ).first()
        if existing:
            raise ValidationError("User with this email or username already exists")

        user = User(
            email=user_in.email,
            name=user_in.name,
            username=user_in.username,
            hashed_password=AuthService.get_password_hash(user_in.password),
            role=user_in.role,
            is_active=True,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        log.info("User %s created with role %s", user.username, user.role)
        return user

    def update_user(self, user_id: str, user_in: UserUpdate, acting_user_id: str) -> User:
        user = self.get_user(user_id)
        sent = user_in.model_fields_set

        if "email" in sent and user_in.email is not None:
            taken = self.db.query(User).filter(User.email == user_in.email, User.id != user_id).first()
            if taken:
                raise ValidationError("Email already in use")
            user.email = user_in.email  # type: ignore[assignment]
        if "name" in sent and user_in.name is not None:
            user.name = user_in.name  # type: ignore[assignment]
        if "password" in sent and user_in.password:
            user.hashed_password = AuthService.get_password_hash(user_in.password)  # type: ignore[assignment]
        if "role" in sent and user_in.role is not None:
            user.role = user_in.role  # type: ignore[assignment]
        if "is_active" in sent and user_in.is_active is not None:
            if user_in.is_active is False and str(user.id) == str(acting_user_id):
                raise ValidationError("You cannot deactivate your own account")
            user.is_active = user_in.is_active  # type: ignore[assignment]

        self.db.commit()
        self.db.refresh(user)
        return user

    def deactivate_user(self, user_id: str, acting_user_id: str) -> User:
        user = self.get_user(user_id)
        if str(user.id) == str(acting_user_id):
            raise ValidationError("You cannot deactivate your own account")

        user.is_active = False  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(user)
        log.info("User %s deactivated", user.username)
        return user
