# Shipment Memo Service
# Pre-shipment documentation and export memo management
# v1.0.0.0

from datetime import datetime, timedelta
from typing import Optional
from sqlalchemy.orm import Session
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import HTTPException, status
import os
from dotenv import load_dotenv

from models.user import User

load_dotenv()

SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME_SHIPMENT_MEMO_KEY")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "480"))

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=12
)


class AuthService:
    """Service layer for authentication."""

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def get_password_hash(password: str) -> str:
        return pwd_context.hash(password)

    @staticmethod
    def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
        """Create JWT access token."""
        to_encode = data.copy()
        expire = datetime.utcnow() + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)

    @staticmethod
    def verify_token(token: str) -> dict:
        """Verify JWT token and return payload."""
        credentials_exception = HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
        try:
            payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        except JWTError:
            raise credentials_exception
        if payload.get("sub") is None:
            raise credentials_exception
        return payload

    @staticmethod
    def authenticate_user(login: str, password: str, db: Session) -> User:
        """Authenticate by username or email."""
        user = db.query(User).filter(  # type: ignore
            (User.email == login) | (User.username == login)
        ).first()

        if not user or not AuthService.verify_password(password, str(user.hashed_password)):
            raise HTTPException(
                status_code=401,
                detail="Incorrect username or password"
            )
        if not user.is_active:
            raise HTTPException(status_code=403, detail="Account is deactivated")
        return user

    @staticmethod
    def get_user_from_token(token: str, db: Session) -> User:
        """Get the active user named by a JWT token."""
        payload = AuthService.verify_token(token)
        user_id = str(payload.get("sub"))

        user = db.query(User).filter(User.id == user_id).first()  # type: ignore
        if user is None:
            raise HTTPException(status_code=401, detail="User not found")
        if not user.is_active:
            raise HTTPException(status_code=401, detail="Account is deactivated")
        return user
