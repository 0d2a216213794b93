# Shipment Memo Service
# Pre-shipment documentation and export memo management
# v1.0.0.0


from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr, Field

from schemas.common import CamelModel, RequestModel

Role = Literal["ADMIN", "VIEWER"]


class UserCreate(RequestModel):
    email: EmailStr
    name: str = Field(..., min_length=1)
    username: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)
    role: Role = "VIEWER"


class UserUpdate(RequestModel):
    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, min_length=1)
    password: Optional[str] = Field(None, min_length=6)
    role: Optional[Role] = None
    is_active: Optional[bool] = None


class UserResponse(CamelModel):
    id: str
    email: EmailStr
    name: str
    username: str
    role: str
    is_active: bool
    created_at: datetime
