# Shipment Memo Service
# Pre-shipment documentation and export memo management
# v1.0.0.0

from datetime import datetime
import uuid

from sqlalchemy import Column, String, Boolean, DateTime
from core.database import Base


def new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)  # type: ignore
    email = Column(String, unique=True, index=True, nullable=False)  # type: ignore
    name = Column(String, nullable=False)  # type: ignore
    username = Column(String, unique=True, index=True, nullable=False)  # type: ignore
    hashed_password = Column(String, nullable=False)  # type: ignore
    role = Column(String, default="VIEWER", nullable=False)  # type: ignore  # ADMIN or VIEWER
    is_active = Column(Boolean, default=True, nullable=False)  # type: ignore
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)  # type: ignore
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)  # type: ignore

