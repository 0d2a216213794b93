"""
Trading-partner (consignee / consignor) records.
"""
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, String, Text

from core.database import Base
from models.user import new_id


class Company(Base):
    """
    Company directory entry referenced by shipments as ``orderBy`` / ``deliverTo``.

    Rows are never physically removed; deletion flips ``is_active``.
    """
    __tablename__ = "companies"

    id = Column(String(36), primary_key=True, default=new_id, nullable=False)
    name = Column(String(255), nullable=False, index=True, doc="Registered company name")
    address = Column(Text, nullable=True)
    phone = Column(String(64), nullable=True)
    fax = Column(String(64), nullable=True)
    email = Column(String(255), nullable=True)
    contact_person = Column(String(160), nullable=True, doc="Attention / contact person")
    country = Column(String(120), nullable=True)
    section = Column(String(120), nullable=True, doc="Department or section of the contact")
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<Company(id={self.id}, name={self.name}, active={self.is_active})>"
