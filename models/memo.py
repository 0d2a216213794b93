"""
Export memo model: one compliance record per shipment.
"""
from __future__ import annotations
from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    JSON,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from core.database import Base
from models.user import new_id


class MemoStatus(str, PyEnum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"


class Memo(Base):
    """
    Satellite record of a Shipment holding the export memo.

    ``manual_items`` is a versioned snapshot (see schemas.memo.ManualItemsSnapshot)
    of the operator's own item list plus the raw orderBy / deliveryTo party data
    as entered, kept even after the parties are resolved to companies.
    """
    __tablename__ = "memos"

    __table_args__ = (
        UniqueConstraint("shipment_id", name="uq_memo_shipment_id"),
    )

    id = Column(String(36), primary_key=True, default=new_id, nullable=False)
    shipment_id = Column(
        String(36),
        ForeignKey("shipments.id", ondelete="CASCADE"),
        nullable=False,
        doc="Shipment this memo documents (1:1)",
    )

    memo_no = Column(String(120), nullable=True)
    goods_type = Column(String(120), nullable=True)
    shipment_type = Column(String(120), nullable=True)
    danger_level = Column(String(120), nullable=True)
    special_permit = Column(Boolean, nullable=False, default=False)
    invoice_type = Column(String(120), nullable=True)
    purpose = Column(String(255), nullable=True)
    sap_info = Column(String(255), nullable=True)
    tp_no = Column(String(120), nullable=True)
    tp_date = Column(DateTime(timezone=True), nullable=True)
    packing_details = Column(Text, nullable=True)
    memo_goods_info = Column(Text, nullable=True)
    port_of_discharge = Column(String(255), nullable=True)
    shipment_method = Column(String(120), nullable=True)
    payment_method = Column(String(120), nullable=True)
    export_type = Column(String(120), nullable=True)
    etd_shipment = Column(DateTime(timezone=True), nullable=True)

    manual_items = Column(JSON, nullable=True)

    status = Column(
        Enum(MemoStatus, native_enum=False),
        nullable=False,
        default=MemoStatus.DRAFT,
    )

    created_at = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    shipment = relationship("Shipment", back_populates="memo")

    def __repr__(self) -> str:
        return f"<Memo(shipment_id={self.shipment_id}, status={self.status.value})>"
