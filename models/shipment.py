"""
Shipment SQLAlchemy model with its packing-list items and status rules.
"""
from __future__ import annotations
from datetime import datetime
from enum import Enum as PyEnum
from typing import List, cast

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    JSON,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from core.database import Base
from models.user import new_id


class ShipmentStatus(str, PyEnum):
    """Shipment lifecycle status."""
    DRAFT = "DRAFT"
    IN_PROCESS = "IN_PROCESS"
    APPROVED = "APPROVED"


# Targets the memo workflow may move a shipment to. Direct status updates
# (PATCH /shipments/{id}/status) bypass this table.
WORKFLOW_TRANSITIONS = {
    ShipmentStatus.DRAFT: [
        ShipmentStatus.DRAFT,
        ShipmentStatus.IN_PROCESS,
        ShipmentStatus.APPROVED,
    ],
    ShipmentStatus.IN_PROCESS: [
        ShipmentStatus.IN_PROCESS,
        ShipmentStatus.APPROVED,
    ],
    ShipmentStatus.APPROVED: [],  # Terminal state
}

# Memo scalar fields mirrored onto the shipment row by publish / final save.
MEMO_MIRROR_FIELDS = (
    "memo_no",
    "goods_type",
    "shipment_type",
    "danger_level",
    "special_permit",
    "invoice_type",
    "purpose",
    "sap_info",
    "tp_no",
    "tp_date",
    "packing_details",
    "memo_goods_info",
    "port_of_discharge",
    "shipment_method",
    "payment_method",
    "export_type",
    "etd_shipment",
)


class Shipment(Base):
    """
    Pre-export shipment record (one packing list / case).

    The item list here is authoritative. A memo keeps its own manual item
    list and only replaces these rows through ShipmentService.update_shipment.
    """
    __tablename__ = "shipments"

    id = Column(String(36), primary_key=True, default=new_id, nullable=False)

    # Packing list header
    shipping_mark = Column(String(255), nullable=False)
    order_no = Column(String(120), nullable=False, index=True)
    case_no = Column(String(120), nullable=False)
    destination = Column(String(255), nullable=False)
    model = Column(String(120), nullable=False)
    production_month = Column(DateTime(timezone=True), nullable=False)
    case_size = Column(String(120), nullable=False)
    gross_weight = Column(Float, nullable=False, default=0)
    net_weight = Column(Float, nullable=False, default=0)
    rack_no = Column(JSON, nullable=True, doc="Single rack number or list for merged imports")

    status = Column(
        Enum(ShipmentStatus, native_enum=False),
        nullable=False,
        default=ShipmentStatus.DRAFT,
        index=True,
    )

    # Memo mirror (commercial / export data)
    memo_no = Column(String(120), nullable=True)
    goods_type = Column(String(120), nullable=True)
    shipment_type = Column(String(120), nullable=True)
    danger_level = Column(String(120), nullable=True)
    special_permit = Column(Boolean, nullable=True)
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

    # Foreign Keys
    user_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    order_by_id = Column(String(36), ForeignKey("companies.id"), nullable=True)
    deliver_to_id = Column(String(36), ForeignKey("companies.id"), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User")
    order_by = relationship("Company", foreign_keys=[order_by_id])
    deliver_to = relationship("Company", foreign_keys=[deliver_to_id])
    items = relationship(
        "ShipmentItem",
        back_populates="shipment",
        cascade="all, delete-orphan",
        order_by="ShipmentItem.no",
    )
    memo = relationship("Memo", back_populates="shipment", uselist=False, cascade="all, delete-orphan")

    @property
    def is_approved(self) -> bool:
        return cast(ShipmentStatus, self.status) == ShipmentStatus.APPROVED

    def can_transition_to(self, new_status: ShipmentStatus) -> bool:
        current_status = cast(ShipmentStatus, self.status)
        return new_status in WORKFLOW_TRANSITIONS.get(current_status, [])

    def get_valid_next_states(self) -> List[ShipmentStatus]:
        current_status = cast(ShipmentStatus, self.status)
        return WORKFLOW_TRANSITIONS.get(current_status, [])

    def __repr__(self) -> str:
        return (
            f"<Shipment(id={self.id}, order_no={self.order_no}, "
            f"case_no={self.case_no}, status={self.status.value})>"
        )


class ShipmentItem(Base):
    """A packing-list line: one part in one box."""
    __tablename__ = "shipment_items"

    id = Column(String(36), primary_key=True, default=new_id, nullable=False)
    shipment_id = Column(String(36), ForeignKey("shipments.id", ondelete="CASCADE"), nullable=False, index=True)
    no = Column(Integer, nullable=False)
    box_no = Column(String(120), nullable=False, default="")
    part_no = Column(String(120), nullable=False, default="")
    part_name = Column(String(255), nullable=False, default="")
    quantity = Column(Integer, nullable=False, default=0)
    remark = Column(Text, nullable=True)

    # Commercial data (from memo manual items)
    price_per_pcs = Column(Float, nullable=True)
    total_amount = Column(Float, nullable=True)
    special_packing = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    shipment = relationship("Shipment", back_populates="items")
