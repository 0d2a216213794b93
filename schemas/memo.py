"""
Pydantic schemas for export memos, their manual items and the workflow payloads.
"""
from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import Field, field_validator

from core.coercion import parse_wire_date, to_number, to_optional_number
from models.memo import MemoStatus
from models.shipment import ShipmentStatus
from schemas.common import CamelModel, RequestModel
from schemas.company import Party

MANUAL_ITEMS_SCHEMA_VERSION = 1

Number = Union[int, float]


class ManualItem(RequestModel):
    """One line of the memo's own item list."""
    no: Optional[int] = None
    box_no: Optional[str] = None
    part_no: Optional[str] = None
    part_name: Optional[str] = None
    qty: Number = 0
    price_per_pc: Optional[Number] = None
    total_amount: Optional[Number] = None
    special_packing: Optional[str] = None
    remark: Optional[str] = None

    @field_validator("qty", mode="before")
    @classmethod
    def coerce_qty(cls, v):
        return to_number(v)

    @field_validator("price_per_pc", "total_amount", mode="before")
    @classmethod
    def coerce_price(cls, v):
        return to_optional_number(v)

    @field_validator("no", mode="before")
    @classmethod
    def coerce_no(cls, v):
        if v is None or v == "":
            return None
        return int(to_number(v))

    @field_validator("special_packing", mode="before")
    @classmethod
    def packing_text(cls, v):
        if isinstance(v, bool):
            return "YES" if v else None
        return v


class ManualItemsSnapshot(CamelModel):
    """Stored form of ``Memo.manual_items``: items plus the parties as typed."""
    version: int = MANUAL_ITEMS_SCHEMA_VERSION
    items: List[ManualItem] = Field(default_factory=list)
    order_by: Optional[Party] = None
    delivery_to: Optional[Party] = None


class MemoFields(RequestModel):
    """Export/compliance scalars shared by the memo and the shipment mirror."""
    memo_no: Optional[str] = None
    goods_type: Optional[str] = None
    shipment_type: Optional[str] = None
    danger_level: Optional[str] = None
    special_permit: Optional[bool] = None
    invoice_type: Optional[str] = None
    purpose: Optional[str] = None
    sap_info: Optional[str] = None
    tp_no: Optional[str] = None
    tp_date: Optional[datetime] = None
    packing_details: Optional[str] = None
    memo_goods_info: Optional[str] = None
    port_of_discharge: Optional[str] = None
    shipment_method: Optional[str] = None
    payment_method: Optional[str] = None
    export_type: Optional[str] = None
    etd_shipment: Optional[datetime] = None

    @field_validator("tp_date", "etd_shipment", mode="before")
    @classmethod
    def parse_dates(cls, v):
        return parse_wire_date(v)


class MemoPayload(MemoFields):
    """Body of draft save, final save and publish."""
    manual_items: Optional[List[ManualItem]] = None
    order_by: Optional[Party] = None
    delivery_to: Optional[Party] = None

    def memo_field_values(self) -> dict:
        return {name: getattr(self, name) for name in MemoFields.model_fields}

    def snapshot(self) -> Optional[ManualItemsSnapshot]:
        if self.manual_items is None and self.order_by is None and self.delivery_to is None:
            return None
        return ManualItemsSnapshot(
            items=list(self.manual_items or []),
            order_by=self.order_by,
            delivery_to=self.delivery_to,
        )


class MemoPublishPayload(MemoPayload):
    set_shipment_status: Optional[ShipmentStatus] = None


class MemoFinalSavePayload(MemoPayload):
    status_after_save: Literal["DRAFT", "IN_PROCESS"]


class MemoResponse(CamelModel):
    id: str
    shipment_id: str
    memo_no: Optional[str] = None
    goods_type: Optional[str] = None
    shipment_type: Optional[str] = None
    danger_level: Optional[str] = None
    special_permit: bool = False
    invoice_type: Optional[str] = None
    purpose: Optional[str] = None
    sap_info: Optional[str] = None
    tp_no: Optional[str] = None
    tp_date: Optional[datetime] = None
    packing_details: Optional[str] = None
    memo_goods_info: Optional[str] = None
    port_of_discharge: Optional[str] = None
    shipment_method: Optional[str] = None
    payment_method: Optional[str] = None
    export_type: Optional[str] = None
    etd_shipment: Optional[datetime] = None
    manual_items: Optional[ManualItemsSnapshot] = None
    status: MemoStatus
    created_at: datetime
    updated_at: datetime


class ReconcileRequest(RequestModel):
    manual_items: List[ManualItem] = Field(default_factory=list)


class ReconciliationRowResponse(CamelModel):
    key: str
    shipment_qty: Number
    memo_qty: Number


class ReconciliationResponse(CamelModel):
    rows: List[ReconciliationRowResponse]
    is_match: bool
    first_mismatch_key: Optional[str] = None
