"""
Pydantic schemas for shipments and their packing-list items.

Absent or non-numeric weights and quantities become 0 so spreadsheet imports
stay resilient. A fractional quantity is rejected.
"""
from datetime import datetime
from typing import List, Optional, Union

from pydantic import Field, field_validator

from core.coercion import parse_wire_date, to_number, to_optional_number
from models.shipment import ShipmentStatus
from schemas.common import CamelModel, RequestModel
from schemas.company import Party, ShipmentCompanyResponse
from schemas.memo import ManualItem, MemoFields

RackNo = Union[str, List[str]]


class ShipmentItemIn(RequestModel):
    no: Optional[int] = None
    box_no: str = ""
    part_no: str = Field(..., min_length=1)
    part_name: str = Field(..., min_length=1)
    quantity: int = 0
    remark: Optional[str] = None
    price_per_pcs: Optional[float] = None
    total_amount: Optional[float] = None
    special_packing: Optional[str] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, v):
        quantity = to_number(v)
        if isinstance(quantity, float):
            raise ValueError("quantity must be a whole number")
        return quantity

    @field_validator("no", mode="before")
    @classmethod
    def coerce_no(cls, v):
        if v is None or v == "":
            return None
        return int(to_number(v))

    @field_validator("price_per_pcs", "total_amount", mode="before")
    @classmethod
    def coerce_prices(cls, v):
        return to_optional_number(v)

    @field_validator("box_no", mode="before")
    @classmethod
    def box_text(cls, v):
        return "" if v is None else str(v)

    @field_validator("part_no", "part_name", mode="before")
    @classmethod
    def part_text(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v.strip() if isinstance(v, str) else v


class ShipmentHeader(RequestModel):
    shipping_mark: str = Field(..., min_length=1)
    order_no: str = Field(..., min_length=1)
    case_no: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    model: str = Field(..., min_length=1)
    production_month: datetime
    case_size: str = Field(..., min_length=1)
    gross_weight: float = 0
    net_weight: float = 0
    rack_no: Optional[RackNo] = None

    @field_validator("production_month", mode="before")
    @classmethod
    def parse_production_month(cls, v):
        return parse_wire_date(v)

    @field_validator("gross_weight", "net_weight", mode="before")
    @classmethod
    def coerce_weights(cls, v):
        return to_number(v)


class ShipmentCreate(ShipmentHeader):
    """Normalized shipment import record (manual entry or spreadsheet)."""
    items: List[ShipmentItemIn] = Field(..., min_length=1)


class ShipmentUpdate(MemoFields):
    """
    Legacy combined update: partial header fields plus memo-named keys.

    Only fields the client actually sent are applied (``model_fields_set``).
    """
    shipping_mark: Optional[str] = Field(None, min_length=1)
    order_no: Optional[str] = Field(None, min_length=1)
    case_no: Optional[str] = Field(None, min_length=1)
    destination: Optional[str] = Field(None, min_length=1)
    model: Optional[str] = Field(None, min_length=1)
    production_month: Optional[datetime] = None
    case_size: Optional[str] = Field(None, min_length=1)
    gross_weight: Optional[float] = None
    net_weight: Optional[float] = None
    rack_no: Optional[RackNo] = None
    status: Optional[ShipmentStatus] = None

    items: Optional[List[ShipmentItemIn]] = None
    manual_items: Optional[List[ManualItem]] = None
    order_by: Optional[Party] = None
    delivery_to: Optional[Party] = None

    @field_validator("production_month", mode="before")
    @classmethod
    def parse_production_month(cls, v):
        return parse_wire_date(v)

    @field_validator("gross_weight", "net_weight", mode="before")
    @classmethod
    def coerce_weights(cls, v):
        return None if v is None else to_number(v)


class StatusUpdate(RequestModel):
    status: ShipmentStatus


class ShipmentItemResponse(CamelModel):
    id: str
    no: int
    box_no: str
    part_no: str
    part_name: str
    quantity: int
    remark: Optional[str] = None
    price_per_pcs: Optional[float] = None
    total_amount: Optional[float] = None
    special_packing: Optional[str] = None


class ShipmentOwner(CamelModel):
    name: str
    email: str


class ShipmentResponse(CamelModel):
    id: str
    shipping_mark: str
    order_no: str
    case_no: str
    destination: str
    model: str
    production_month: datetime
    case_size: str
    gross_weight: float
    net_weight: float
    rack_no: Optional[RackNo] = None
    status: ShipmentStatus

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

    user_id: Optional[str] = None
    order_by_id: Optional[str] = None
    deliver_to_id: Optional[str] = None
    user: Optional[ShipmentOwner] = None
    order_by: Optional[ShipmentCompanyResponse] = None
    deliver_to: Optional[ShipmentCompanyResponse] = None
    items: List[ShipmentItemResponse] = []

    created_at: datetime
    updated_at: datetime
