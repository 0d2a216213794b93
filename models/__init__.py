"""
ORM models. Importing this package registers every table on Base.metadata.
"""
from models.user import User
from models.company import Company
from models.shipment import Shipment, ShipmentItem, ShipmentStatus
from models.memo import Memo, MemoStatus

__all__ = [
    "User",
    "Company",
    "Shipment",
    "ShipmentItem",
    "ShipmentStatus",
    "Memo",
    "MemoStatus",
]
