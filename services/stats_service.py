"""
Dashboard counters.
"""
from sqlalchemy import func
from sqlalchemy.orm import Session

from models.company import Company
from models.memo import Memo, MemoStatus
from models.shipment import Shipment, ShipmentStatus
from models.user import User


class StatsService:
    def __init__(self, db: Session):
        self.db = db

    def get_counts(self) -> dict:
        by_status = {status.value: 0 for status in ShipmentStatus}
        rows = self.db.query(Shipment.status, func.count(Shipment.id)).group_by(Shipment.status).all()
        for status, count in rows:
            key = status.value if hasattr(status, "value") else str(status)
            by_status[key] = count

        return {
            "totalShipments": sum(by_status.values()),
            "approved": by_status[ShipmentStatus.APPROVED.value],
            "inProcess": by_status[ShipmentStatus.IN_PROCESS.value],
            "draft": by_status[ShipmentStatus.DRAFT.value],
            "publishedMemos": self.db.query(Memo).filter(Memo.status == MemoStatus.PUBLISHED).count(),
            "totalCompanies": self.db.query(Company).count(),
            "totalUsers": self.db.query(User).count(),
        }
