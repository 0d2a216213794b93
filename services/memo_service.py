"""
Memo draft store: the export memo kept alongside each shipment.
"""
import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload, selectinload

from core.exceptions import ValidationError
from models.memo import Memo, MemoStatus
from models.shipment import Shipment
from schemas.memo import MemoPayload

log = logging.getLogger(__name__)


class MemoService:
    """Service layer for memo records (1:1 with shipments)."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_shipment_id(self, shipment_id: str) -> Optional[Memo]:
        """A shipment may not have a memo yet; that is not an error."""
        return self.db.query(Memo).filter(Memo.shipment_id == shipment_id).first()

    def write_memo(
        self,
        shipment_id: str,
        payload: MemoPayload,
        status: MemoStatus,
        commit: bool = True,
    ) -> Memo:
        """
        Create or replace the memo for a shipment.

        Every field is set from the payload, so absent fields are cleared.
        Parties are kept only inside the manual items snapshot here; resolving
        them to companies is the workflow's job.
        """
        exists = self.db.query(Shipment.id).filter(Shipment.id == shipment_id).first()
        if not exists:
            raise ValidationError("Shipment not found")

        memo = self.get_by_shipment_id(shipment_id)
        if memo is None:
            memo = Memo(shipment_id=shipment_id)
            self.db.add(memo)

        for field, value in payload.memo_field_values().items():
            setattr(memo, field, value)
        if memo.special_permit is None:
            memo.special_permit = False  # type: ignore[assignment]

        snapshot = payload.snapshot()
        memo.manual_items = (  # type: ignore[assignment]
            snapshot.model_dump(mode="json", by_alias=True) if snapshot is not None else None
        )
        memo.status = status  # type: ignore[assignment]

        if commit:
            self.db.commit()
            self.db.refresh(memo)
        else:
            self.db.flush()
        log.info("Memo for shipment %s written as %s", shipment_id, status.value)
        return memo

    def upsert_draft(self, shipment_id: str, payload: MemoPayload, commit: bool = True) -> Memo:
        return self.write_memo(shipment_id, payload, MemoStatus.DRAFT, commit=commit)

    def delete_draft(self, shipment_id: str) -> int:
        count = self.db.query(Memo).filter(Memo.shipment_id == shipment_id).delete(synchronize_session=False)
        self.db.commit()
        if count:
            log.info("Deleted memo for shipment %s", shipment_id)
        return count

    def list_memo_shipments(self) -> List[Shipment]:
        """Shipments carrying mirrored memo data, most recently touched first."""
        return (
            self.db.query(Shipment)
            .options(
                selectinload(Shipment.items),
                joinedload(Shipment.order_by),
                joinedload(Shipment.deliver_to),
                joinedload(Shipment.user),
            )
            .filter(
                or_(
                    Shipment.memo_no.isnot(None),
                    Shipment.memo_goods_info.isnot(None),
                    Shipment.goods_type.isnot(None),
                )
            )
            .order_by(Shipment.updated_at.desc())
            .all()
        )
