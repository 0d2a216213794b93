"""
Shipment record store: header fields and the authoritative item list.
"""
import logging
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session, joinedload, selectinload

from core.coercion import to_number
from core.exceptions import ConflictError, NotFoundError, ValidationError
from models.shipment import MEMO_MIRROR_FIELDS, Shipment, ShipmentItem, ShipmentStatus
from schemas.memo import ManualItem
from schemas.shipment import ShipmentCreate, ShipmentItemIn, ShipmentUpdate
from services.company_service import CompanyService

log = logging.getLogger(__name__)

# Header columns that may not be nulled by a partial update.
_REQUIRED_HEADER_FIELDS = {
    "shipping_mark",
    "order_no",
    "case_no",
    "destination",
    "model",
    "production_month",
    "case_size",
    "gross_weight",
    "net_weight",
    "status",
}

UPDATABLE_FIELDS = tuple(_REQUIRED_HEADER_FIELDS | {"rack_no"}) + MEMO_MIRROR_FIELDS


def _items_from_input(items: Iterable[ShipmentItemIn]) -> List[ShipmentItem]:
    return [
        ShipmentItem(
            no=item.no if item.no is not None else index + 1,
            box_no=item.box_no,
            part_no=item.part_no,
            part_name=item.part_name,
            quantity=item.quantity,
            remark=item.remark or None,
            price_per_pcs=item.price_per_pcs,
            total_amount=item.total_amount,
            special_packing=item.special_packing,
        )
        for index, item in enumerate(items)
    ]


def _whole_quantities(items: List[ManualItem]) -> List[int]:
    quantities = []
    bad = []
    for index, item in enumerate(items):
        qty = to_number(item.qty)
        if isinstance(qty, float):
            bad.append(f"manualItems[{index}].qty: {qty} is not a whole number")
        quantities.append(int(qty))
    if bad:
        raise ValidationError("Quantity must be a whole number", errors=bad)
    return quantities


def _items_from_manual(items: List[ManualItem]) -> List[ShipmentItem]:
    """Map memo manual items onto shipment rows (qty -> quantity, pricePerPc -> pricePerPcs)."""
    quantities = _whole_quantities(items)
    return [
        ShipmentItem(
            no=item.no if item.no is not None else index + 1,
            box_no=item.box_no or "",
            part_no=item.part_no or "",
            part_name=item.part_name or "",
            quantity=quantities[index],
            remark=item.remark or None,
            price_per_pcs=item.price_per_pc or None,
            total_amount=item.total_amount or None,
            special_packing=item.special_packing,
        )
        for index, item in enumerate(items)
    ]


class ShipmentService:
    """Service layer for shipment operations."""

    def __init__(self, db: Session, companies: CompanyService):
        self.db = db
        self.companies = companies

    def _query(self):
        return self.db.query(Shipment).options(
            selectinload(Shipment.items),
            joinedload(Shipment.order_by),
            joinedload(Shipment.deliver_to),
            joinedload(Shipment.user),
        )

    def _finish(self, commit: bool) -> None:
        if commit:
            self.db.commit()
        else:
            self.db.flush()

    def create_shipment(self, shipment_in: ShipmentCreate, owner_id: Optional[str]) -> Shipment:
        """Register a new shipment in DRAFT with its item list."""
        data = shipment_in.model_dump(exclude={"items"})
        shipment = Shipment(**data)
        shipment.user_id = owner_id  # type: ignore[assignment]
        shipment.status = ShipmentStatus.DRAFT
        shipment.items = _items_from_input(shipment_in.items)

        self.db.add(shipment)
        self.db.commit()
        log.info("Shipment %s created with %s items", shipment.id, len(shipment_in.items))
        return self.get_shipment(str(shipment.id))

    def get_shipment(self, shipment_id: str) -> Shipment:
        shipment = self._query().filter(Shipment.id == shipment_id).first()
        if not shipment:
            raise NotFoundError("Shipment not found")
        return shipment

    def list_shipments(
        self,
        status: Optional[str] = None,
        page: int = 1,
        page_size: int = 10,
    ) -> Tuple[int, List[Shipment]]:
        query = self.db.query(Shipment)
        if status and status.upper() != "ALL":
            try:
                wanted = ShipmentStatus(status.upper())
            except ValueError:
                raise ValidationError("Invalid status", errors=[f"status: '{status}' is not a shipment status"])
            query = query.filter(Shipment.status == wanted)

        total = query.count()
        shipments = (
            query.options(
                selectinload(Shipment.items),
                joinedload(Shipment.order_by),
                joinedload(Shipment.deliver_to),
                joinedload(Shipment.user),
            )
            .order_by(Shipment.created_at.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )
        return total, shipments

    def _get_mutable(self, shipment_id: str, action: str) -> Shipment:
        shipment = self.db.query(Shipment).filter(Shipment.id == shipment_id).first()
        if not shipment:
            raise NotFoundError("Shipment not found")
        if shipment.is_approved:
            raise ConflictError(f"Cannot {action} approved shipment")
        return shipment

    def update_shipment(self, shipment_id: str, update_in: ShipmentUpdate) -> Shipment:
        """
        Apply a partial update. ``manualItems`` replaces the item list (the
        only path by which memo items flow back into the shipment); otherwise
        ``items`` does.
        """
        shipment = self._get_mutable(shipment_id, "modify")
        sent = update_in.model_fields_set

        # Rows are built before any header change so a bad item list leaves the shipment untouched.
        new_items = None
        if update_in.manual_items is not None:
            new_items = _items_from_manual(list(update_in.manual_items))
        elif update_in.items is not None:
            new_items = _items_from_input(update_in.items)

        for field in UPDATABLE_FIELDS:
            if field not in sent:
                continue
            value = getattr(update_in, field)
            if value is None and field in _REQUIRED_HEADER_FIELDS:
                continue
            setattr(shipment, field, value)

        if "order_by" in sent and update_in.order_by is not None:
            order_by_id = self.companies.ensure_exists(update_in.order_by, commit=False)
            if order_by_id:
                shipment.order_by_id = order_by_id  # type: ignore[assignment]
        if "delivery_to" in sent and update_in.delivery_to is not None:
            deliver_to_id = self.companies.ensure_exists(update_in.delivery_to, commit=False)
            if deliver_to_id:
                shipment.deliver_to_id = deliver_to_id  # type: ignore[assignment]

        if new_items is not None:
            shipment.items = new_items
            if update_in.manual_items is not None:
                log.info("Shipment %s items replaced by %s memo items", shipment_id, len(new_items))

        self.db.commit()
        self.db.expire_all()
        return self.get_shipment(shipment_id)

    def set_status(self, shipment_id: str, status: ShipmentStatus, commit: bool = True) -> Shipment:
        """Unconditional status change; the memo workflow does its own guarding."""
        shipment = self.db.query(Shipment).filter(Shipment.id == shipment_id).first()
        if not shipment:
            raise NotFoundError("Shipment not found")

        shipment.status = status
        self._finish(commit)
        log.info("Shipment %s status set to %s", shipment_id, status.value)
        if commit:
            return self.get_shipment(shipment_id)
        return shipment

    def delete_shipment(self, shipment_id: str) -> None:
        shipment = self._get_mutable(shipment_id, "delete")
        self.db.delete(shipment)
        self.db.commit()
        log.info("Shipment %s deleted", shipment_id)

    def apply_memo_outcome(
        self,
        shipment: Shipment,
        memo_fields: dict,
        order_by_id: Optional[str],
        deliver_to_id: Optional[str],
        status: Optional[ShipmentStatus],
    ) -> Shipment:
        """Mirror memo scalars, link resolved companies and set status (flush only)."""
        for field in MEMO_MIRROR_FIELDS:
            if field in memo_fields:
                setattr(shipment, field, memo_fields[field])
        if order_by_id:
            shipment.order_by_id = order_by_id  # type: ignore[assignment]
        if deliver_to_id:
            shipment.deliver_to_id = deliver_to_id  # type: ignore[assignment]
        if status is not None:
            shipment.status = status
        self.db.flush()
        return shipment
