import pytest

from core.exceptions import ConflictError, NotFoundError, ValidationError
from models.company import Company
from models.shipment import Shipment, ShipmentItem, ShipmentStatus
from schemas.memo import MemoPayload
from schemas.shipment import ShipmentCreate, ShipmentUpdate

from tests.conftest import OWNER_ID, shipment_payload


def test_create_sets_draft_and_coerces_numbers(make_shipment):
    shipment = make_shipment(
        grossWeight="n/a",
        netWeight=None,
        items=[
            {"partNo": "P1", "partName": "Bolt", "quantity": "12"},
            {"partNo": "P2", "partName": "Nut", "quantity": "lots"},
        ],
    )

    assert shipment.status == ShipmentStatus.DRAFT
    assert shipment.gross_weight == 0
    assert shipment.net_weight == 0
    assert [(i.no, i.part_no, i.quantity) for i in shipment.items] == [(1, "P1", 12), (2, "P2", 0)]
    assert shipment.user_id == OWNER_ID
    assert shipment.production_month.year == 2026


def test_create_keeps_rack_list(make_shipment):
    shipment = make_shipment(rackNo=["R-1", "R-2"])

    assert shipment.rack_no == ["R-1", "R-2"]


def test_create_requires_items():
    with pytest.raises(Exception):
        ShipmentCreate.model_validate(shipment_payload(items=[]))


def test_get_unknown_shipment(shipments):
    with pytest.raises(NotFoundError):
        shipments.get_shipment("missing")


def test_list_filters_and_paginates(shipments, make_shipment):
    first = make_shipment(orderNo="A")
    make_shipment(orderNo="B")
    make_shipment(orderNo="C")
    shipments.set_status(first.id, ShipmentStatus.APPROVED)

    total, rows = shipments.list_shipments(status="ALL", page=1, page_size=2)
    assert total == 3
    assert len(rows) == 2

    total, rows = shipments.list_shipments(status="approved")
    assert total == 1
    assert rows[0].order_no == "A"

    with pytest.raises(ValidationError):
        shipments.list_shipments(status="SHIPPED")


def test_update_applies_sent_fields_only(shipments, make_shipment):
    shipment = make_shipment()

    updated = shipments.update_shipment(
        shipment.id,
        ShipmentUpdate.model_validate({"shippingMark": "SM-99", "memoNo": "M-1", "unknownKey": "dropped"}),
    )

    assert updated.shipping_mark == "SM-99"
    assert updated.memo_no == "M-1"
    assert updated.order_no == "ORD-1001"
    assert not hasattr(updated, "unknown_key")


def test_update_manual_items_replace_shipment_items(shipments, make_shipment, db_session):
    shipment = make_shipment()

    updated = shipments.update_shipment(
        shipment.id,
        ShipmentUpdate.model_validate({
            "manualItems": [
                {"partNo": "P9", "partName": "Gear", "qty": "3", "pricePerPc": 2.5, "totalAmount": 7.5},
                {"no": 5, "partNo": "P8", "partName": "Cog", "qty": 1, "specialPacking": True},
            ]
        }),
    )

    items = sorted(updated.items, key=lambda i: i.no)
    assert [(i.no, i.part_no, i.quantity, i.price_per_pcs) for i in items] == [
        (1, "P9", 3, 2.5),
        (5, "P8", 1, None),
    ]
    assert items[1].special_packing == "YES"
    assert db_session.query(ShipmentItem).count() == 2


def test_update_rejects_fractional_memo_quantity(shipments, make_shipment):
    shipment = make_shipment()

    with pytest.raises(ValidationError) as caught:
        shipments.update_shipment(
            shipment.id,
            ShipmentUpdate.model_validate({
                "shippingMark": "SM-99",
                "manualItems": [{"partNo": "P9", "partName": "Gear", "qty": 2.5}],
            }),
        )

    assert caught.value.errors == ["manualItems[0].qty: 2.5 is not a whole number"]
    reloaded = shipments.get_shipment(shipment.id)
    assert reloaded.shipping_mark == "SM-01"
    assert [(i.part_no, i.quantity) for i in reloaded.items] == [("P1", 10)]


def test_create_rejects_fractional_item_quantity():
    with pytest.raises(Exception):
        ShipmentCreate.model_validate(shipment_payload(
            items=[{"partNo": "P1", "partName": "Bolt", "quantity": 2.5}],
        ))


def test_update_resolves_parties(shipments, make_shipment, db_session):
    shipment = make_shipment()

    updated = shipments.update_shipment(
        shipment.id,
        ShipmentUpdate.model_validate({"orderBy": {"companyName": "Acme"}, "deliveryTo": {"id": "c123"}}),
    )

    assert updated.order_by.name == "Acme"
    assert updated.deliver_to_id == "c123"
    assert db_session.query(Company).count() == 1


def test_approved_shipment_is_immutable(shipments, make_shipment):
    shipment = make_shipment()
    shipments.set_status(shipment.id, ShipmentStatus.APPROVED)

    with pytest.raises(ConflictError):
        shipments.update_shipment(shipment.id, ShipmentUpdate(shipping_mark="X"))
    with pytest.raises(ConflictError):
        shipments.delete_shipment(shipment.id)

    assert shipments.get_shipment(shipment.id).shipping_mark == "SM-01"


def test_set_status_has_no_guard(shipments, make_shipment):
    shipment = make_shipment()

    shipments.set_status(shipment.id, ShipmentStatus.APPROVED)
    back = shipments.set_status(shipment.id, ShipmentStatus.DRAFT)

    assert back.status == ShipmentStatus.DRAFT


def test_delete_removes_items_and_memo(shipments, memos, make_shipment, db_session):
    shipment = make_shipment()
    memos.upsert_draft(shipment.id, MemoPayload(memo_no="M-1"))

    shipments.delete_shipment(shipment.id)

    assert db_session.query(Shipment).count() == 0
    assert db_session.query(ShipmentItem).count() == 0
    assert memos.get_by_shipment_id(shipment.id) is None
