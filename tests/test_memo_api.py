from models.company import Company

from tests.conftest import shipment_payload


def create_shipment(client, **overrides) -> str:
    response = client.post("/api/shipments", json=shipment_payload(**overrides))
    assert response.status_code == 201, response.text
    body = response.json()
    assert body["success"] is True
    return body["data"]["shipment"]["id"]


def test_create_and_get_use_camel_case(client):
    shipment_id = create_shipment(client, rackNo=["R-1", "R-2"])

    response = client.get(f"/api/shipments/{shipment_id}")

    assert response.status_code == 200
    shipment = response.json()["data"]["shipment"]
    assert shipment["orderNo"] == "ORD-1001"
    assert shipment["grossWeight"] == 512.5
    assert shipment["rackNo"] == ["R-1", "R-2"]
    assert shipment["status"] == "DRAFT"
    assert shipment["items"][0]["partNo"] == "P1"
    assert shipment["user"] == {"name": "Owner", "email": "owner@example.com"}


def test_create_validation_error_is_400(client):
    response = client.post("/api/shipments", json=shipment_payload(shippingMark="", items=[]))

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    assert body["errors"]


def test_unknown_shipment_is_404(client):
    response = client.get("/api/shipments/missing")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Shipment not found"}


def test_list_has_pagination(client):
    for n in range(3):
        create_shipment(client, orderNo=f"ORD-{n}")

    response = client.get("/api/shipments", params={"page": 2, "limit": 2})

    body = response.json()
    assert len(body["data"]["shipments"]) == 1
    assert body["pagination"] == {"page": 2, "limit": 2, "total": 3, "pages": 2}


def test_memo_get_is_null_before_draft(client):
    shipment_id = create_shipment(client)

    response = client.get(f"/api/shipments/{shipment_id}/memo")

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": None}


def test_memo_draft_roundtrip_and_cancel(client):
    shipment_id = create_shipment(client)
    body = {
        "memoNo": "M-1",
        "status": "PUBLISHED",
        "manualItems": [{"partNo": "P1", "partName": "Bolt", "qty": 10}],
        "deliveryTo": {"companyName": "Port Co"},
    }

    saved = client.put(f"/api/shipments/{shipment_id}/memo", json=body)
    assert saved.status_code == 200, saved.text
    memo = saved.json()["data"]
    assert memo["status"] == "DRAFT"
    assert memo["manualItems"]["deliveryTo"]["companyName"] == "Port Co"

    fetched = client.get(f"/api/shipments/{shipment_id}/memo").json()["data"]
    assert fetched["memoNo"] == "M-1"

    deleted = client.delete(f"/api/shipments/{shipment_id}/memo")
    assert deleted.json()["success"] is True
    assert client.get(f"/api/shipments/{shipment_id}/memo").json()["data"] is None


def test_memo_draft_for_unknown_shipment_is_400(client):
    response = client.put("/api/shipments/missing/memo", json={"memoNo": "M-1"})

    assert response.status_code == 400
    assert response.json()["message"] == "Shipment not found"


def test_reconcile_then_publish_and_approve(client, db_session):
    shipment_id = create_shipment(client)
    items = [{"partNo": "p1 ", "partName": "BOLT", "qty": 10}]

    check = client.post(f"/api/shipments/{shipment_id}/reconcile", json={"manualItems": items})
    assert check.json()["data"] == {
        "rows": [{"key": "p1|bolt", "shipmentQty": 10, "memoQty": 10}],
        "isMatch": True,
        "firstMismatchKey": None,
    }

    published = client.post(
        f"/api/shipments/{shipment_id}/memo/publish",
        json={
            "memoNo": "M-7",
            "manualItems": items,
            "orderBy": {"companyName": "Acme"},
            "deliveryTo": {"id": "c123"},
            "setShipmentStatus": "APPROVED",
        },
    )
    assert published.status_code == 200, published.text
    assert published.json()["data"]["status"] == "PUBLISHED"

    shipment = client.get(f"/api/shipments/{shipment_id}").json()["data"]["shipment"]
    assert shipment["status"] == "APPROVED"
    assert shipment["orderBy"]["companyName"] == "Acme"
    assert shipment["deliverToId"] == "c123"
    assert db_session.query(Company).count() == 1

    memos = client.get("/api/shipments/memos").json()["data"]["shipments"]
    assert [m["id"] for m in memos] == [shipment_id]

    stored = client.get(f"/api/shipments/{shipment_id}/memo/reconciliation").json()["data"]
    assert stored["isMatch"] is True


def test_mismatch_goes_in_process(client):
    shipment_id = create_shipment(client)
    items = [{"partNo": "P1", "partName": "Bolt", "qty": 7}]

    check = client.post(f"/api/shipments/{shipment_id}/reconcile", json={"manualItems": items}).json()["data"]
    assert check["isMatch"] is False
    assert check["firstMismatchKey"] == "p1|bolt"

    response = client.post(f"/api/shipments/{shipment_id}/memo/in-process", json={"manualItems": items})

    assert response.status_code == 200
    shipment = client.get(f"/api/shipments/{shipment_id}").json()["data"]["shipment"]
    assert shipment["status"] == "IN_PROCESS"


def test_final_save_status_values(client):
    shipment_id = create_shipment(client)

    rejected = client.post(f"/api/shipments/{shipment_id}/memo/save", json={"statusAfterSave": "APPROVED"})
    assert rejected.status_code == 400

    accepted = client.post(f"/api/shipments/{shipment_id}/memo/save", json={"statusAfterSave": "IN_PROCESS"})
    assert accepted.status_code == 200
    assert accepted.json()["data"]["status"] == "DRAFT"
    shipment = client.get(f"/api/shipments/{shipment_id}").json()["data"]["shipment"]
    assert shipment["status"] == "IN_PROCESS"


def test_status_patch_validates_value(client):
    shipment_id = create_shipment(client)

    bad = client.patch(f"/api/shipments/{shipment_id}/status", json={"status": "SHIPPED"})
    good = client.patch(f"/api/shipments/{shipment_id}/status", json={"status": "APPROVED"})

    assert bad.status_code == 400
    assert good.status_code == 200
    assert good.json()["data"]["shipment"]["status"] == "APPROVED"


def test_approved_shipment_rejects_update_and_delete(client):
    shipment_id = create_shipment(client)
    client.patch(f"/api/shipments/{shipment_id}/status", json={"status": "APPROVED"})

    updated = client.put(f"/api/shipments/{shipment_id}", json={"shippingMark": "X"})
    deleted = client.delete(f"/api/shipments/{shipment_id}")

    assert updated.status_code == 400
    assert updated.json()["message"] == "Cannot modify approved shipment"
    assert deleted.status_code == 400


def test_legacy_update_replaces_items_from_manual_items(client):
    shipment_id = create_shipment(client)

    response = client.put(
        f"/api/shipments/{shipment_id}",
        json={"memoNo": "M-3", "manualItems": [{"partNo": "P5", "partName": "Pin", "qty": 2, "pricePerPc": 4}]},
    )

    assert response.status_code == 200, response.text
    shipment = response.json()["data"]["shipment"]
    assert shipment["memoNo"] == "M-3"
    assert [(i["partNo"], i["quantity"], i["pricePerPcs"]) for i in shipment["items"]] == [("P5", 2, 4.0)]


def test_legacy_update_fractional_quantity_is_400(client):
    shipment_id = create_shipment(client)

    response = client.put(
        f"/api/shipments/{shipment_id}",
        json={"manualItems": [{"partNo": "P5", "partName": "Pin", "qty": "1.5"}]},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Quantity must be a whole number"
    shipment = client.get(f"/api/shipments/{shipment_id}").json()["data"]["shipment"]
    assert [(i["partNo"], i["quantity"]) for i in shipment["items"]] == [("P1", 10)]


def test_legacy_update_unknown_shipment_is_400(client):
    response = client.put("/api/shipments/missing", json={"shippingMark": "X"})

    assert response.status_code == 400


def test_viewer_can_read_but_not_write(viewer_client, make_shipment):
    shipment_id = make_shipment().id

    assert viewer_client.get(f"/api/shipments/{shipment_id}").status_code == 200
    forbidden = viewer_client.put(f"/api/shipments/{shipment_id}/memo", json={"memoNo": "M-1"})
    assert forbidden.status_code == 403
    assert forbidden.json()["success"] is False
