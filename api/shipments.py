"""
Shipment and memo endpoints.
"""
from contextlib import contextmanager
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from api.dependencies import (
    get_memo_service,
    get_memo_workflow_service,
    get_shipment_service,
    require_admin,
    require_viewer,
)
from core.exceptions import NotFoundError, ValidationError
from models.user import User
from schemas.common import Pagination, success_response
from schemas.memo import (
    MemoFinalSavePayload,
    MemoPayload,
    MemoPublishPayload,
    MemoResponse,
    ReconcileRequest,
    ReconciliationResponse,
)
from schemas.shipment import ShipmentCreate, ShipmentResponse, ShipmentUpdate, StatusUpdate
from services.config_service import get_default_page_size, get_max_page_size
from services.memo_service import MemoService
from services.memo_workflow_service import MemoWorkflowService, ServiceResult
from services.reconciliation import reconcile
from services.shipment_service import ShipmentService

router = APIRouter(prefix="/shipments", tags=["shipments"])


@contextmanager
def legacy_not_found():
    """The older shipment mutation routes answer 400 for unknown ids."""
    try:
        yield
    except NotFoundError as exc:
        raise ValidationError(exc.message) from exc


def result_response(result: ServiceResult) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.to_dict())


def shipment_data(shipment) -> dict:
    return {"shipment": ShipmentResponse.model_validate(shipment)}


@router.get("")
def list_shipments(
    status: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    shipments: ShipmentService = Depends(get_shipment_service),
    _: User = Depends(require_viewer),
):
    """List shipments, newest first."""
    page_size = min(limit or get_default_page_size(), get_max_page_size())
    total, rows = shipments.list_shipments(status=status, page=page, page_size=page_size)
    return success_response(
        {"shipments": [ShipmentResponse.model_validate(row) for row in rows]},
        pagination=Pagination.build(page, page_size, total),
    )


@router.get("/memos")
def list_memos(
    memos: MemoService = Depends(get_memo_service),
    _: User = Depends(require_viewer),
):
    """Shipments carrying memo data (memo listing view)."""
    rows = memos.list_memo_shipments()
    return success_response({"shipments": [ShipmentResponse.model_validate(row) for row in rows]})


@router.get("/{shipment_id}")
def get_shipment(
    shipment_id: str,
    shipments: ShipmentService = Depends(get_shipment_service),
    _: User = Depends(require_viewer),
):
    return success_response(shipment_data(shipments.get_shipment(shipment_id)))


@router.post("", status_code=201)
def create_shipment(
    shipment_in: ShipmentCreate,
    shipments: ShipmentService = Depends(get_shipment_service),
    current_user: User = Depends(require_admin),
):
    """Register a shipment from manual entry or a normalized spreadsheet import."""
    shipment = shipments.create_shipment(shipment_in, str(current_user.id))
    return success_response(shipment_data(shipment), message="Shipment created successfully")


@router.put("/{shipment_id}")
def update_shipment(
    shipment_id: str,
    update_in: ShipmentUpdate,
    shipments: ShipmentService = Depends(get_shipment_service),
    _: User = Depends(require_admin),
):
    """Combined update: header fields, memo-named fields, items or manualItems."""
    with legacy_not_found():
        shipment = shipments.update_shipment(shipment_id, update_in)
    return success_response(shipment_data(shipment), message="Shipment updated successfully")


@router.patch("/{shipment_id}/status")
def update_shipment_status(
    shipment_id: str,
    payload: StatusUpdate,
    shipments: ShipmentService = Depends(get_shipment_service),
    _: User = Depends(require_admin),
):
    with legacy_not_found():
        shipment = shipments.set_status(shipment_id, payload.status)
    return success_response(shipment_data(shipment), message="Shipment status updated successfully")


@router.delete("/{shipment_id}")
def delete_shipment(
    shipment_id: str,
    shipments: ShipmentService = Depends(get_shipment_service),
    _: User = Depends(require_admin),
):
    with legacy_not_found():
        shipments.delete_shipment(shipment_id)
    return {"success": True, "message": "Shipment deleted successfully"}


# ==================== MEMO ====================
@router.get("/{shipment_id}/memo")
def get_memo(
    shipment_id: str,
    memos: MemoService = Depends(get_memo_service),
    _: User = Depends(require_viewer),
):
    memo = memos.get_by_shipment_id(shipment_id)
    return success_response(MemoResponse.model_validate(memo) if memo else None)


@router.put("/{shipment_id}/memo")
def save_memo_draft(
    shipment_id: str,
    payload: MemoPayload,
    workflow: MemoWorkflowService = Depends(get_memo_workflow_service),
    _: User = Depends(require_admin),
):
    return result_response(workflow.save_draft(shipment_id, payload))


@router.delete("/{shipment_id}/memo")
def delete_memo_draft(
    shipment_id: str,
    memos: MemoService = Depends(get_memo_service),
    _: User = Depends(require_admin),
):
    deleted = memos.delete_draft(shipment_id)
    return {"success": True, "message": "Memo draft deleted" if deleted else "No memo draft to delete"}


@router.post("/{shipment_id}/memo/in-process")
def save_memo_in_process(
    shipment_id: str,
    payload: MemoPayload,
    workflow: MemoWorkflowService = Depends(get_memo_workflow_service),
    _: User = Depends(require_admin),
):
    return result_response(workflow.save_as_in_process(shipment_id, payload))


@router.post("/{shipment_id}/memo/publish")
def publish_memo(
    shipment_id: str,
    payload: MemoPublishPayload,
    workflow: MemoWorkflowService = Depends(get_memo_workflow_service),
    _: User = Depends(require_admin),
):
    return result_response(workflow.publish(shipment_id, payload))


@router.post("/{shipment_id}/memo/save")
def final_save_memo(
    shipment_id: str,
    payload: MemoFinalSavePayload,
    workflow: MemoWorkflowService = Depends(get_memo_workflow_service),
    _: User = Depends(require_admin),
):
    return result_response(workflow.final_save(shipment_id, payload, payload.status_after_save))


# ==================== RECONCILIATION ====================
@router.get("/{shipment_id}/memo/reconciliation")
def memo_reconciliation(
    shipment_id: str,
    shipments: ShipmentService = Depends(get_shipment_service),
    memos: MemoService = Depends(get_memo_service),
    _: User = Depends(require_viewer),
):
    """Compare the stored memo items with the shipment's items."""
    shipment = shipments.get_shipment(shipment_id)
    memo = memos.get_by_shipment_id(shipment_id)
    memo_items = (memo.manual_items or {}).get("items", []) if memo else []
    result = reconcile(shipment.items, memo_items)
    return success_response(ReconciliationResponse.model_validate(result.to_dict()))


@router.post("/{shipment_id}/reconcile")
def check_memo_items(
    shipment_id: str,
    payload: ReconcileRequest,
    shipments: ShipmentService = Depends(get_shipment_service),
    _: User = Depends(require_viewer),
):
    """Compare caller-supplied memo items with the shipment's items without saving."""
    shipment = shipments.get_shipment(shipment_id)
    result = reconcile(shipment.items, payload.manual_items)
    return success_response(ReconciliationResponse.model_validate(result.to_dict()))
