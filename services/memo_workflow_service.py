"""
Memo workflow: draft save, in-process save, publish and final save.

Each operation runs as one transaction over the company, memo and shipment
stores and reports a ServiceResult instead of raising.
"""
import logging
from typing import Any, Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import AppError, ConflictError, InternalError, ValidationError
from models.memo import Memo, MemoStatus
from models.shipment import Shipment, ShipmentStatus
from schemas.common import dump
from schemas.memo import MemoFinalSavePayload, MemoPayload, MemoPublishPayload, MemoResponse
from services.company_service import CompanyService
from services.memo_service import MemoService
from services.shipment_service import ShipmentService

log = logging.getLogger(__name__)


class ServiceResult:
    """Outcome of a workflow operation, ready to be sent as the JSON envelope."""

    def __init__(
        self,
        success: bool,
        message: Optional[str] = None,
        data: Any = None,
        status_code: int = 200,
        errors: Optional[List[str]] = None,
    ):
        self.success = success
        self.message = message
        self.data = data
        self.status_code = status_code
        self.errors = errors or []

    @classmethod
    def ok(cls, data: Any = None, message: Optional[str] = None) -> "ServiceResult":
        return cls(True, message=message, data=data)

    @classmethod
    def fail(cls, message: str, status_code: int = 500, errors: Optional[List[str]] = None) -> "ServiceResult":
        return cls(False, message=message, status_code=status_code, errors=errors)

    def to_dict(self) -> dict:
        body: dict = {"success": self.success}
        if self.message:
            body["message"] = self.message
        if self.success:
            body["data"] = dump(self.data)
        if self.errors:
            body["errors"] = self.errors
        return body


class MemoWorkflowService:
    """Coordinates memo writes with shipment status and company resolution."""

    def __init__(
        self,
        db: Session,
        companies: CompanyService,
        shipments: ShipmentService,
        memos: MemoService,
    ):
        self.db = db
        self.companies = companies
        self.shipments = shipments
        self.memos = memos

    def _run(self, action: str, shipment_id: str, work: Callable[[], Memo], message: str) -> ServiceResult:
        try:
            memo = work()
            self.db.commit()
            self.db.refresh(memo)
            return ServiceResult.ok(MemoResponse.model_validate(memo), message=message)
        except AppError as exc:
            self.db.rollback()
            log.warning("%s failed for shipment %s: %s", action, shipment_id, exc.message)
            return ServiceResult.fail(exc.message, status_code=exc.status_code, errors=exc.errors)
        except SQLAlchemyError as exc:
            self.db.rollback()
            log.error("Database error during %s for shipment %s: %s", action, shipment_id, exc, exc_info=True)
        except Exception as exc:
            self.db.rollback()
            log.error("Unexpected error during %s for shipment %s: %s", action, shipment_id, exc, exc_info=True)

        error = InternalError(f"Failed to {action}")
        return ServiceResult.fail(error.message, status_code=error.status_code)

    def _load_shipment(self, shipment_id: str) -> Shipment:
        shipment = self.db.query(Shipment).filter(Shipment.id == shipment_id).first()
        if not shipment:
            raise ValidationError("Shipment not found")
        return shipment

    @staticmethod
    def _guard(shipment: Shipment, target: Optional[ShipmentStatus]) -> None:
        if shipment.is_approved:
            raise ConflictError("Cannot modify approved shipment")
        if target is not None and not shipment.can_transition_to(target):
            allowed = ", ".join(s.value for s in shipment.get_valid_next_states())
            raise ConflictError(
                f"Cannot move shipment from {shipment.status.value} to {target.value}",
                errors=[f"Allowed: {allowed}"],
            )

    def _resolve_and_apply(
        self,
        shipment_id: str,
        payload: MemoPayload,
        memo_status: MemoStatus,
        shipment_status: Optional[ShipmentStatus],
        check_transition: bool = True,
    ) -> Memo:
        # Parties are resolved before the memo write; a failure later rolls them back.
        order_by_id = self.companies.ensure_exists(payload.order_by, commit=False)
        deliver_to_id = self.companies.ensure_exists(payload.delivery_to, commit=False)

        memo = self.memos.write_memo(shipment_id, payload, memo_status, commit=False)

        shipment = self._load_shipment(shipment_id)
        self._guard(shipment, shipment_status if check_transition else None)
        self.shipments.apply_memo_outcome(
            shipment,
            payload.memo_field_values(),
            order_by_id,
            deliver_to_id,
            shipment_status,
        )
        if shipment_status is not None:
            log.info("Shipment %s moved to %s by memo workflow", shipment_id, shipment_status.value)
        return memo

    def save_draft(self, shipment_id: str, payload: MemoPayload) -> ServiceResult:
        """Upsert the memo as DRAFT. Shipment status is left alone."""
        return self._run(
            "save memo draft",
            shipment_id,
            lambda: self.memos.upsert_draft(shipment_id, payload, commit=False),
            "Memo draft saved",
        )

    def save_as_in_process(self, shipment_id: str, payload: MemoPayload) -> ServiceResult:
        """
        Upsert the draft and set the shipment IN_PROCESS.

        Used after a mismatching reconciliation; the caller has already decided,
        so quantities are not re-checked here.
        """
        def work() -> Memo:
            shipment = self._load_shipment(shipment_id)
            self._guard(shipment, ShipmentStatus.IN_PROCESS)
            memo = self.memos.upsert_draft(shipment_id, payload, commit=False)
            shipment.status = ShipmentStatus.IN_PROCESS  # type: ignore[assignment]
            self.db.flush()
            log.info("Shipment %s moved to IN_PROCESS by memo workflow", shipment_id)
            return memo

        return self._run("save memo as in process", shipment_id, work, "Memo saved, shipment in process")

    def publish(self, shipment_id: str, payload: MemoPublishPayload) -> ServiceResult:
        """
        Resolve parties, write the memo as PUBLISHED and mirror it onto the shipment.

        Shipment status changes only when ``setShipmentStatus`` is given.
        """
        return self._run(
            "publish memo",
            shipment_id,
            lambda: self._resolve_and_apply(
                shipment_id, payload, MemoStatus.PUBLISHED, payload.set_shipment_status
            ),
            "Memo published",
        )

    def final_save(
        self,
        shipment_id: str,
        payload: MemoPayload,
        status_after_save: Optional[str] = None,
    ) -> ServiceResult:
        """Resolve parties and keep the memo DRAFT while the shipment takes ``status_after_save``."""
        if status_after_save is None and isinstance(payload, MemoFinalSavePayload):
            status_after_save = payload.status_after_save
        if status_after_save not in (ShipmentStatus.DRAFT.value, ShipmentStatus.IN_PROCESS.value):
            return ServiceResult.fail(
                "statusAfterSave must be DRAFT or IN_PROCESS",
                status_code=400,
                errors=["statusAfterSave: must be DRAFT or IN_PROCESS"],
            )
        target = ShipmentStatus(status_after_save)

        return self._run(
            "save memo",
            shipment_id,
            # Only APPROVED is refused; DRAFT and IN_PROCESS apply from either state.
            lambda: self._resolve_and_apply(
                shipment_id, payload, MemoStatus.DRAFT, target, check_transition=False
            ),
            "Memo saved",
        )
