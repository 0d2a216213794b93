"""
Services module - business logic layer for the shipment memo service.
"""
from services.auth_service import AuthService
from services.company_service import CompanyService
from services.memo_service import MemoService
from services.memo_workflow_service import MemoWorkflowService, ServiceResult
from services.shipment_service import ShipmentService

__all__ = [
    "AuthService",
    "CompanyService",
    "MemoService",
    "MemoWorkflowService",
    "ServiceResult",
    "ShipmentService",
]
