from typing import List
from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.database import get_db
from core.security import get_current_user
from models.user import User
from services.company_service import CompanyService
from services.memo_service import MemoService
from services.memo_workflow_service import MemoWorkflowService
from services.shipment_service import ShipmentService
from services.stats_service import StatsService
from services.user_service import UserService


class RoleChecker:
    def __init__(self, allowed_roles: List[str]):
        self.allowed_roles = allowed_roles

    def __call__(self, user: User = Depends(get_current_user)) -> User:
        user_role = str(user.role.value) if hasattr(user.role, 'value') else str(user.role)

        if user_role.upper() not in self.allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Operation not permitted. Required roles: {self.allowed_roles}"
            )
        return user


# Define reusable dependencies
require_admin = RoleChecker(["ADMIN"])
require_viewer = RoleChecker(["ADMIN", "VIEWER"])


# Per-request service wiring
def get_company_service(db: Session = Depends(get_db)) -> CompanyService:
    return CompanyService(db)


def get_shipment_service(db: Session = Depends(get_db)) -> ShipmentService:
    return ShipmentService(db, CompanyService(db))


def get_memo_service(db: Session = Depends(get_db)) -> MemoService:
    return MemoService(db)


def get_memo_workflow_service(db: Session = Depends(get_db)) -> MemoWorkflowService:
    companies = CompanyService(db)
    return MemoWorkflowService(
        db,
        companies=companies,
        shipments=ShipmentService(db, companies),
        memos=MemoService(db),
    )


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


def get_stats_service(db: Session = Depends(get_db)) -> StatsService:
    return StatsService(db)
