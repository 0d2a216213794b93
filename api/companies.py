"""
Company directory endpoints.
"""
from fastapi import APIRouter, Depends, Query

from api.dependencies import get_company_service, require_admin, require_viewer
from models.user import User
from schemas.common import success_response
from schemas.company import CompanyCreate, CompanyResponse, CompanyUpdate
from services.company_service import CompanyService

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get("")
def list_companies(
    active_only: bool = Query(True, alias="activeOnly"),
    companies: CompanyService = Depends(get_company_service),
    _: User = Depends(require_viewer),
):
    rows = companies.list_companies(active_only=active_only)
    return success_response([CompanyResponse.model_validate(row) for row in rows])


@router.get("/{company_id}")
def get_company(
    company_id: str,
    companies: CompanyService = Depends(get_company_service),
    _: User = Depends(require_viewer),
):
    """Deactivated companies stay loadable for the shipments that reference them."""
    return success_response(CompanyResponse.model_validate(companies.get_company(company_id)))


@router.post("", status_code=201)
def create_company(
    company_in: CompanyCreate,
    companies: CompanyService = Depends(get_company_service),
    _: User = Depends(require_admin),
):
    company = companies.create_company(company_in)
    return success_response(CompanyResponse.model_validate(company), message="Company created successfully")


@router.put("/{company_id}")
def update_company(
    company_id: str,
    company_in: CompanyUpdate,
    companies: CompanyService = Depends(get_company_service),
    _: User = Depends(require_admin),
):
    company = companies.update_company(company_id, company_in)
    return success_response(CompanyResponse.model_validate(company), message="Company updated successfully")


@router.delete("/{company_id}")
def delete_company(
    company_id: str,
    companies: CompanyService = Depends(get_company_service),
    _: User = Depends(require_admin),
):
    """Soft delete: the company is deactivated, never removed."""
    company = companies.deactivate_company(company_id)
    return success_response(CompanyResponse.model_validate(company), message="Company deactivated")
