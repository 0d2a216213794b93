"""
Company directory: trading-partner records referenced by shipments.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, ValidationError
from models.company import Company
from schemas.company import CompanyCreate, CompanyUpdate, Party

log = logging.getLogger(__name__)


class CompanyService:
    """Service layer for company records."""

    def __init__(self, db: Session):
        self.db = db

    def _finish(self, commit: bool) -> None:
        if commit:
            self.db.commit()
        else:
            self.db.flush()

    def list_companies(self, active_only: bool = True) -> List[Company]:
        query = self.db.query(Company)
        if active_only:
            query = query.filter(Company.is_active.is_(True))
        return query.order_by(Company.name.asc()).all()

    def get_company(self, company_id: str) -> Company:
        company = self.db.query(Company).filter(Company.id == company_id).first()
        if not company:
            raise NotFoundError("Company not found")
        return company

    def create_company(self, company_in: CompanyCreate, commit: bool = True) -> Company:
        name = (company_in.name or "").strip()
        if not name:
            raise ValidationError("Company name is required", errors=["name: Company name is required"])

        data = company_in.model_dump()
        data["name"] = name
        company = Company(**data, is_active=True)
        self.db.add(company)
        self._finish(commit)
        if commit:
            self.db.refresh(company)
        return company

    def update_company(self, company_id: str, company_in: CompanyUpdate) -> Company:
        company = self.get_company(company_id)

        for field in company_in.model_fields_set:
            value = getattr(company_in, field)
            if field in {"name", "is_active"} and value is None:
                continue
            setattr(company, field, value)

        self.db.commit()
        self.db.refresh(company)
        return company

    def deactivate_company(self, company_id: str) -> Company:
        """Soft delete. Referenced rows must survive, so nothing is removed."""
        company = self.get_company(company_id)
        if company.is_active:
            company.is_active = False  # type: ignore[assignment]
            self.db.commit()
            self.db.refresh(company)
        return company

    def ensure_exists(self, party: Optional[Party], commit: bool = True) -> Optional[str]:
        """
        Resolve memo party data to a company id.

        - no party: None
        - party.id: returned as-is, no lookup
        - party.company_name: a new Company is created every time (no
          matching by name, so two calls create two rows)
        - neither: None
        """
        if party is None:
            return None
        if party.id:
            return party.id
        if not party.company_name:
            return None

        company = Company(
            name=party.company_name.strip(),
            address=party.address or None,
            phone=party.phone or None,
            fax=party.fax or None,
            email=party.email or None,
            contact_person=party.attention or None,
            country=party.country or None,
            section=party.section or None,
            is_active=True,
        )
        self.db.add(company)
        self._finish(commit)
        log.info("Created company %s (%s) from memo party data", company.id, company.name)
        return str(company.id)
