import pytest

from core.exceptions import NotFoundError, ValidationError
from models.company import Company
from schemas.company import CompanyCreate, CompanyUpdate, Party


def test_ensure_exists_none_and_empty_party(companies):
    assert companies.ensure_exists(None) is None
    assert companies.ensure_exists(Party()) is None


def test_ensure_exists_returns_id_without_lookup(companies, db_session):
    assert companies.ensure_exists(Party(id="c123")) == "c123"
    assert db_session.query(Company).count() == 0


def test_ensure_exists_creates_a_row_every_time(companies, db_session):
    first = companies.ensure_exists(Party.model_validate({"companyName": "Acme", "attention": "Jo"}))
    second = companies.ensure_exists(Party.model_validate({"companyName": "Acme"}))

    assert first and second and first != second
    rows = db_session.query(Company).filter(Company.name == "Acme").all()
    assert len(rows) == 2
    assert {row.contact_person for row in rows} == {"Jo", None}


def test_list_orders_by_name_and_hides_inactive(companies):
    zeta = companies.create_company(CompanyCreate(name="Zeta"))
    companies.create_company(CompanyCreate(name="Alpha"))
    companies.deactivate_company(zeta.id)

    assert [c.name for c in companies.list_companies()] == ["Alpha"]
    assert [c.name for c in companies.list_companies(active_only=False)] == ["Alpha", "Zeta"]
    assert companies.get_company(zeta.id).is_active is False


def test_deactivate_is_idempotent(companies):
    company = companies.create_company(CompanyCreate(name="Acme"))

    companies.deactivate_company(company.id)
    again = companies.deactivate_company(company.id)

    assert again.is_active is False


def test_create_requires_name(companies):
    with pytest.raises(ValidationError):
        companies.create_company(CompanyCreate.model_construct(name="   "))


def test_update_applies_sent_fields_only(companies):
    company = companies.create_company(CompanyCreate(name="Acme", country="JP"))

    updated = companies.update_company(company.id, CompanyUpdate.model_validate({"contactPerson": "Kim"}))

    assert updated.contact_person == "Kim"
    assert updated.country == "JP"


def test_update_unknown_company(companies):
    with pytest.raises(NotFoundError):
        companies.update_company("missing", CompanyUpdate(name="X"))
