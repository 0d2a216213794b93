import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from main import app
from core.database import Base, get_db
from core.security import get_current_user

# Ensure models are registered with SQLAlchemy metadata
import models  # noqa: F401

from models.user import User
from schemas.shipment import ShipmentCreate
from services.company_service import CompanyService
from services.memo_service import MemoService
from services.memo_workflow_service import MemoWorkflowService
from services.shipment_service import ShipmentService

OWNER_ID = "00000000-0000-0000-0000-000000000001"


class MockUser:
    def __init__(self, role: str, user_id: str = OWNER_ID) -> None:
        self.id = user_id
        self.role = role
        self.email = "owner@example.com"
        self.name = "Owner"
        self.username = "owner"
        self.is_active = True


@pytest.fixture(scope="function")
def db_session():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    db.add(User(
        id=OWNER_ID,
        email="owner@example.com",
        name="Owner",
        username="owner",
        hashed_password="not-a-real-hash",
        role="ADMIN",
        is_active=True,
    ))
    db.commit()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


def _make_client(db_session, role: str):
    def _override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_current_user] = lambda: MockUser(role)
    return TestClient(app)


@pytest.fixture(scope="function")
def client(db_session):
    with _make_client(db_session, "ADMIN") as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def viewer_client(db_session):
    with _make_client(db_session, "VIEWER") as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def companies(db_session):
    return CompanyService(db_session)


@pytest.fixture
def shipments(db_session, companies):
    return ShipmentService(db_session, companies)


@pytest.fixture
def memos(db_session):
    return MemoService(db_session)


@pytest.fixture
def workflow(db_session, companies, shipments, memos):
    return MemoWorkflowService(db_session, companies=companies, shipments=shipments, memos=memos)


def shipment_payload(**overrides) -> dict:
    payload = {
        "shippingMark": "SM-01",
        "orderNo": "ORD-1001",
        "caseNo": "C-01",
        "destination": "Osaka",
        "model": "X100",
        "productionMonth": "2026-03",
        "caseSize": "120x80x90",
        "grossWeight": "512.5",
        "netWeight": 480,
        "rackNo": "R-7",
        "items": [
            {"partNo": "P1", "partName": "Bolt", "quantity": 10, "boxNo": "B1"},
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_shipment(shipments):
    def _make(**overrides):
        shipment_in = ShipmentCreate.model_validate(shipment_payload(**overrides))
        return shipments.create_shipment(shipment_in, OWNER_ID)

    return _make
