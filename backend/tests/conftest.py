"""
Shared fixtures: in-memory database, sample profiles, a Lob gateway
backed by httpx.MockTransport, and a FastAPI TestClient wired to both.
"""
from datetime import datetime, timezone

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.auth import create_access_token
from app.database import Base, get_db
from app.models import db_models  # noqa: F401  registers tables on Base
from app.models.ssot import CreditProfile, NegativeItem, NegativeItemType
from app.services.mail import LobMailService, get_mail_service


FIXED_NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = Session()
    try:
        yield session
    finally:
        session.close()


def make_profile(**overrides) -> CreditProfile:
    values = dict(
        name="Jane Doe",
        address_line1="12 Elm St",
        city="Austin",
        state="TX",
        zip="78701",
        ssn_last4="1234",
        dob="1990-01-01",
    )
    values.update(overrides)
    return CreditProfile(**values)


@pytest.fixture
def profile():
    return make_profile(
        current_score=610,
        total_accounts=4,
        on_time_payment_percent=92,
        utilization_percent=45,
        average_account_age_months=30,
        account_types=["revolving", "auto"],
        negative_items=[
            NegativeItem(type=NegativeItemType.COLLECTION, creditor_name="Midland Credit", amount=842.0),
            NegativeItem(type=NegativeItemType.LATE_PAYMENT, creditor_name="Capital One"),
            NegativeItem(type=NegativeItemType.INQUIRY, creditor_name="Chase Auto"),
            NegativeItem(type=NegativeItemType.CHARGEOFF, creditor_name="Synchrony Bank", amount=1200.0),
        ],
    )


# =============================================================================
# LOB GATEWAY
# =============================================================================

class LobStub:
    """
    Records requests and answers from a queue of (status, body) responses;
    a str body is sent as plain text, anything else as JSON.
    An exception in the queue is raised instead of answering.
    """

    def __init__(self):
        self.requests = []
        self.responses = []
        self.counter = 0

    def queue(self, *responses):
        self.responses.extend(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.responses:
            status, body = self.responses.pop(0)
            if isinstance(status, Exception):
                raise status
            if isinstance(body, str):
                return httpx.Response(status, text=body)
            return httpx.Response(status, json=body)

        self.counter += 1
        return httpx.Response(200, json={
            "id": f"ltr_{self.counter}",
            "tracking_number": f"9407{self.counter:04d}",
            "price": "7.25",
        })

    def form(self, index=-1):
        return dict(httpx.QueryParams(self.requests[index].content.decode()))


@pytest.fixture
def lob_stub():
    return LobStub()


@pytest.fixture
def mail_service(lob_stub):
    service = LobMailService(
        "test_abc123",
        base_url="https://lob.test/v1",
        timeout=5,
        transport=httpx.MockTransport(lob_stub),
    )
    yield service
    service.close()


# =============================================================================
# API CLIENT
# =============================================================================

@pytest.fixture
def client(engine, mail_service):
    from app.main import app

    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = Session()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mail_service] = lambda: mail_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {create_access_token('user-1')}"}
