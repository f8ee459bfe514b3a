from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool

from cashup.api.deps import get_session_factory
from cashup.db.models import CreditPayment, Expense, Invoice, Order
from cashup.infrastructure.database.base import Base
from cashup.infrastructure.database.session import build_session_factory
from cashup.main import app

DAY = "2026-10-19"
YESTERDAY = "2026-10-18"

YESTERDAY_BALANCES = {"cash_sos": "720,000", "cash_usd": 310, "evc": "120.50", "edahab": "40"}
TODAY_BALANCES = {"cash_sos": "720,000", "cash_usd": "352.50", "evc": "120.50", "edahab": "40"}


def _seed_ledgers(path) -> None:
    engine = create_engine(f"sqlite:///{path}")
    try:
        Base.metadata.create_all(engine)
        with Session(engine) as session:
            session.add_all(
                [
                    Order(total=Decimal("35"), created_at=datetime(2026, 10, 19, 6, 0)),
                    Order(total=Decimal("65"), note="cash", created_at=datetime(2026, 10, 19, 7, 0)),
                    Order(total=Decimal("20"), note="DEYN - Hodan", created_at=datetime(2026, 10, 19, 8, 0)),
                    CreditPayment(credit_id="c-1", amount=Decimal("15"), created_at=datetime(2026, 10, 19, 9, 0)),
                    Expense(
                        amount=Decimal("12.50"),
                        note="Generator fuel",
                        payment_method="EVC Plus",
                        created_at=datetime(2026, 10, 19, 10, 0),
                    ),
                    Invoice(
                        invoice_date=datetime(2026, 10, 19).date(),
                        total_amount=Decimal("60"),
                        created_at=datetime(2026, 10, 19, 5, 0),
                    ),
                ]
            )
            session.commit()
    finally:
        engine.dispose()


def _client_for(path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{path}", poolclass=NullPool)
    app.dependency_overrides[get_session_factory] = lambda: build_session_factory(engine)
    return TestClient(app)


@pytest.fixture
def client(tmp_path):
    path = tmp_path / "api.db"
    _seed_ledgers(path)
    with _client_for(path) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def client_without_tables(tmp_path):
    with _client_for(tmp_path / "empty.db") as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_unknown_day_is_404(client):
    assert client.get(f"/api/balances/{DAY}").status_code == 404


def test_bad_date_is_rejected(client):
    assert client.get("/api/balances/19-10-2026").status_code == 422


def test_save_then_reconcile(client):
    assert client.put(f"/api/balances/{YESTERDAY}", json=YESTERDAY_BALANCES).status_code == 200

    response = client.put(f"/api/balances/{DAY}", json=TODAY_BALANCES)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Saved. Now check the difference and reconciliation below."
    assert Decimal(body["snapshot"]["cash_usd"]) == Decimal("352.50")
    reconciliation = body["reconciliation"]
    assert reconciliation["status"] == "balanced"
    assert reconciliation["result"]["balanced"] is True
    assert Decimal(reconciliation["result"]["difference"]) == 0
    assert Decimal(reconciliation["movement"]["net"]) == Decimal("42.50")
    assert reconciliation["reference_currency"] == "USD"

    again = client.get(f"/api/reconciliation/{DAY}").json()
    assert again["status"] == "balanced"
    assert Decimal(again["current_totals"]["converted_total"]) == Decimal("20")


def test_second_save_overwrites_the_day(client):
    client.put(f"/api/balances/{DAY}", json=TODAY_BALANCES)
    client.put(f"/api/balances/{DAY}", json={**TODAY_BALANCES, "cash_usd": "340", "note": "recount"})

    body = client.get(f"/api/balances/{DAY}").json()

    assert Decimal(body["cash_usd"]) == Decimal("340")
    assert body["note"] == "recount"


def test_divergent_day_reports_the_gap(client):
    client.put(f"/api/balances/{YESTERDAY}", json=YESTERDAY_BALANCES)
    client.put(f"/api/balances/{DAY}", json={**TODAY_BALANCES, "cash_usd": "340"})

    body = client.get(f"/api/reconciliation/{DAY}", params={"fx_rate": "36,000"}).json()

    assert body["status"] == "divergent"
    assert Decimal(body["result"]["difference"]) == Decimal("-12.50")
    assert Decimal(body["deltas"]["channels"]["cash_usd"]) == Decimal("30")


def test_negative_amount_is_422(client):
    response = client.put(f"/api/balances/{DAY}", json={**TODAY_BALANCES, "evc": "-1"})

    assert response.status_code == 422
    assert "evc" in response.json()["detail"]
    assert client.get(f"/api/balances/{DAY}").status_code == 404


def test_preview_does_not_save(client):
    client.put(f"/api/balances/{YESTERDAY}", json=YESTERDAY_BALANCES)

    response = client.post(f"/api/reconciliation/{DAY}/preview", json=TODAY_BALANCES)

    assert response.status_code == 200
    assert response.json()["is_draft"] is True
    assert response.json()["status"] == "balanced"
    assert client.get(f"/api/balances/{DAY}").status_code == 404


def test_cashbook(client):
    body = client.get(f"/api/cashbook/{DAY}").json()

    assert Decimal(body["cash_in"]) == Decimal("115")
    assert Decimal(body["cash_out"]) == Decimal("72.50")
    assert len(body["lines"]) == 5
    assert body["lines"][0]["title"] == "Generator fuel"
    assert body["lines"][0]["method"] == "evc"
    assert body["degraded"] is False


def test_missing_table_is_503(client_without_tables):
    response = client_without_tables.get(f"/api/balances/{DAY}")

    assert response.status_code == 503
    assert "alembic upgrade head" in response.json()["detail"]


def test_reconciliation_degrades_without_tables(client_without_tables):
    response = client_without_tables.get(f"/api/reconciliation/{DAY}")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "indeterminate"
    assert body["degraded"] is True
    assert body["result"]["balanced"] is False
    assert body["snapshot_error"]
    assert all(source["status"] == "unavailable" for source in body["movement"]["sources"])


def test_oversized_amount_is_422(client):
    response = client.put(f"/api/balances/{DAY}", json={**TODAY_BALANCES, "cash_usd": "1e30"})

    assert response.status_code == 422
    assert "cash_usd" in response.json()["detail"]


def test_absurd_fx_rate_is_reported_not_raised(client):
    client.put(f"/api/balances/{DAY}", json=TODAY_BALANCES)

    response = client.get(f"/api/reconciliation/{DAY}", params={"fx_rate": "1e-22"})

    assert response.status_code == 200
    assert response.json()["current_totals"]["fx_available"] is False
    assert any("FX rate" in warning for warning in response.json()["warnings"])
