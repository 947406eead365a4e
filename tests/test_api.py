import pytest
from fastapi.testclient import TestClient

from main import app

USER = {"user_id": "ana"}


@pytest.fixture
def client(temp_db):
    with TestClient(app) as test_client:
        yield test_client


def _create_rent(client, start_date="2024-03-10", as_of="2024-03-05"):
    response = client.post(
        "/obligations",
        params={**USER, "as_of_date": as_of},
        json={
            "description": "Aluguel",
            "category": "moradia",
            "amount": "1500.00",
            "frequency": "monthly",
            "start_date": start_date,
        },
    )
    assert response.status_code == 200, response.text
    return response.json()


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "OK"


def test_obligation_lifecycle(client):
    rent = _create_rent(client)
    assert rent["next_due_date"] == "2024-03-10"

    alerts = client.get("/obligations/alerts", params={**USER, "as_of_date": "2024-03-12"}).json()
    assert [(a["id"], a["status"], a["days_until_due"]) for a in alerts["alerts"]] == [
        (rent["id"], "overdue", -2)
    ]

    paid = client.post(f"/obligations/{rent['id']}/pay", params={**USER, "as_of_date": "2024-03-12"})
    assert paid.status_code == 200
    body = paid.json()
    assert body["transaction"]["date"] == "2024-03-10"
    assert body["transaction"]["type"] == "expense"
    assert body["obligation"]["next_due_date"] == "2024-04-10"

    listed = client.get("/transactions", params=USER).json()["transactions"]
    assert [t["id"] for t in listed] == [body["transaction"]["id"]]

    assert client.get(f"/obligations/{rent['id']}", params=USER).json()["amount"] == "1500.00"
    assert client.post(f"/obligations/{rent['id']}/deactivate", params=USER).status_code == 200
    assert client.get("/obligations", params=USER).json()["count"] == 0
    assert client.get(f"/obligations/{rent['id']}", params=USER).status_code == 404

    rejected = client.post(f"/obligations/{rent['id']}/pay", params=USER)
    assert rejected.status_code == 400


def test_invalid_frequency_is_a_client_error(client):
    response = client.post(
        "/obligations",
        params=USER,
        json={
            "description": "Aluguel",
            "category": "moradia",
            "amount": "10",
            "frequency": "mensal",
            "start_date": "2024-01-01",
        },
    )
    assert response.status_code == 400
    assert "mensal" in response.json()["error"]


def test_missing_obligation_is_404(client):
    assert client.post("/obligations/999/pay", params=USER).status_code == 404


def test_patch_overrides_due_date(client):
    rent = _create_rent(client)
    response = client.patch(
        f"/obligations/{rent['id']}", params=USER, json={"next_due_date": "2030-01-01"}
    )
    assert response.status_code == 200
    assert response.json()["next_due_date"] == "2030-01-01"


def test_bad_as_of_date_is_rejected(client):
    response = client.get("/obligations/alerts", params={**USER, "as_of_date": "2024-13-45"})
    assert response.status_code == 400
    assert "Invalid date format" in response.json()["error"]


def test_budget_status_endpoint(client):
    client.post("/budgets", params=USER, json={"category": "Moradia", "limit": "1000"})
    for amount, day in (("500", "2024-05-01"), ("300", "2024-05-15"), ("100", "2024-04-15")):
        client.post(
            "/transactions",
            params=USER,
            json={"type": "expense", "description": "Casa", "category": "moradia",
                  "amount": amount, "date": day},
        )

    response = client.get("/budgets/status", params={**USER, "as_of_date": "2024-05-20"})

    [status] = response.json()["budgets"]
    assert status["spent"] == "800.00"
    assert status["pct"] == pytest.approx(0.8)
    assert status["over_budget"] is False


def test_goal_contributions(client):
    goal = client.post("/goals", params=USER,
                       json={"name": "Reserva", "target_amount": "1000", "current_amount": "900"}).json()

    updated = client.post(f"/goals/{goal['id']}/contributions", params=USER, json={"amount": "150"})
    assert updated.status_code == 200
    assert updated.json()["complete"] is True
    assert updated.json()["progress"] == 100.0

    rejected = client.post(f"/goals/{goal['id']}/contributions", params=USER, json={"amount": "-10"})
    assert rejected.status_code == 400


def test_dashboard_combines_views(client):
    _create_rent(client, start_date="2024-05-22", as_of="2024-05-20")
    client.post(
        "/transactions",
        params=USER,
        json={"type": "income", "description": "Salário", "category": "salario",
              "amount": "5000", "date": "2024-05-05"},
    )

    data = client.get("/dashboard", params={**USER, "as_of_date": "2024-05-20"}).json()

    assert data["summary"]["income"] == "5000.00"
    assert [a["status"] for a in data["due_alerts"]] == ["due_soon"]
    assert data["budgets"] == []
    assert data["goals"] == []


def test_monthly_report_endpoint(client):
    client.post(
        "/transactions",
        params=USER,
        json={"type": "expense", "description": "Mercado", "category": "alimentacao",
              "amount": "250.50", "date": "2024-05-05"},
    )
    report = client.get("/reports/monthly", params={**USER, "year": 2024, "month": 5}).json()
    assert report["expenses"] == "250.50"
    assert report["by_category"][0]["percent"] == 100.0


def test_goal_overflow_is_a_client_error(client):
    goal = client.post("/goals", params=USER,
                       json={"name": "Ilha", "target_amount": "9999999999"}).json()
    first = client.post(f"/goals/{goal['id']}/contributions", params=USER, json={"amount": "9000000000"})
    assert first.status_code == 200

    second = client.post(f"/goals/{goal['id']}/contributions", params=USER, json={"amount": "9000000000"})
    assert second.status_code == 400
    assert "must not exceed" in second.json()["error"]


def test_budget_limit_overflow_is_a_client_error(client):
    response = client.post("/budgets", params=USER, json={"category": "Moradia", "limit": "10000000000"})
    assert response.status_code == 400
    assert "error" in response.json()


def test_custom_category_is_usable_for_transactions(client):
    created = client.post("/categories", params=USER, json={"name": "Pets & Cia", "type": "expense"})
    assert created.status_code == 200
    assert created.json()["id"] == "pets-cia-ana"

    duplicate = client.post("/categories", params=USER, json={"name": "Pets & Cia", "type": "expense"})
    assert duplicate.status_code == 400

    ids = [c["id"] for c in client.get("/categories", params=USER).json()["categories"]]
    assert "pets-cia-ana" in ids
    assert "pets-cia-ana" not in [
        c["id"] for c in client.get("/categories", params={"user_id": "bruno"}).json()["categories"]
    ]

    tx = client.post(
        "/transactions",
        params=USER,
        json={"type": "expense", "description": "Ração", "category": "pets-cia-ana",
              "amount": "80", "date": "2024-05-05"},
    )
    assert tx.status_code == 200
