from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient

from pocketbook.api.dashboard import get_now
from pocketbook.core.security import get_current_user
from pocketbook.database import get_session
from pocketbook.main import app
from pocketbook.models.category import CategoryType
from pocketbook.models.enums import TransactionType


@pytest.fixture
def client(session, owner):
    def override_session():
        yield session

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_current_user] = lambda: owner
    app.dependency_overrides[get_now] = lambda: datetime(2024, 3, 15, 9, 0)
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestTransactionsApi:
    def test_create_and_list(self, client, owner, make_category):
        food = make_category(owner)

        created = client.post(
            "/transactions",
            json={
                "category_id": food.id,
                "amount": "123.45",
                "description": "Supermercado",
                "transaction_date": "2024-03-02",
                "type": "expense",
            },
        )
        assert created.status_code == 201
        assert created.json()["amount"] == "123.45"

        listed = client.get("/transactions", params={"limit": 5})
        assert listed.status_code == 200
        assert listed.headers["X-Total-Count"] == "1"
        assert [t["description"] for t in listed.json()] == ["Supermercado"]

    def test_non_positive_amount_is_rejected(self, client, owner, make_category):
        food = make_category(owner)

        response = client.post(
            "/transactions",
            json={
                "category_id": food.id,
                "amount": "0",
                "description": "Nada",
                "transaction_date": "2024-03-02",
                "type": "expense",
            },
        )
        assert response.status_code == 422

    def test_pagination_query(self, client, owner, make_category, make_transaction):
        food = make_category(owner)
        for day in (10, 15, 20):
            make_transaction(owner, food, "1", date(2024, 1, day))

        response = client.get("/transactions", params={"limit": 2, "offset": 1})

        assert [t["transaction_date"] for t in response.json()] == ["2024-01-15", "2024-01-10"]
        assert response.headers["X-Total-Count"] == "3"

    def test_reversed_range_returns_400(self, client):
        response = client.get("/transactions", params={"start_date": "2024-02-01", "end_date": "2024-01-01"})
        assert response.status_code == 400

    def test_missing_transaction_returns_404(self, client):
        assert client.get("/transactions/999").status_code == 404

    def test_patch_and_delete(self, client, owner, make_category, make_transaction):
        tx = make_transaction(owner, make_category(owner), "10")

        patched = client.patch(f"/transactions/{tx.id}", json={"description": "Editada"})
        assert patched.status_code == 200
        assert patched.json()["description"] == "Editada"
        assert patched.json()["amount"] == "10.00"

        assert client.patch(f"/transactions/{tx.id}", json={"amount": None}).status_code == 400
        assert client.delete(f"/transactions/{tx.id}").status_code == 200
        assert client.get(f"/transactions/{tx.id}").status_code == 404


class TestReportingApi:
    def test_monthly_summary(self, client, owner, make_category, make_transaction):
        salary = make_category(owner, "Salario", CategoryType.income)
        make_transaction(owner, salary, "150000", date(2024, 1, 5), TransactionType.income)

        response = client.get("/summary/monthly", params={"month": 1, "year": 2024})

        assert response.status_code == 200
        assert response.json()["remaining_balance"] == "150000.00"
        assert response.json()["transaction_count"] == 1

    def test_monthly_summary_rejects_bad_month(self, client):
        assert client.get("/summary/monthly", params={"month": 13, "year": 2024}).status_code == 422

    def test_dashboard(self, client, owner, make_category, make_transaction):
        food = make_category(owner)
        make_transaction(owner, food, "20", date(2024, 3, 1))

        response = client.get("/dashboard", params={"zero_fill": True})

        body = response.json()
        assert response.status_code == 200
        assert body["current_month_summary"]["month"] == 3
        assert len(body["recent_transactions"]) == 1
        assert body["categories_summary"][0]["category"]["id"] == food.id
        assert len(body["monthly_trend"]) == 6

    def test_export_csv_download(self, client):
        response = client.get("/reports/export", params={"start_date": "2024-01-01", "end_date": "2024-01-31"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="transactions_2024-01-01_2024-01-31.csv"' in response.headers["content-disposition"]
        assert response.text == "ID,Amount,Description,Transaction Date,Type,Category Name,Category Type,Created At\n"

    def test_export_json_download(self, client):
        response = client.get(
            "/reports/export",
            params={"start_date": "2024-01-01", "end_date": "2024-01-31", "format": "json"},
        )

        assert response.headers["content-type"].startswith("application/json")
        assert response.text == "[]"


class TestAuthApi:
    def test_register_login_and_me(self, session):
        def override_session():
            yield session

        app.dependency_overrides[get_session] = override_session
        try:
            client = TestClient(app)
            registered = client.post(
                "/auth/register",
                json={"email": "carla@example.com", "password": "secreto1", "full_name": "Carla"},
            )
            assert registered.status_code == 200

            duplicate = client.post(
                "/auth/register",
                json={"email": "carla@example.com", "password": "secreto1", "full_name": "Carla"},
            )
            assert duplicate.status_code == 400

            login = client.post("/auth/login", data={"username": "carla@example.com", "password": "secreto1"})
            assert login.status_code == 200
            token = login.json()["access_token"]

            me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
            assert me.json() == {"user_id": registered.json()["id"]}

            bad = client.post("/auth/login", data={"username": "carla@example.com", "password": "otra"})
            assert bad.status_code == 401
        finally:
            app.dependency_overrides.clear()

    def test_requests_without_token_are_rejected(self):
        assert TestClient(app).get("/dashboard").status_code == 401
