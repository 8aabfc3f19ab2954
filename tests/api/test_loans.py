"""
Tests for loan API endpoints.
"""

from decimal import Decimal

from banking_ledger.config import get_settings
from banking_ledger.services.directory import Directory


def create_account(client, username="alice"):
    user = client.post("/users", json={
        "username": username,
        "password": "pw",
        "email": f"{username}@test.com",
    }).json()
    return client.post("/accounts", json={
        "user_id": user["id"], "account_type": "BUSINESS",
    }).json()


def apply(client, account_id, principal="100000", rate="10", tenure=12):
    return client.post("/loans", json={
        "account_id": account_id,
        "principal": principal,
        "annual_interest_rate": rate,
        "tenure_months": tenure,
    })


class TestApplyForLoan:

    def test_apply_returns_201_with_emi(self, client):
        account = create_account(client)

        response = apply(client, account["id"])
        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "ACTIVE"
        assert abs(Decimal(data["monthly_installment"]) - Decimal("8791.59")) <= Decimal("0.01")
        assert Decimal(data["remaining_balance"]) == Decimal("100000")

    def test_bad_terms_return_400(self, client):
        account = create_account(client)
        assert apply(client, account["id"], tenure=0).status_code == 400
        assert apply(client, account["id"], rate="-1").status_code == 400

    def test_missing_account_returns_404(self, client):
        assert apply(client, 999).status_code == 404

    def test_account_loans(self, client):
        account = create_account(client)
        apply(client, account["id"], principal="1000")
        apply(client, account["id"], principal="2000")

        response = client.get(f"/accounts/{account['id']}/loans")
        assert response.status_code == 200
        assert [Decimal(loan["principal"]) for loan in response.json()] == [
            Decimal("1000"), Decimal("2000"),
        ]


class TestPayInstallment:

    def test_pay_until_closed(self, client):
        account = create_account(client)
        loan = apply(client, account["id"], principal="300", rate="0", tenure=3).json()

        for month in (1, 2, 3):
            response = client.post(f"/loans/{loan['id']}/pay")
            assert response.status_code == 200
            assert response.json()["paid_months"] == month

        assert response.json()["closed"] is True
        status = client.get(f"/loans/{loan['id']}").json()
        assert status["status"] == "CLOSED"
        assert Decimal(status["remaining_balance"]) == Decimal("0")

    def test_pay_closed_loan_returns_400(self, client):
        account = create_account(client)
        loan = apply(client, account["id"], tenure=1).json()
        client.post(f"/loans/{loan['id']}/pay")

        response = client.post(f"/loans/{loan['id']}/pay")
        assert response.status_code == 400

    def test_missing_loan_returns_404(self, client):
        assert client.get("/loans/999").status_code == 404
        assert client.post("/loans/999/pay").status_code == 404

    def test_installment_reports_currency(self, client):
        account = create_account(client)
        loan = apply(client, account["id"], principal="300", rate="0", tenure=3).json()

        data = client.post(f"/loans/{loan['id']}/pay").json()
        assert data["currency"] == get_settings().CURRENCY
        assert data["rejected"] is False

    def test_overrun_loan_is_closed_without_payment(self, client, db_session):
        account = create_account(client)
        loan = apply(client, account["id"], tenure=2).json()
        stored = Directory(db_session).get_loan(loan["id"])
        stored.paid_months = 2
        db_session.commit()

        response = client.post(f"/loans/{loan['id']}/pay")
        assert response.status_code == 200
        data = response.json()
        assert data["rejected"] is True
        assert data["closed"] is True
        assert Decimal(data["amount_paid"]) == Decimal("0")

        status = client.get(f"/loans/{loan['id']}").json()
        assert status["status"] == "CLOSED"
        assert Decimal(status["remaining_balance"]) == Decimal("0")
