"""
API endpoint tests
"""
import pytest

from app.modules.loans.models import Loan

LOANS_URL = "/api/v1/loans"


class TestHealthEndpoints:
    """Tests for health check endpoints"""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_health_check(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "version" in data

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_root_endpoint(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert "message" in response.json()


class TestLoanEndpoints:
    """Tests for loan endpoints"""

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_create_loan(self, client, db_session, users, create_payload):
        response = await client.post(LOANS_URL, json=create_payload)

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Loan created successfully"

        loan = await db_session.get(Loan, data["loan_id"], populate_existing=True)
        assert loan.lender_id == 1
        assert loan.borrower_id == 4

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_create_loan_missing_field(self, client, users, create_payload):
        del create_payload["start_date"]

        response = await client.post(LOANS_URL, json=create_payload)

        assert response.status_code == 400
        assert response.json() == {"message": "Field 'start_date' is required"}

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_create_loan_wrong_lender_role(self, client, users, create_payload):
        create_payload["lender_id"] = 4

        response = await client.post(LOANS_URL, json=create_payload)

        assert response.status_code == 404
        assert response.json() == {"message": "Invalid lender ID"}

    @pytest.mark.integration
    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", ['{"lender_id": 1,', "[1, 2]", ""])
    async def test_create_loan_bad_json(self, client, users, body):
        response = await client.post(
            LOANS_URL, content=body, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid JSON format"}

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_list_loans(self, client, existing_loan):
        response = await client.get(LOANS_URL)

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Loans retrieved successfully"
        assert len(data["loans"]) == 1
        assert data["loans"][0]["lender_id"] == 2
        assert data["loans"][0]["loan_amount"] == 25000.0

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_list_loans_empty(self, client, users):
        response = await client.get(LOANS_URL)

        assert response.status_code == 404
        assert response.json() == {"message": "No loans found"}

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_get_loan(self, client, existing_loan):
        response = await client.get(f"{LOANS_URL}/1")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == 1
        assert data["borrower_id"] == 4
        assert data["start_date"] == "2024-08-17"
        assert data["status"] == "active"

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_get_loan_bad_id(self, client, existing_loan):
        response = await client.get(f"{LOANS_URL}/abc")

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid or missing loan ID"}

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_get_loan_not_found(self, client, existing_loan):
        response = await client.get(f"{LOANS_URL}/77")

        assert response.status_code == 404
        assert response.json() == {"message": "Loan not found"}

    @pytest.mark.integration
    @pytest.mark.asyncio
    @pytest.mark.parametrize("loan_id", ["2147483648", "99999999999999999999"])
    async def test_get_loan_id_beyond_column_range(self, client, existing_loan, loan_id):
        response = await client.get(f"{LOANS_URL}/{loan_id}")

        assert response.status_code == 404
        assert response.json() == {"message": "Loan not found"}

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_update_loan(self, client, existing_loan, update_payload):
        response = await client.put(f"{LOANS_URL}/1", json=update_payload)

        assert response.status_code == 200
        assert response.json() == {"message": "Loan updated successfully"}

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_update_loan_wrong_lender(self, client, existing_loan, update_payload):
        update_payload["lender_id"] = 3

        response = await client.put(f"{LOANS_URL}/1", json=update_payload)

        assert response.status_code == 404
        assert response.json() == {"message": "Invalid lender ID"}

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_update_loan_caller_header_mismatch(self, client, existing_loan, update_payload):
        response = await client.put(
            f"{LOANS_URL}/1", json=update_payload, headers={"X-Caller-Id": "3"}
        )

        assert response.status_code == 404

    @pytest.mark.integration
    @pytest.mark.asyncio
    @pytest.mark.parametrize("caller", ["two", "-3", "\u00b2".encode("latin-1")])
    async def test_update_loan_bad_caller_header(self, client, existing_loan, update_payload, caller):
        response = await client.put(
            f"{LOANS_URL}/1", json=update_payload, headers={"X-Caller-Id": caller}
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid caller ID"}

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_delete_loan(self, client, db_session, existing_loan):
        response = await client.request("DELETE", f"{LOANS_URL}/1", json={"lender_id": 2})

        assert response.status_code == 200
        assert response.json() == {"message": "Loan deleted successfully"}

        response = await client.get(f"{LOANS_URL}/1")
        assert response.status_code == 404

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_delete_loan_wrong_lender(self, client, existing_loan):
        response = await client.request("DELETE", f"{LOANS_URL}/1", json={"lender_id": 1})

        assert response.status_code == 404
        assert response.json() == {"message": "Invalid lender ID"}

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_delete_loan_missing_lender(self, client, existing_loan):
        response = await client.request("DELETE", f"{LOANS_URL}/1", json={})

        assert response.status_code == 400
        assert response.json() == {"message": "Field 'lender_id' is required"}

    @pytest.mark.integration
    @pytest.mark.asyncio
    @pytest.mark.parametrize("loan_id", ["77", "99999999999999999999"])
    async def test_delete_missing_loan(self, client, existing_loan, loan_id):
        response = await client.request("DELETE", f"{LOANS_URL}/{loan_id}", json={"lender_id": 2})

        assert response.status_code == 404
        assert response.json() == {"message": "Invalid or missing loan ID"}

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_create_loan_lender_beyond_column_range(self, client, users, create_payload):
        create_payload["lender_id"] = 99999999999999999999

        response = await client.post(LOANS_URL, json=create_payload)

        assert response.status_code == 404
        assert response.json() == {"message": "Invalid lender ID"}


class TestLoginEndpoint:
    """Tests for the login endpoint"""

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_login(self, client, users):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "john@x.com", "password": "123456", "role": "lender"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": "Login successful",
            "user": {"email": "john@x.com", "role": "lender", "name": "John Doe"},
        }

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client, users):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "john@x.com", "password": "wrong", "role": "lender"},
        )

        assert response.status_code == 401
        assert response.json() == {"message": "User not found or role mismatch"}

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_login_bad_role(self, client, users):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "john@x.com", "password": "123456", "role": "admin"},
        )

        assert response.status_code == 400
        assert response.json() == {"message": 'Role must be either "lender" or "borrower"'}
