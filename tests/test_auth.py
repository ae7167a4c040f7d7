"""
Unit tests for authentication endpoints.

Tests:
- Token issuance
- Registration
- Body validation
"""

from jobly.core.security import decode_token


class TestToken:
    """Test POST /auth/token"""

    def test_token_success(self, client, seeded):
        response = client.post(
            "/auth/token",
            json={"username": "u1", "password": "password-u1"}
        )

        assert response.status_code == 200
        payload = decode_token(response.json()["token"])
        assert payload["sub"] == "u1"
        assert payload["is_admin"] is False

    def test_admin_token_carries_flag(self, client, seeded):
        response = client.post(
            "/auth/token",
            json={"username": "admin", "password": "password-admin"}
        )

        assert decode_token(response.json()["token"])["is_admin"] is True

    def test_wrong_password(self, client, seeded):
        response = client.post(
            "/auth/token",
            json={"username": "u1", "password": "wrong"}
        )

        assert response.status_code == 401

    def test_nonexistent_user(self, client, seeded):
        """Unknown usernames get exactly the same answer as bad passwords"""
        unknown = client.post("/auth/token", json={"username": "nope", "password": "password"})
        wrong = client.post("/auth/token", json={"username": "u1", "password": "password"})

        assert unknown.status_code == 401
        assert unknown.json() == wrong.json()

    def test_missing_data(self, client, seeded):
        response = client.post("/auth/token", json={"username": "u1"})

        assert response.status_code == 400

    def test_invalid_data(self, client, seeded):
        response = client.post("/auth/token", json={"username": 42, "password": "above-is-a-number"})

        assert response.status_code == 400


class TestRegister:
    """Test POST /auth/register"""

    def test_register_success(self, client, db_session):
        response = client.post(
            "/auth/register",
            json={
                "username": "new",
                "firstName": "first",
                "lastName": "last",
                "password": "password",
                "email": "new@email.com"
            }
        )

        assert response.status_code == 201
        payload = decode_token(response.json()["token"])
        assert payload["sub"] == "new"
        assert payload["is_admin"] is False

        login = client.post("/auth/token", json={"username": "new", "password": "password"})
        assert login.status_code == 200

    def test_register_cannot_make_admin(self, client, db_session):
        response = client.post(
            "/auth/register",
            json={
                "username": "new",
                "firstName": "first",
                "lastName": "last",
                "password": "password",
                "email": "new@email.com",
                "isAdmin": True
            }
        )

        assert response.status_code == 400

    def test_register_duplicate(self, client, seeded):
        response = client.post(
            "/auth/register",
            json={
                "username": "u1",
                "firstName": "first",
                "lastName": "last",
                "password": "password",
                "email": "dup@email.com"
            }
        )

        assert response.status_code == 400
        assert "duplicate" in response.json()["error"]["message"].lower()

    def test_register_invalid_email(self, client, db_session):
        response = client.post(
            "/auth/register",
            json={
                "username": "new",
                "firstName": "first",
                "lastName": "last",
                "password": "password",
                "email": "not-an-email"
            }
        )

        assert response.status_code == 400

    def test_register_short_password(self, client, db_session):
        response = client.post(
            "/auth/register",
            json={
                "username": "new",
                "firstName": "first",
                "lastName": "last",
                "password": "pw",
                "email": "new@email.com"
            }
        )

        assert response.status_code == 400
