"""Tests for /api/v1/auth and /api/v1/users endpoints."""

from conftest import bearer, register


class TestRegister:
    async def test_register_returns_profile_and_token(self, client, tokens):
        body = await register(client, "alice", "a@x.com", "pw123")

        assert body["username"] == "alice"
        assert body["email"] == "a@x.com"
        assert body["chats"] == []
        assert tokens.validate(body["token"]) == body["id"]
        assert "password" not in body
        assert "hashed_password" not in body

    async def test_duplicate_email_rejected(self, client):
        await register(client, "alice", "a@x.com", "pw123")

        response = await client.post(
            "/api/v1/auth/register",
            json={"username": "alice2", "email": "a@x.com", "password": "other"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "user already exists"

    async def test_username_too_long_rejected(self, client):
        response = await client.post(
            "/api/v1/auth/register",
            json={"username": "a" * 21, "email": "a@x.com", "password": "pw"},
        )

        assert response.status_code == 400

    async def test_email_too_long_rejected(self, client):
        response = await client.post(
            "/api/v1/auth/register",
            json={"username": "alice", "email": "a" * 45 + "@x.com", "password": "pw"},
        )

        assert response.status_code == 400

    async def test_overlong_password_rejected(self, client):
        response = await client.post(
            "/api/v1/auth/register",
            json={"username": "alice", "email": "a@x.com", "password": "a" * 73},
        )

        assert response.status_code == 400

    async def test_limits_are_inclusive(self, client):
        body = await register(client, "a" * 20, "a" * 44 + "@x.com", "pw")

        assert len(body["username"]) == 20
        assert len(body["email"]) == 50


class TestLogin:
    async def test_login_returns_same_user(self, client, tokens):
        registered = await register(client, "alice", "a@x.com", "pw123")

        response = await client.post(
            "/api/v1/auth/login", json={"email": "a@x.com", "password": "pw123"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == registered["id"]
        assert tokens.validate(body["token"]) == registered["id"]

    async def test_login_lists_chats(self, client):
        registered = await register(client, "alice", "a@x.com", "pw123")
        created = await client.post(
            "/api/v1/chats/create",
            json={"password": "secret"},
            headers=bearer(registered["token"]),
        )

        response = await client.post(
            "/api/v1/auth/login", json={"email": "a@x.com", "password": "pw123"}
        )

        assert [c["id"] for c in response.json()["chats"]] == [created.json()["id"]]

    async def test_unknown_email_and_bad_password_look_the_same(self, client):
        await register(client, "alice", "a@x.com", "pw123")

        unknown = await client.post(
            "/api/v1/auth/login", json={"email": "nobody@x.com", "password": "pw123"}
        )
        wrong = await client.post(
            "/api/v1/auth/login", json={"email": "a@x.com", "password": "nope"}
        )

        assert unknown.status_code == wrong.status_code == 400
        assert unknown.json() == wrong.json()

    async def test_overlong_password_rejected(self, client):
        await register(client, "alice", "a@x.com", "a" * 72)

        response = await client.post(
            "/api/v1/auth/login", json={"email": "a@x.com", "password": "a" * 72 + "x"}
        )

        assert response.status_code == 400


class TestAuthentication:
    async def test_missing_header_is_unauthorized(self, client):
        response = await client.get("/api/v1/users/me")

        assert response.status_code == 401

    async def test_non_bearer_scheme_is_unauthorized(self, client):
        response = await client.get(
            "/api/v1/users/me", headers={"Authorization": "Basic YWxpY2U6cHc="}
        )

        assert response.status_code == 401

    async def test_bad_token_is_unauthorized(self, client):
        response = await client.get("/api/v1/users/me", headers=bearer("garbage"))

        assert response.status_code == 401

    async def test_token_for_missing_user_is_unauthorized(self, client, tokens):
        response = await client.get("/api/v1/users/me", headers=bearer(tokens.issue(999)))

        assert response.status_code == 401

    async def test_me_returns_profile(self, client):
        registered = await register(client, "alice", "a@x.com", "pw123")

        response = await client.get("/api/v1/users/me", headers=bearer(registered["token"]))

        assert response.status_code == 200
        assert response.json() == {
            "id": registered["id"],
            "username": "alice",
            "email": "a@x.com",
            "chats": [],
        }


class TestHealth:
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.json() == {"status": "ok"}
