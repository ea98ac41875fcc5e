from datetime import timedelta

from orquestra import models
from orquestra.auth import create_access_token


SIGNUP = {
    "name": "Dev Silva",
    "email": "dev.silva@example.com",
    "password": "secret123",
    "confirm_password": "secret123",
}


class TestAuthEndpoints:

    def test_signup_creates_user_and_returns_token(self, client, db_session):
        response = client.post("/api/auth/signup", json={**SIGNUP, "role": "project_manager"})

        assert response.status_code == 201
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert data["user"]["email"] == SIGNUP["email"]
        assert data["user"]["role"] == "project_manager"

        user = db_session.query(models.User).filter_by(email=SIGNUP["email"]).one()
        assert user.password_hash != SIGNUP["password"]

    def test_signup_duplicate_email(self, client):
        client.post("/api/auth/signup", json=SIGNUP)
        response = client.post("/api/auth/signup", json=SIGNUP)

        assert response.status_code == 400
        assert response.json()["fields"] == {"email": "Email already registered"}

    def test_signup_as_admin_is_rejected(self, client):
        response = client.post("/api/auth/signup", json={**SIGNUP, "role": "admin"})
        assert response.status_code == 400
        assert "role" in response.json()["fields"]

    def test_login_and_me(self, client):
        client.post("/api/auth/signup", json=SIGNUP)

        response = client.post(
            "/api/auth/login", json={"email": SIGNUP["email"], "password": SIGNUP["password"]}
        )
        assert response.status_code == 200
        token = response.json()["access_token"]

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["email"] == SIGNUP["email"]
        assert response.json()["role"] == "developer"

    def test_login_wrong_password(self, client):
        client.post("/api/auth/signup", json=SIGNUP)
        response = client.post("/api/auth/login", json={"email": SIGNUP["email"], "password": "wrong-pass"})

        assert response.status_code == 401
        assert response.json() == {"error": "Not authenticated", "details": "Incorrect email or password"}
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_signup_token_works_for_project_creation(self, client):
        token = client.post("/api/auth/signup", json=SIGNUP).json()["access_token"]
        response = client.post(
            "/api/projects",
            json={"name": "From signup"},
            headers={"Authorization": f"Bearer {token}"},
        )
        assert response.status_code == 201

    def test_me_requires_token(self, client):
        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json()["details"] == "Missing bearer token"

    def test_token_for_deleted_user_is_rejected(self, client, db_session, headers_for, make_user):
        user = make_user("Gone User", "gone@example.com")
        headers = headers_for(user)
        db_session.delete(user)
        db_session.commit()

        response = client.get("/api/auth/me", headers=headers)
        assert response.status_code == 401

    def test_expired_token_is_rejected(self, client, developer):
        token = create_access_token(developer.id, developer.role, expires_delta=timedelta(minutes=-5))
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["details"] == "Token has expired"
