"""
Registration, login and bearer-token resolution.
Run: pytest test_auth.py
"""

from datetime import timedelta

import pytest

from blog_api.core.security import create_access_token
from blog_api.crud import crud_user

from conftest import auth_headers

API = "/api/v1"

NOT_AUTHORIZED = "Not authorized to access this route"


class TestRegister:
    def test_register_returns_user_and_token(self, client):
        response = client.post(f"{API}/auth/register", json={
            "name": "John Doe",
            "email": "John@Example.com",
            "password": "password123",
        })
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["token"]
        user = body["data"]["user"]
        assert user["email"] == "john@example.com"
        assert user["role"] == "user"
        assert "password" not in user and "password_hash" not in user

    def test_registered_token_authenticates(self, client):
        response = client.post(f"{API}/auth/register", json={
            "name": "John Doe", "email": "john@example.com", "password": "password123",
        })
        token = response.json()["data"]["token"]

        me = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["data"]["user"]["email"] == "john@example.com"

    def test_duplicate_email_conflicts(self, client, db, user):
        response = client.post(f"{API}/auth/register", json={
            "name": "Someone Else", "email": "JOHN@example.com", "password": "password123",
        })
        assert response.status_code == 409
        assert response.json() == {"success": False, "message": "User already exists with this email"}
        assert crud_user.count(db) == 1

    def test_invalid_payload_lists_field_errors(self, client):
        response = client.post(f"{API}/auth/register", json={
            "name": "J", "email": "not-an-email", "password": "123",
        })
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert {error["field"] for error in body["errors"]} == {"name", "email", "password"}

    @pytest.mark.parametrize("email", ["bad@example..com", "john@", "john doe@example.com"])
    def test_malformed_email_is_rejected(self, client, db, email):
        response = client.post(f"{API}/auth/register", json={
            "name": "John Doe", "email": email, "password": "password123",
        })
        assert response.status_code == 400
        assert [error["field"] for error in response.json()["errors"]] == ["email"]
        assert crud_user.count(db) == 0


class TestLogin:
    def test_login_success(self, client, user):
        response = client.post(f"{API}/auth/login", json={
            "email": "john@example.com", "password": "password123",
        })
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["id"] == user.id
        assert data["token_type"] == "bearer"
        assert "password_hash" not in data["user"]

    def test_wrong_password_and_unknown_email_look_the_same(self, client, user):
        wrong_password = client.post(f"{API}/auth/login", json={
            "email": "john@example.com", "password": "nope-nope",
        })
        unknown_email = client.post(f"{API}/auth/login", json={
            "email": "ghost@example.com", "password": "password123",
        })
        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json() == {
            "success": False, "message": "Invalid credentials",
        }

    def test_inactive_user_cannot_login(self, client, db, user):
        crud_user.set_active(db, user=user, is_active=False)
        response = client.post(f"{API}/auth/login", json={
            "email": "john@example.com", "password": "password123",
        })
        assert response.status_code == 401


class TestTokenResolution:
    def test_missing_token(self, client):
        response = client.get(f"{API}/auth/me")
        assert response.status_code == 401
        assert response.json() == {"success": False, "message": NOT_AUTHORIZED}

    def test_garbage_token(self, client):
        response = client.get(f"{API}/auth/me", headers={"Authorization": "Bearer not.a.jwt"})
        assert response.status_code == 401
        assert response.json()["message"] == NOT_AUTHORIZED

    def test_expired_token(self, client, user):
        token = create_access_token({"sub": str(user.id)}, expires_delta=timedelta(seconds=-1))
        response = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["message"] == NOT_AUTHORIZED

    def test_token_for_deleted_user(self, client, db, user):
        headers = auth_headers(user)
        db.delete(user)
        db.commit()
        response = client.get(f"{API}/auth/me", headers=headers)
        assert response.status_code == 401
        assert response.json()["message"] == NOT_AUTHORIZED

    def test_deactivated_user_token_rejected(self, client, db, user):
        headers = auth_headers(user)
        assert client.get(f"{API}/auth/me", headers=headers).status_code == 200

        crud_user.set_active(db, user=user, is_active=False)
        response = client.get(f"{API}/auth/me", headers=headers)
        assert response.status_code == 401
        assert response.json()["message"] == NOT_AUTHORIZED

    def test_me_hides_password(self, client, user):
        response = client.get(f"{API}/auth/me", headers=auth_headers(user))
        assert response.status_code == 200
        assert "password" not in response.text
