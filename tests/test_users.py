"""
Tests for Admin User Management

Tests cover:
- GET /users
- PATCH /user/role/{user_id}
"""

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from bookworm.models.user import User

from tests.conftest import get_auth_header


class TestListUsers:
    """Tests for GET /users."""

    def test_list_users_as_admin(
        self,
        client: TestClient,
        sample_user: User,
        admin_user: User,
        admin_headers: dict,
    ):
        response = client.get("/users", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [u["email"] for u in data] == [sample_user.email, admin_user.email]
        assert all("hashed_password" not in u for u in data)

    def test_list_users_as_reader_forbidden(self, client: TestClient, user_headers: dict):
        response = client.get("/users", headers=user_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json() == {"message": "Forbidden"}

    def test_list_users_without_token(self, client: TestClient):
        response = client.get("/users")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestChangeRole:
    """Tests for PATCH /user/role/{user_id}."""

    def test_promote_user(
        self,
        client: TestClient,
        db_session: Session,
        sample_user: User,
        admin_headers: dict,
    ):
        response = client.patch(
            f"/user/role/{sample_user.id}",
            json={"role": "admin"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["role"] == "admin"

        db_session.refresh(sample_user)
        assert sample_user.role == "admin"

    def test_promoted_user_needs_new_token(
        self,
        client: TestClient,
        sample_user: User,
        admin_headers: dict,
    ):
        old_headers = get_auth_header(sample_user)

        client.patch(
            f"/user/role/{sample_user.id}",
            json={"role": "admin"},
            headers=admin_headers,
        )

        # The old token still carries the old role
        assert client.get("/users", headers=old_headers).status_code == 403
        assert client.get("/users", headers=get_auth_header(sample_user)).status_code == 200

    def test_demote_admin(
        self,
        client: TestClient,
        db_session: Session,
        admin_user: User,
        admin_headers: dict,
    ):
        response = client.patch(
            f"/user/role/{admin_user.id}",
            json={"role": "user"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["role"] == "user"

    def test_invalid_role_rejected(
        self,
        client: TestClient,
        db_session: Session,
        sample_user: User,
        admin_headers: dict,
    ):
        response = client.patch(
            f"/user/role/{sample_user.id}",
            json={"role": "superuser"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        db_session.refresh(sample_user)
        assert sample_user.role == "user"

    def test_unknown_user(self, client: TestClient, admin_headers: dict):
        response = client.patch(
            "/user/role/99999",
            json={"role": "admin"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_reader_cannot_change_roles(
        self,
        client: TestClient,
        sample_user: User,
        user_headers: dict,
    ):
        response = client.patch(
            f"/user/role/{sample_user.id}",
            json={"role": "admin"},
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
