"""
Tests for Genres API Endpoints

Tests for /genres endpoints.
"""

from fastapi import status

from bookworm.config import get_settings


class TestListGenres:
    """Tests for GET /genres endpoint."""

    def test_list_genres_empty(self, client, user_headers):
        response = client.get("/genres", headers=user_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == []

    def test_list_genres_alphabetical(self, client, user_headers, second_genre, sample_genre):
        response = client.get("/genres", headers=user_headers)

        assert response.status_code == status.HTTP_200_OK
        assert [g["name"] for g in response.json()] == ["Fantasy", "Science Fiction"]

    def test_list_genres_admin_only_flag(self, client, user_headers, admin_headers, monkeypatch):
        monkeypatch.setattr(get_settings(), "genre_list_admin_only", True)

        assert client.get("/genres", headers=user_headers).status_code == 403
        assert client.get("/genres", headers=admin_headers).status_code == 200

    def test_list_genres_requires_token(self, client):
        response = client.get("/genres")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestGetGenre:
    """Tests for GET /genres/{genre_id} endpoint."""

    def test_get_genre_success(self, client, user_headers, sample_genre):
        response = client.get(f"/genres/{sample_genre.id}", headers=user_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["id"] == sample_genre.id
        assert data["name"] == "Fantasy"

    def test_get_genre_not_found(self, client, user_headers):
        response = client.get("/genres/99999", headers=user_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "not found" in response.json()["message"]


class TestCreateGenre:
    """Tests for POST /genres endpoint."""

    def test_create_genre_minimal(self, client, admin_headers):
        response = client.post("/genres", json={"name": "Mystery"}, headers=admin_headers)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["name"] == "Mystery"
        assert data["description"] is None

    def test_create_genre_full(self, client, admin_headers):
        genre_data = {
            "name": "Horror",
            "description": "Fiction intended to frighten.",
        }

        response = client.post("/genres", json=genre_data, headers=admin_headers)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["description"] == "Fiction intended to frighten."

    def test_create_genre_duplicate_name(self, client, admin_headers, sample_genre):
        response = client.post("/genres", json={"name": "Fantasy"}, headers=admin_headers)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "already exists" in response.json()["message"]

    def test_create_genre_empty_name(self, client, admin_headers):
        response = client.post("/genres", json={"name": "   "}, headers=admin_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_genre_padded_name_is_same_genre(self, client, admin_headers, sample_genre):
        response = client.post("/genres", json={"name": "  Fantasy "}, headers=admin_headers)

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_create_genre_as_reader_forbidden(self, client, user_headers):
        response = client.post("/genres", json={"name": "Mystery"}, headers=user_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestUpdateGenre:
    """Tests for PATCH /genres/{genre_id} endpoint."""

    def test_update_genre_description(self, client, admin_headers, sample_genre):
        response = client.patch(
            f"/genres/{sample_genre.id}",
            json={"description": "Dragons and wizards."},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["name"] == "Fantasy"
        assert data["description"] == "Dragons and wizards."

    def test_update_genre_rename_to_existing(
        self, client, admin_headers, sample_genre, second_genre
    ):
        response = client.patch(
            f"/genres/{sample_genre.id}",
            json={"name": "Science Fiction"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_rename_genre_shows_on_tagged_books(
        self, client, admin_headers, sample_book, sample_genre
    ):
        response = client.patch(
            f"/genres/{sample_genre.id}",
            json={"name": " High Fantasy "},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["name"] == "High Fantasy"

        book = client.get(f"/books/{sample_book.id}", headers=admin_headers).json()
        assert book["genres"] == ["High Fantasy"]

    def test_update_genre_blank_name(self, client, admin_headers, sample_genre):
        response = client.patch(
            f"/genres/{sample_genre.id}",
            json={"name": "  "},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_genre_not_found(self, client, admin_headers):
        response = client.patch(
            "/genres/99999",
            json={"description": "Nothing"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestDeleteGenre:
    """Tests for DELETE /genres/{genre_id} endpoint."""

    def test_delete_genre_keeps_books(self, client, admin_headers, sample_book, sample_genre):
        response = client.delete(f"/genres/{sample_genre.id}", headers=admin_headers)

        assert response.status_code == status.HTTP_204_NO_CONTENT

        book = client.get(f"/books/{sample_book.id}", headers=admin_headers).json()
        assert book["genres"] == []

    def test_delete_genre_not_found(self, client, admin_headers):
        response = client.delete("/genres/99999", headers=admin_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
