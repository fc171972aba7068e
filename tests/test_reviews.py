"""
Tests for Review Submission and Moderation

Tests cover:
- PATCH /books/review/{book_id} - Submit a review
- GET /books/{book_id}/reviews - A book's reviews
- GET /books/reviews - Pending moderation queue
- PATCH /reviews/approve - Approve a review
"""

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.orm import Session

from bookworm.models import Book, Review, User

from tests.conftest import get_auth_header


class TestSubmitReview:
    """Tests for PATCH /books/review/{book_id}."""

    def test_submit_review(
        self,
        client: TestClient,
        db_session: Session,
        sample_user: User,
        sample_book: Book,
        user_headers: dict,
    ):
        response = client.patch(
            f"/books/review/{sample_book.id}",
            json={"rating": 5, "comment": "Wonderful."},
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["book_id"] == sample_book.id
        review = data["review"]
        assert review["status"] == "pending"
        assert review["rating"] == 5
        assert review["email"] == sample_user.email
        assert review["name"] == sample_user.name
        assert review["date"]

        stored = db_session.execute(select(Review)).scalar_one()
        assert stored.status == "pending"
        assert stored.date == review["date"]

    def test_submit_review_email_comes_from_token(
        self,
        client: TestClient,
        sample_user: User,
        sample_book: Book,
        user_headers: dict,
    ):
        response = client.patch(
            f"/books/review/{sample_book.id}",
            json={"rating": 3, "email": "someone-else@example.com"},
            headers=user_headers,
        )

        assert response.json()["review"]["email"] == sample_user.email

    def test_submit_review_with_name_and_date(
        self,
        client: TestClient,
        sample_book: Book,
        user_headers: dict,
    ):
        response = client.patch(
            f"/books/review/{sample_book.id}",
            json={"rating": 4, "name": "Bookish", "date": "2024-05-05T10:00:00Z"},
            headers=user_headers,
        )

        review = response.json()["review"]
        assert review["name"] == "Bookish"
        assert review["date"] == "2024-05-05T10:00:00Z"

    def test_same_reader_may_review_twice(
        self,
        client: TestClient,
        db_session: Session,
        sample_book: Book,
        user_headers: dict,
    ):
        for rating in (2, 4):
            client.patch(
                f"/books/review/{sample_book.id}",
                json={"rating": rating},
                headers=user_headers,
            )

        reviews = db_session.execute(select(Review)).scalars().all()
        assert [r.rating for r in reviews] == [2, 4]

    def test_submit_review_unknown_book(self, client: TestClient, user_headers: dict):
        response = client.patch(
            "/books/review/99999",
            json={"rating": 4},
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_submit_review_rating_out_of_range(
        self,
        client: TestClient,
        sample_book: Book,
        user_headers: dict,
    ):
        response = client.patch(
            f"/books/review/{sample_book.id}",
            json={"rating": 6},
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_submit_review_requires_token(self, client: TestClient, sample_book: Book):
        response = client.patch(f"/books/review/{sample_book.id}", json={"rating": 4})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestBookReviews:
    """Tests for GET /books/{book_id}/reviews."""

    def test_list_book_reviews(
        self,
        client: TestClient,
        sample_book: Book,
        pending_review: Review,
        user_headers: dict,
    ):
        response = client.get(f"/books/{sample_book.id}/reviews", headers=user_headers)

        assert response.status_code == status.HTTP_200_OK
        assert [r["date"] for r in response.json()] == [pending_review.date]

    def test_filter_by_status(
        self,
        client: TestClient,
        sample_book: Book,
        pending_review: Review,
        user_headers: dict,
    ):
        response = client.get(
            f"/books/{sample_book.id}/reviews?status=approved",
            headers=user_headers,
        )

        assert response.json() == []

    def test_unknown_book(self, client: TestClient, user_headers: dict):
        response = client.get("/books/99999/reviews", headers=user_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestPendingReviews:
    """Tests for GET /books/reviews."""

    def test_lists_pending_with_book(
        self,
        client: TestClient,
        sample_book: Book,
        pending_review: Review,
        admin_headers: dict,
    ):
        response = client.get("/books/reviews", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert len(data) == 1
        assert data[0]["book_id"] == sample_book.id
        assert data[0]["book_title"] == "The Hobbit"
        assert data[0]["email"] == pending_review.email
        assert data[0]["status"] == "pending"

    def test_approved_reviews_leave_the_queue(
        self,
        client: TestClient,
        sample_book: Book,
        pending_review: Review,
        admin_headers: dict,
    ):
        client.patch(
            "/reviews/approve",
            json={
                "book_id": sample_book.id,
                "email": pending_review.email,
                "date": pending_review.date,
            },
            headers=admin_headers,
        )

        response = client.get("/books/reviews", headers=admin_headers)

        assert response.json() == []

    def test_reader_forbidden(self, client: TestClient, user_headers: dict):
        response = client.get("/books/reviews", headers=user_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestApproveReview:
    """Tests for PATCH /reviews/approve."""

    def test_approve_exact_triple(
        self,
        client: TestClient,
        db_session: Session,
        sample_book: Book,
        second_user: User,
        pending_review: Review,
        admin_headers: dict,
    ):
        other = Review(
            book_id=sample_book.id,
            rating=2,
            name=second_user.name,
            email=second_user.email,
            date=pending_review.date,
        )
        db_session.add(other)
        db_session.commit()

        response = client.patch(
            "/reviews/approve",
            json={
                "book_id": sample_book.id,
                "email": pending_review.email,
                "date": pending_review.date,
            },
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"matched_count": 1, "modified_count": 1}

        db_session.refresh(pending_review)
        db_session.refresh(other)
        assert pending_review.status == "approved"
        assert other.status == "pending"

    def test_approve_non_matching_date(
        self,
        client: TestClient,
        db_session: Session,
        sample_book: Book,
        pending_review: Review,
        admin_headers: dict,
    ):
        response = client.patch(
            "/reviews/approve",
            json={
                "book_id": sample_book.id,
                "email": pending_review.email,
                "date": "2024-03-01T12:00:01+00:00",
            },
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"matched_count": 0, "modified_count": 0}

        db_session.refresh(pending_review)
        assert pending_review.status == "pending"

    def test_approve_unknown_book(
        self,
        client: TestClient,
        pending_review: Review,
        admin_headers: dict,
    ):
        response = client.patch(
            "/reviews/approve",
            json={"book_id": 99999, "email": pending_review.email, "date": pending_review.date},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["modified_count"] == 0

    def test_approve_twice(
        self,
        client: TestClient,
        sample_book: Book,
        pending_review: Review,
        admin_headers: dict,
    ):
        body = {
            "book_id": sample_book.id,
            "email": pending_review.email,
            "date": pending_review.date,
        }

        client.patch("/reviews/approve", json=body, headers=admin_headers)
        response = client.patch("/reviews/approve", json=body, headers=admin_headers)

        assert response.json() == {"matched_count": 1, "modified_count": 0}

    def test_approve_one_of_two_same_triple_reviews(
        self,
        client: TestClient,
        db_session: Session,
        sample_book: Book,
        sample_user: User,
        user_headers: dict,
        admin_headers: dict,
    ):
        for comment in ("First take", "Second take"):
            client.patch(
                f"/books/review/{sample_book.id}",
                json={"rating": 4, "comment": comment, "date": "2024-05-05"},
                headers=user_headers,
            )
        body = {"book_id": sample_book.id, "email": sample_user.email, "date": "2024-05-05"}

        response = client.patch("/reviews/approve", json=body, headers=admin_headers)

        assert response.json() == {"matched_count": 1, "modified_count": 1}
        statuses = db_session.execute(
            select(Review.status).where(Review.book_id == sample_book.id).order_by(Review.id)
        ).scalars().all()
        assert statuses == ["approved", "pending"]

        response = client.patch("/reviews/approve", json=body, headers=admin_headers)

        assert response.json() == {"matched_count": 1, "modified_count": 1}
        statuses = db_session.execute(
            select(Review.status).where(Review.book_id == sample_book.id).order_by(Review.id)
        ).scalars().all()
        assert statuses == ["approved", "approved"]

    def test_approve_submitted_review_round_trip(
        self,
        client: TestClient,
        sample_user: User,
        sample_book: Book,
        admin_headers: dict,
    ):
        submitted = client.patch(
            f"/books/review/{sample_book.id}",
            json={"rating": 5},
            headers=get_auth_header(sample_user),
        ).json()["review"]

        response = client.patch(
            "/reviews/approve",
            json={
                "book_id": sample_book.id,
                "email": submitted["email"],
                "date": submitted["date"],
            },
            headers=admin_headers,
        )

        assert response.json()["modified_count"] == 1

        book = client.get(f"/books/{sample_book.id}", headers=admin_headers).json()
        assert book["reviews"][0]["status"] == "approved"

    def test_approve_missing_fields(self, client: TestClient, admin_headers: dict):
        response = client.patch(
            "/reviews/approve",
            json={"book_id": 1},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_reader_cannot_approve(
        self,
        client: TestClient,
        sample_book: Book,
        pending_review: Review,
        user_headers: dict,
    ):
        response = client.patch(
            "/reviews/approve",
            json={
                "book_id": sample_book.id,
                "email": pending_review.email,
                "date": pending_review.date,
            },
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
