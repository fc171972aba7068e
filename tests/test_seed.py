"""
Tests for the Seed Script

Tests cover:
- Admin bootstrap (create, promote, generated password)
- Command-line defaults
"""

from sqlalchemy.orm import Session

from bookworm.models.user import User
from bookworm.services.security import verify_password
from scripts import seed_data

from tests.conftest import TEST_PASSWORD


class TestEnsureAdmin:
    """Tests for seed_data.ensure_admin."""

    def test_new_admin_without_password_gets_a_random_one(self, db_session: Session):
        admin, generated = seed_data.ensure_admin(db_session, "boss@example.com")

        assert admin.role == "admin"
        assert generated
        assert verify_password(generated, admin.hashed_password)

    def test_generated_passwords_differ(self, db_session: Session):
        _, first = seed_data.ensure_admin(db_session, "boss@example.com")
        _, second = seed_data.ensure_admin(db_session, "deputy@example.com")

        assert first != second

    def test_given_password_is_used(self, db_session: Session):
        admin, generated = seed_data.ensure_admin(
            db_session, "boss@example.com", "Chosen-Pass-1"
        )

        assert generated is None
        assert verify_password("Chosen-Pass-1", admin.hashed_password)

    def test_existing_account_is_promoted(self, db_session: Session, sample_user: User):
        admin, generated = seed_data.ensure_admin(db_session, "READER@example.com")

        assert admin.id == sample_user.id
        assert admin.role == "admin"
        assert generated is None
        assert verify_password(TEST_PASSWORD, admin.hashed_password)


class TestParseArgs:
    def test_password_not_defaulted(self):
        args = seed_data.parse_args([])

        assert args.admin_password is None
        assert args.admin_email == seed_data.DEFAULT_ADMIN_EMAIL
        assert args.keep_existing is False
