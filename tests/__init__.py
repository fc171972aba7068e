"""
Test Suite for the BookWorm API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_auth.py: /user signup, login and me
- test_users.py: Admin user management
- test_access.py: Authentication and authorization gates
- test_genres.py: /genres endpoints
- test_books.py: /books endpoints
- test_reviews.py: Review submission and moderation
- test_shelves.py: Shelf endpoints and service
- test_stats.py: Statistics endpoints and service
- test_security.py: Password hashing and session tokens
- test_app.py: Root, health and error rendering

Running Tests:
    # Run all tests
    pytest

    # Run with coverage
    pytest --cov=bookworm --cov-report=html

    # Run specific file
    pytest tests/test_books.py

    # Run with verbose output
    pytest -v
"""
