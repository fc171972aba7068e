"""
Services Package

This package contains business logic services that are:
- Separate from HTTP handling (routers)
- Reusable across different parts of the application
- Easier to test in isolation

Current services:
- moderation.py: Review submission, pending queue and approval
- rate_limiter.py: Rate limiting with slowapi
- security.py: Password hashing and session tokens
- shelves.py: Reading shelf membership and counts
- stats.py: Genre distribution and registration trend
"""
