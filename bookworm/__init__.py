"""
BookWorm API Application Package

REST backend for the BookWorm book-tracking application.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy database connection and session management
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection (sessions, pagination, access gates)
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Business logic (credentials, shelves, moderation, statistics)
"""

__version__ = "0.1.0"
