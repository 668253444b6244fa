"""
Library Catalog Application Package

A library-catalog web application: staff manage books, authors, publishers
and categories; members borrow books; administrative pages are gated by role.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, session factory and declarative Base
- errors.py: Exceptions raised by the gateway, services and gate
- validation.py: Field rule table and the validate_fields() function
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- routers/: Page handlers, one router per page folder
- services/: Gateway, catalog queries, borrowing, authorization, security
"""

__version__ = "0.1.0"
