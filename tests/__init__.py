"""
Test Suite for the Library Catalog

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data, auth headers)
- test_validation.py: Field rule table
- test_gateway.py: Persistence Gateway (includes, versions, units of work)
- test_catalog_service.py: Listings, search/sort, category assignment
- test_borrowing_service.py: Borrow and return
- test_authorization.py: Policy table and the gate middleware
- test_books.py, test_authors.py, test_publishers.py, test_categories.py,
  test_members.py, test_borrowings.py: Page handlers
- test_auth.py: Registration, login, current principal

Running Tests:
    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_books.py

    # Run with verbose output
    pytest -v
"""
