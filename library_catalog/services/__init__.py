"""
Services Package

Business logic kept apart from HTTP handling (routers), so it can be
reused and tested in isolation.

Current services:
- gateway.py: Persistence Gateway over the request's SQLAlchemy session
- catalog.py: Book listings, category/publisher/author views, category assignment
- borrowing.py: Borrowing and returning books
- records.py: Validated create/update for the simple page folders
- authorization.py: Path-prefix policy table and the gate middleware
- security.py: Password hashing and JWT utilities
"""
