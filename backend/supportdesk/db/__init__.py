"""Database Infrastructure — SQLAlchemy declarative Base.

Invariants:
    - Every ORM model inherits from db.base.Base
"""
