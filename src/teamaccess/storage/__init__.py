"""Persistence layer."""

from teamaccess.storage.db import Base, Database, db

__all__ = ["Base", "Database", "db"]
