from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.sql import func

from shortify.database.connection import Base


class URL(Base):
    """
    Persisted mapping between an original URL and its alias.

    Both columns carry their own named unique constraint so the database
    enforces the two uniqueness rules at insert time.
    AUTOINCREMENT keeps SQLite from ever handing out an id twice.
    """
    __tablename__ = "urls"
    __table_args__ = (
        UniqueConstraint("original", name="urls_original_key"),
        UniqueConstraint("alias", name="urls_alias_key"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    original = Column(String, nullable=False)
    alias = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
