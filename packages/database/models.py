# packages/database/models.py

import uuid
from datetime import datetime, timezone
from sqlalchemy import JSON, Column, DateTime, Index, String, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.dialects.postgresql import JSONB


# This is the base class which our model classes will inherit.
Base = declarative_base()

# JSONB on Postgres, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ScreenerCacheRow(Base):
    """
    The persisted screener universe: one row per ticker, holding the
    snake_case StockRecordView payload. Replaced wholesale on refresh.
    """

    __tablename__ = "screener_cache"

    ticker = Column(String, primary_key=True)
    data = Column(JSONType, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        # Optimizes: "How old is the newest row?" (cache status)
        Index("idx_screener_cache_updated_at", "updated_at"),
    )


class SavedScreen(Base):
    """A user-named FilterSpec kept for reuse. Owned by `user_id`."""

    __tablename__ = "saved_screens"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    filters_json = Column(JSONType, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        # Optimizes: "List my screens, newest first"
        Index("idx_saved_screens_user_created", "user_id", "created_at"),
    )
