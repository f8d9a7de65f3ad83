"""Task model"""

from sqlalchemy import Column, Integer, String, Text, Date, DateTime
from datetime import datetime, timezone
from checkmate.core.database import Base
from checkmate.services.status import DEFAULT_STATUS


def utcnow() -> datetime:
    # UTC naïf, comme les colonnes DateTime sans timezone
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Task(Base):
    __tablename__ = "tasks"
    # SQLite: AUTOINCREMENT pour ne jamais réutiliser un id supprimé
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String, nullable=False, default=DEFAULT_STATUS, index=True)
    due_date = Column(Date, nullable=True)

    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
