# inventory/models.py
import datetime as dt
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
)
from .database import Base, engine


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)


class ApprovalLog(Base):
    __tablename__ = "approval_logs"

    id = Column(Integer, primary_key=True, index=True)
    page = Column(String, nullable=False, index=True)
    action = Column(String, nullable=False)
    from_status = Column(String, nullable=False)
    to_status = Column(String, nullable=False)
    reason = Column(String, default="")
    actor = Column(String, default="unknown")
    timestamp = Column(DateTime, default=_utcnow)


# Create tables if they don't exist
Base.metadata.create_all(bind=engine)
