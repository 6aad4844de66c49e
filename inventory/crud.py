# inventory/crud.py
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import ApprovalLog
from .workflow import RETURN, Transition

logger = logging.getLogger(__name__)


# ---------- Approval trail ----------

def log_transition(session: Session, transition: Transition, actor: str = "unknown") -> ApprovalLog:
    entry = ApprovalLog(
        page=transition.page,
        action=transition.action,
        from_status=transition.from_status.value,
        to_status=transition.to_status.value,
        reason=transition.reason or "",
        actor=(actor or "").strip() or "unknown",
        timestamp=transition.timestamp.replace(tzinfo=None),
    )
    session.add(entry)
    session.commit()
    logger.debug("Logged %s on %s by %s", entry.action, entry.page, entry.actor)
    return entry


def list_logs(session: Session, page: Optional[str] = None, limit: int = 500) -> List[ApprovalLog]:
    query = select(ApprovalLog)
    if page:
        query = query.where(ApprovalLog.page == page)
    return session.execute(
        query.order_by(ApprovalLog.timestamp.desc(), ApprovalLog.id.desc()).limit(limit)
    ).scalars().all()


def list_pages(session: Session) -> List[str]:
    return session.execute(
        select(ApprovalLog.page).distinct().order_by(ApprovalLog.page.asc())
    ).scalars().all()


def latest_return_reason(session: Session, page: str) -> Optional[str]:
    return session.execute(
        select(ApprovalLog.reason)
        .where(ApprovalLog.page == page, ApprovalLog.action == RETURN)
        .order_by(ApprovalLog.timestamp.desc(), ApprovalLog.id.desc())
        .limit(1)
    ).scalars().first()
