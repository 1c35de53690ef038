"""Best-effort audit trail of user and system actions."""

import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.core.ids import new_id
from backend.app.core.time import utc_now
from backend.app.models.audit_log import AuditLog

logger = logging.getLogger(__name__)

SYSTEM_ACTOR_ID = "SYSTEM"
SYSTEM_ACTOR_NAME = "System"
RECENT_LOG_LIMIT = 100


def record_event(
    db: Session,
    action: str,
    description: str,
    actor_id: str = SYSTEM_ACTOR_ID,
    actor_name: str = SYSTEM_ACTOR_NAME,
    *,
    ip: str | None = None,
    timestamp: datetime | None = None,
) -> AuditLog | None:
    """Persist an audit entry. Storage failures are logged, not raised."""
    entry = AuditLog(
        id=new_id(),
        user_id=actor_id,
        username=actor_name,
        action=action,
        description=description,
        timestamp=timestamp or utc_now(),
        ip=ip,
    )
    try:
        db.add(entry)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.warning("Failed to record audit event %r", action, exc_info=True)
        return None
    return entry


def list_recent(db: Session, limit: int = RECENT_LOG_LIMIT) -> list[AuditLog]:
    return db.query(AuditLog).order_by(AuditLog.timestamp.desc()).limit(limit).all()
