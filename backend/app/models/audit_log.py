"""Audit log model to track user and system actions."""

from sqlalchemy import Column, DateTime, String, Text

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(String(32), primary_key=True, index=True)
    user_id = Column(String(32), nullable=False, index=True)
    username = Column(String(150), nullable=False)
    action = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)
    ip = Column(String(64), nullable=True)
