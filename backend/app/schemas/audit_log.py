from datetime import datetime
from typing import Optional

from backend.app.schemas.base import CamelModel


class AuditLogRead(CamelModel):
    id: str
    user_id: str
    username: str
    action: str
    description: Optional[str] = None
    timestamp: datetime
    ip: Optional[str] = None
