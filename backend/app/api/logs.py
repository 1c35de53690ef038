from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.app.db.session import get_db
from backend.app.schemas.audit_log import AuditLogRead
from backend.app.services.audit import list_recent

router = APIRouter(prefix="/api/logs", tags=["logs"])


@router.get("", response_model=list[AuditLogRead])
def list_logs(db: Session = Depends(get_db)):
    return list_recent(db)
