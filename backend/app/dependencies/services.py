"""Request-scoped service dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from backend.app.db.session import get_db
from backend.app.services.linking_workflow import LinkingWorkflow


def get_linking_workflow(db: Session = Depends(get_db)) -> LinkingWorkflow:
    """Get a LinkingWorkflow bound to the request's DB session."""
    return LinkingWorkflow(db)


LinkingWorkflowDep = Annotated[LinkingWorkflow, Depends(get_linking_workflow)]
