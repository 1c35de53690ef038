"""Parent-facing endpoints for redeeming codes and listing linked students."""

from fastapi import APIRouter, Query

from backend.app.dependencies.services import LinkingWorkflowDep
from backend.app.schemas.linking import LinkedStudent, LinkRequestCreate, LinkRequestCreated

router = APIRouter(prefix="/api/parent", tags=["parent-linking"])


@router.post("/link-request", response_model=LinkRequestCreated)
def submit_link_request(payload: LinkRequestCreate, workflow: LinkingWorkflowDep):
    link = workflow.redeem_code(payload.parent_id, payload.code)
    return LinkRequestCreated(message="Link request sent successfully", request_id=link.id)


@router.get("/students", response_model=list[LinkedStudent])
def list_linked_students(workflow: LinkingWorkflowDep, parent_id: str = Query(alias="parentId")):
    return workflow.linked_students(parent_id)
