"""Student-facing endpoints for linking codes and parent link requests."""

from fastapi import APIRouter, Query

from backend.app.dependencies.services import LinkingWorkflowDep
from backend.app.schemas.linking import LinkDecision, LinkingCodeResponse, PendingLinkRequest, SuccessResponse

router = APIRouter(prefix="/api/student", tags=["student-linking"])


@router.get("/linking-code", response_model=LinkingCodeResponse)
def get_linking_code(workflow: LinkingWorkflowDep, student_id: str = Query(alias="studentId")):
    linking_code = workflow.request_code(student_id)
    return LinkingCodeResponse(code=linking_code.code, expires_at=linking_code.expires_at)


@router.get("/link-requests", response_model=list[PendingLinkRequest])
def list_link_requests(workflow: LinkingWorkflowDep, student_id: str = Query(alias="studentId")):
    return workflow.pending_requests(student_id)


@router.patch("/link-requests/{request_id}", response_model=SuccessResponse)
def decide_link_request(request_id: str, decision: LinkDecision, workflow: LinkingWorkflowDep):
    workflow.decide(request_id, decision.status)
    return SuccessResponse()
