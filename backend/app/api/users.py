"""User profile endpoints backing the linking display fields."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from backend.app.db.session import get_db
from backend.app.schemas.linking import SuccessResponse
from backend.app.schemas.user import EducationPathUpdate, UserCreate, UserRead
from backend.app.services import users

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(user_in: UserCreate, db: Session = Depends(get_db)):
    return users.create_user(db, user_in)


@router.get("", response_model=list[UserRead])
def list_users(db: Session = Depends(get_db)):
    return users.list_users(db)


@router.get("/{user_id}", response_model=UserRead)
def read_user(user_id: str, db: Session = Depends(get_db)):
    return users.get_user(db, user_id)


@router.patch("/{user_id}/education-path", response_model=SuccessResponse)
def update_education_path(user_id: str, payload: EducationPathUpdate, db: Session = Depends(get_db)):
    users.update_education_path(db, user_id, payload.education_path)
    return SuccessResponse()
