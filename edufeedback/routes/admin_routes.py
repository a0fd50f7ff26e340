import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from edufeedback.auth.dependencies import get_current_identity
from edufeedback.auth.guard import Identity, require_admin
from edufeedback.routes.feedback_routes import FeedbackResponse
from edufeedback.stores.credential_store import CredentialStore
from edufeedback.stores.dependencies import get_credential_store, get_feedback_store
from edufeedback.stores.feedback_store import FeedbackStore

router = APIRouter(tags=['admin'])

logger = logging.getLogger(__name__)


class AdminFeedbackResponse(FeedbackResponse):
    student_name: str


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: str

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    message: str


@router.get('/feedback', response_model=list[AdminFeedbackResponse])
def list_all_feedback(
    identity: Identity | None = Depends(get_current_identity),
    store: FeedbackStore = Depends(get_feedback_store),
):
    require_admin(identity)

    return [
        AdminFeedbackResponse(
            id=feedback.id,
            user_id=feedback.user_id,
            category=feedback.category,
            rating=feedback.rating,
            comments=feedback.comments,
            created_at=feedback.created_at,
            status=feedback.status,
            student_name=student_name,
        )
        for feedback, student_name in store.list_all_with_submitter()
    ]


@router.delete('/feedback/{feedback_id}', response_model=MessageResponse)
def delete_feedback(
    feedback_id: int,
    identity: Identity | None = Depends(get_current_identity),
    store: FeedbackStore = Depends(get_feedback_store),
):
    require_admin(identity)

    if store.delete(feedback_id):
        logger.info('Feedback %s deleted', feedback_id)
    return MessageResponse(message='Feedback deleted')


@router.get('/users', response_model=list[UserResponse])
def list_users(
    identity: Identity | None = Depends(get_current_identity),
    store: CredentialStore = Depends(get_credential_store),
):
    require_admin(identity)

    return store.list_all()


@router.delete('/users/{user_id}', response_model=MessageResponse)
def delete_user(
    user_id: int,
    identity: Identity | None = Depends(get_current_identity),
    store: CredentialStore = Depends(get_credential_store),
):
    require_admin(identity)

    store.delete(user_id)
    return MessageResponse(message='User deleted')
