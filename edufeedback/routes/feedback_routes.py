from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel, field_validator

from edufeedback.auth.dependencies import get_current_identity
from edufeedback.auth.guard import Identity, require_feedback_owner, require_history_owner
from edufeedback.stores.dependencies import get_feedback_store
from edufeedback.stores.feedback_store import FeedbackStore

router = APIRouter(tags=['feedback'])


class CreateFeedbackRequest(BaseModel):
    user_id: int | None = None
    category: str | None = None
    rating: int | None = None
    comments: str | None = None

    @field_validator('comments')
    @classmethod
    def normalize_comments(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip()


class CreateFeedbackResponse(BaseModel):
    message: str
    id: int


class FeedbackResponse(BaseModel):
    id: int
    user_id: int
    category: str
    rating: int
    comments: str | None = None
    created_at: datetime
    status: str | None = None

    @field_validator('created_at')
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands timestamps back without an offset; they are stored in UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    class Config:
        from_attributes = True


@router.post('/feedback', response_model=CreateFeedbackResponse)
def create_feedback(
    data: CreateFeedbackRequest,
    identity: Identity | None = Depends(get_current_identity),
    store: FeedbackStore = Depends(get_feedback_store),
):
    require_feedback_owner(identity, data.user_id)

    feedback_id = store.create(data.user_id, data.category, data.rating, data.comments)
    return CreateFeedbackResponse(message='Feedback submitted', id=feedback_id)


@router.get('/feedback/history/{user_id}', response_model=list[FeedbackResponse])
def feedback_history(
    user_id: int,
    identity: Identity | None = Depends(get_current_identity),
    store: FeedbackStore = Depends(get_feedback_store),
):
    require_history_owner(identity, user_id)

    return store.list_by_user(user_id)
