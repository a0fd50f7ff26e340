import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from edufeedback.core.errors import StoreError, ValidationError
from edufeedback.models.feedback import DEFAULT_STATUS, Feedback
from edufeedback.models.user import User

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def validate_rating(rating) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError(f'Rating must be a whole number between {MIN_RATING} and {MAX_RATING}.')
    if rating < MIN_RATING or rating > MAX_RATING:
        raise ValidationError(f'Rating must be between {MIN_RATING} and {MAX_RATING}.')
    return rating


class FeedbackStore:
    """Persists feedback entries owned by users."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, user_id: int | None, category: str | None, rating, comments: str | None = None) -> int:
        if user_id is None:
            raise ValidationError('user_id is required')
        if category is None or not category.strip():
            raise ValidationError('Category is required')
        rating = validate_rating(rating)

        feedback = Feedback(
            user_id=user_id,
            category=category.strip(),
            rating=rating,
            comments=comments,
            status=DEFAULT_STATUS,
        )
        try:
            self.db.add(feedback)
            self.db.commit()
            self.db.refresh(feedback)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception('Failed to store feedback for user %s', user_id)
            raise StoreError(str(exc)) from exc

        return feedback.id

    def list_by_user(self, user_id: int) -> list[Feedback]:
        try:
            return self.db.query(Feedback).filter(
                Feedback.user_id == user_id,
            ).order_by(Feedback.created_at.desc(), Feedback.id.desc()).all()
        except SQLAlchemyError as exc:
            logger.exception('Listing feedback for user %s failed', user_id)
            raise StoreError(str(exc)) from exc

    def list_all_with_submitter(self) -> list[tuple[Feedback, str]]:
        try:
            rows = self.db.query(Feedback, User.name.label('student_name')).join(
                User, Feedback.user_id == User.id,
            ).order_by(Feedback.created_at.desc(), Feedback.id.desc()).all()
        except SQLAlchemyError as exc:
            logger.exception('Listing all feedback failed')
            raise StoreError(str(exc)) from exc

        return [(feedback, student_name) for feedback, student_name in rows]

    def delete(self, feedback_id: int) -> bool:
        """Remove a feedback entry. Deleting a missing entry is not an error."""
        try:
            removed = self.db.query(Feedback).filter(Feedback.id == feedback_id).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception('Failed to delete feedback %s', feedback_id)
            raise StoreError(str(exc)) from exc

        return bool(removed)
