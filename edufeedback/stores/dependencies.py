from fastapi import Depends
from sqlalchemy.orm import Session

from edufeedback.database import get_db
from edufeedback.stores.credential_store import CredentialStore
from edufeedback.stores.feedback_store import FeedbackStore


def get_credential_store(db: Session = Depends(get_db)) -> CredentialStore:
    return CredentialStore(db)


def get_feedback_store(db: Session = Depends(get_db)) -> FeedbackStore:
    return FeedbackStore(db)
