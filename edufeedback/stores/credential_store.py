import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from edufeedback.auth import passwords
from edufeedback.auth.guard import ensure_admin_removable, ensure_admins_remain
from edufeedback.core.errors import (
    AuthError,
    DuplicateEmailError,
    LastAdminError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from edufeedback.models.feedback import Feedback
from edufeedback.models.user import ROLE_ADMIN, ROLES, User

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = 'Invalid credentials'
DUPLICATE_EMAIL = 'Email likely already exists'


def _is_blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


class CredentialStore:
    """Persists users and checks their passwords."""

    def __init__(self, db: Session):
        self.db = db

    def register(self, name: str, email: str, password: str, role: str) -> int:
        if any(_is_blank(value) for value in (name, email, password, role)):
            raise ValidationError('All fields required')
        if role not in ROLES:
            raise ValidationError(f"Role must be one of: {', '.join(ROLES)}")
        if len(password.encode('utf-8')) > passwords.MAX_PASSWORD_BYTES:
            raise ValidationError(f'Password must be {passwords.MAX_PASSWORD_BYTES} bytes or fewer.')

        email = email.strip()
        if self.find_by_email(email) is not None:
            raise DuplicateEmailError(DUPLICATE_EMAIL)

        user = User(
            name=name.strip(),
            email=email,
            password=passwords.get_password_hash(password),
            role=role,
        )
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateEmailError(DUPLICATE_EMAIL) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception('Failed to register user %s', email)
            raise StoreError(str(exc)) from exc

        logger.info('Registered %s user %s (id=%s)', role, email, user.id)
        return user.id

    def find_by_email(self, email: str) -> User | None:
        try:
            return self.db.query(User).filter(User.email == email.strip()).first()
        except SQLAlchemyError as exc:
            logger.exception('User lookup by email failed')
            raise StoreError(str(exc)) from exc

    def get(self, user_id: int) -> User | None:
        try:
            return self.db.get(User, user_id)
        except SQLAlchemyError as exc:
            logger.exception('User lookup by id failed')
            raise StoreError(str(exc)) from exc

    def verify_password(self, user: User, candidate: str) -> bool:
        return passwords.verify_password(candidate or '', user.password)

    def authenticate(self, email: str | None, password: str | None) -> User:
        if _is_blank(email) or not password:
            raise AuthError(INVALID_CREDENTIALS)

        user = self.find_by_email(email)
        if user is None or not self.verify_password(user, password):
            raise AuthError(INVALID_CREDENTIALS)
        return user

    def list_all(self) -> list[User]:
        try:
            return self.db.query(User).order_by(User.id.asc()).all()
        except SQLAlchemyError as exc:
            logger.exception('Listing users failed')
            raise StoreError(str(exc)) from exc

    def count(self) -> int:
        try:
            return self.db.query(func.count(User.id)).scalar() or 0
        except SQLAlchemyError as exc:
            logger.exception('Counting users failed')
            raise StoreError(str(exc)) from exc

    def count_admins(self) -> int:
        try:
            return self.db.query(func.count(User.id)).filter(User.role == ROLE_ADMIN).scalar() or 0
        except SQLAlchemyError as exc:
            logger.exception('Counting admins failed')
            raise StoreError(str(exc)) from exc

    def delete(self, user_id: int) -> None:
        """Delete a user and all of their feedback in a single transaction."""
        user = self.get(user_id)
        if user is None:
            raise NotFoundError('User not found')

        was_admin = user.role == ROLE_ADMIN
        ensure_admin_removable(user.role, self.count_admins())

        try:
            self.db.query(Feedback).filter(Feedback.user_id == user_id).delete(synchronize_session=False)
            self.db.delete(user)
            self.db.flush()
            # The write lock is held from here on, so this count is the one that commits.
            remaining_admins = None
            if was_admin:
                remaining_admins = (
                    self.db.query(func.count(User.id)).filter(User.role == ROLE_ADMIN).scalar() or 0
                )
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception('Failed to delete user %s', user_id)
            raise StoreError(str(exc)) from exc

        if remaining_admins is not None:
            try:
                ensure_admins_remain(remaining_admins)
            except LastAdminError:
                self.db.rollback()
                logger.warning('Refused to delete user %s: no admin would remain', user_id)
                raise

        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception('Failed to delete user %s', user_id)
            raise StoreError(str(exc)) from exc

        logger.info('Deleted user %s and their feedback', user_id)
