import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from edufeedback.auth import jwt_handler
from edufeedback.auth.guard import Identity
from edufeedback.core import config
from edufeedback.core.errors import AuthenticationRequired
from edufeedback.database import get_db
from edufeedback.models.user import User

security = HTTPBearer(auto_error=False)


def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> Identity | None:
    """Resolve the caller from its bearer token.

    Returns None when ENFORCE_AUTH is off; the guard then lets every call through.
    """
    if not config.ENFORCE_AUTH:
        return None
    if credentials is None:
        raise AuthenticationRequired("Not authenticated")

    try:
        payload = jwt_handler.decode_access_token(credentials.credentials)
    except jwt.PyJWTError as exc:
        raise AuthenticationRequired("Invalid token") from exc

    subject = payload.get("sub")
    if not subject or not str(subject).isdigit():
        raise AuthenticationRequired("Invalid token subject")

    user = db.get(User, int(subject))
    if user is None:
        raise AuthenticationRequired("User not found")
    return Identity(id=user.id, role=user.role)
