"""Role-based access policy.

These checks are pure: they trust whatever identity the caller resolved. When
``ENFORCE_AUTH`` is off the API passes ``None`` and every check is skipped,
which is how the portal behaved before bearer tokens were introduced.
"""

from dataclasses import dataclass

from edufeedback.core.errors import LastAdminError, PolicyError
from edufeedback.models.user import ROLE_ADMIN, ROLE_STUDENT


@dataclass(frozen=True)
class Identity:
    id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def require_admin(identity: Identity | None) -> None:
    if identity is None:
        return
    if not identity.is_admin:
        raise PolicyError("Admin access required")


def require_feedback_owner(identity: Identity | None, user_id: int | None) -> None:
    if identity is None:
        return
    if identity.role != ROLE_STUDENT:
        raise PolicyError("Only students can submit feedback")
    if user_id is not None and identity.id != user_id:
        raise PolicyError("Feedback can only be submitted for your own account")


def require_history_owner(identity: Identity | None, user_id: int) -> None:
    if identity is None:
        return
    if identity.role != ROLE_STUDENT or identity.id != user_id:
        raise PolicyError("You can only view your own feedback history")


def ensure_admin_removable(role: str, admin_count: int) -> None:
    if role == ROLE_ADMIN:
        ensure_admins_remain(admin_count - 1)


def ensure_admins_remain(remaining_admins: int) -> None:
    if remaining_admins < 1:
        raise LastAdminError("Cannot delete the last remaining admin")
