"""View model for the feedback portal client.

The client is always in exactly one of three views. Every change to what the
user sees goes through ``transition``, which takes the current model and a
typed event and returns the next model. Nothing here performs I/O; the
controller fetches data and feeds the results back in as events.
"""

from dataclasses import dataclass, field, replace
from enum import Enum


class View(str, Enum):
    AUTH = 'auth'
    STUDENT = 'student'
    ADMIN = 'admin'


class AuthMode(str, Enum):
    LOGIN = 'login'
    REGISTER = 'register'


class AdminTab(str, Enum):
    FEEDBACK = 'feedback'
    USERS = 'users'


@dataclass(frozen=True)
class CurrentUser:
    id: int
    name: str
    email: str
    role: str
    access_token: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == 'admin'

    @classmethod
    def from_dict(cls, data: dict) -> 'CurrentUser':
        return cls(
            id=int(data['id']),
            name=data['name'],
            email=data['email'],
            role=data['role'],
            access_token=data.get('access_token'),
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'access_token': self.access_token,
        }


@dataclass(frozen=True)
class UserRow:
    id: int
    name: str
    email: str
    role: str
    is_self: bool = False


@dataclass(frozen=True)
class Notification:
    message: str
    is_error: bool = False


@dataclass(frozen=True)
class ViewModel:
    view: View = View.AUTH
    user: CurrentUser | None = None
    auth_mode: AuthMode = AuthMode.LOGIN
    admin_tab: AdminTab = AdminTab.FEEDBACK
    history: tuple[dict, ...] = ()
    admin_feedback: tuple[dict, ...] = ()
    admin_users: tuple[UserRow, ...] = ()
    notification: Notification | None = None


# Events

@dataclass(frozen=True)
class SessionRestored:
    user: CurrentUser | None


@dataclass(frozen=True)
class LoggedIn:
    user: CurrentUser


@dataclass(frozen=True)
class Registered:
    pass


@dataclass(frozen=True)
class LoggedOut:
    pass


@dataclass(frozen=True)
class AuthModeToggled:
    pass


@dataclass(frozen=True)
class AdminTabSelected:
    tab: AdminTab


@dataclass(frozen=True)
class HistoryLoaded:
    items: tuple[dict, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class AdminFeedbackLoaded:
    items: tuple[dict, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class AdminUsersLoaded:
    items: tuple[dict, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Notified:
    message: str
    is_error: bool = False


@dataclass(frozen=True)
class NotificationDismissed:
    pass


def view_for(user: CurrentUser | None) -> View:
    if user is None:
        return View.AUTH
    return View.ADMIN if user.is_admin else View.STUDENT


def transition(model: ViewModel, event) -> ViewModel:
    if isinstance(event, (SessionRestored, LoggedIn)):
        if event.user is None:
            return ViewModel(notification=model.notification)
        return ViewModel(view=view_for(event.user), user=event.user, notification=model.notification)

    if isinstance(event, LoggedOut):
        return ViewModel(notification=model.notification)

    if isinstance(event, Registered):
        return replace(model, auth_mode=AuthMode.LOGIN)

    if isinstance(event, AuthModeToggled):
        if model.view is not View.AUTH:
            return model
        next_mode = AuthMode.REGISTER if model.auth_mode is AuthMode.LOGIN else AuthMode.LOGIN
        return replace(model, auth_mode=next_mode)

    if isinstance(event, AdminTabSelected):
        if model.view is not View.ADMIN:
            return model
        return replace(model, admin_tab=event.tab)

    if isinstance(event, HistoryLoaded):
        if model.view is not View.STUDENT:
            return model
        return replace(model, history=tuple(event.items))

    if isinstance(event, AdminFeedbackLoaded):
        if model.view is not View.ADMIN:
            return model
        return replace(model, admin_feedback=tuple(event.items))

    if isinstance(event, AdminUsersLoaded):
        if model.view is not View.ADMIN:
            return model
        current_id = model.user.id if model.user else None
        rows = tuple(
            UserRow(
                id=item['id'],
                name=item['name'],
                email=item['email'],
                role=item['role'],
                is_self=item['id'] == current_id,
            )
            for item in event.items
        )
        return replace(model, admin_users=rows)

    if isinstance(event, Notified):
        return replace(model, notification=Notification(event.message, event.is_error))

    if isinstance(event, NotificationDismissed):
        return replace(model, notification=None)

    raise TypeError(f'Unknown event: {event!r}')
