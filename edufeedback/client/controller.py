import logging

from edufeedback.client import state
from edufeedback.client.api import ApiClient, ApiError
from edufeedback.client.state import AdminTab, AuthMode, CurrentUser, View, ViewModel
from edufeedback.client.storage import IdentityStorage
from edufeedback.core import config

logger = logging.getLogger(__name__)


class ClientController:
    """Drives the view model from user actions and API responses.

    Each action issues its request, waits for the answer, then re-fetches the
    affected list. There are no optimistic updates.
    """

    def __init__(self, api: ApiClient, storage: IdentityStorage):
        self.api = api
        self.storage = storage
        self.model = ViewModel()

    @classmethod
    def from_config(cls) -> 'ClientController':
        return cls(ApiClient.from_base_url(config.CLIENT_API_BASE_URL), IdentityStorage(config.CLIENT_STORAGE_PATH))

    def dispatch(self, event) -> ViewModel:
        self.model = state.transition(self.model, event)
        return self.model

    def notify(self, message: str, is_error: bool = False) -> None:
        self.dispatch(state.Notified(message, is_error))

    def dismiss_notification(self) -> None:
        self.dispatch(state.NotificationDismissed())

    def _fail(self, exc: ApiError) -> None:
        logger.info('API call failed with %s: %s', exc.status_code, exc.message)
        if exc.status_code == 401 and self.model.user is not None:
            self._end_session()
        self.notify(exc.message, is_error=True)

    def _end_session(self) -> None:
        self.storage.clear_user()
        self.api.token = None
        self.dispatch(state.LoggedOut())

    def _load_view_data(self) -> None:
        if self.model.view is View.STUDENT:
            self.refresh_history()
        elif self.model.view is View.ADMIN:
            self.refresh_admin_feedback()
            self.refresh_admin_users()

    def start(self) -> ViewModel:
        user = self.storage.load_user()
        self.api.token = user.access_token if user else None
        self.dispatch(state.SessionRestored(user))
        self._load_view_data()
        return self.model

    # Auth view

    def toggle_auth_mode(self) -> None:
        self.dispatch(state.AuthModeToggled())

    def submit_auth(self, email: str, password: str, name: str | None = None, role: str = 'student') -> None:
        if self.model.view is not View.AUTH:
            return

        try:
            if self.model.auth_mode is AuthMode.LOGIN:
                user = CurrentUser.from_dict(self.api.login(email, password))
                self.storage.save_user(user)
                self.api.token = user.access_token
                self.dispatch(state.LoggedIn(user))
                self._load_view_data()
                self.notify('Welcome back!')
            else:
                self.api.register(name or '', email, password, role)
                self.dispatch(state.Registered())
                self.notify('Registration successful! Please login.')
        except ApiError as exc:
            self._fail(exc)

    def logout(self) -> None:
        self._end_session()
        self.notify('Logged out successfully')

    # Student view

    def submit_feedback(self, category: str, rating: int, comments: str | None = None) -> bool:
        if self.model.view is not View.STUDENT:
            return False

        try:
            self.api.submit_feedback(self.model.user.id, category, rating, comments)
        except ApiError as exc:
            self._fail(exc)
            return False

        self.notify('Feedback submitted!')
        self.refresh_history()
        return True

    def refresh_history(self) -> None:
        if self.model.view is not View.STUDENT:
            return
        try:
            items = self.api.feedback_history(self.model.user.id)
        except ApiError as exc:
            self._fail(exc)
            return
        self.dispatch(state.HistoryLoaded(tuple(items)))

    # Admin view

    def select_admin_tab(self, tab: AdminTab) -> None:
        self.dispatch(state.AdminTabSelected(tab))

    def refresh_admin_feedback(self) -> None:
        if self.model.view is not View.ADMIN:
            return
        try:
            items = self.api.admin_feedback()
        except ApiError as exc:
            self._fail(exc)
            return
        self.dispatch(state.AdminFeedbackLoaded(tuple(items)))

    def refresh_admin_users(self) -> None:
        if self.model.view is not View.ADMIN:
            return
        try:
            items = self.api.admin_users()
        except ApiError as exc:
            self._fail(exc)
            return
        self.dispatch(state.AdminUsersLoaded(tuple(items)))

    def delete_feedback(self, feedback_id: int) -> None:
        if self.model.view is not View.ADMIN:
            return
        try:
            self.api.delete_feedback(feedback_id)
        except ApiError as exc:
            self._fail(exc)
            return
        self.refresh_admin_feedback()
        self.notify('Feedback deleted')

    def delete_user(self, user_id: int) -> None:
        if self.model.view is not View.ADMIN:
            return
        if user_id == self.model.user.id:
            self.notify('You cannot remove your own account', is_error=True)
            return
        try:
            self.api.delete_user(user_id)
        except ApiError as exc:
            self._fail(exc)
            return
        self.refresh_admin_users()
        self.refresh_admin_feedback()
        self.notify('User removed')
