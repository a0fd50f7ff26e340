import pytest

from edufeedback.client.api import ApiClient
from edufeedback.client.controller import ClientController
from edufeedback.client.state import AuthMode, CurrentUser, View
from edufeedback.client.storage import IdentityStorage
from edufeedback.stores.feedback_store import FeedbackStore


@pytest.fixture
def storage(tmp_path):
    return IdentityStorage(tmp_path / 'storage.json')


@pytest.fixture
def controller(client, storage):
    return ClientController(ApiClient(client), storage)


def test_start_without_stored_identity_shows_auth(controller) -> None:
    model = controller.start()

    assert model.view is View.AUTH


def test_register_then_login_as_student(controller, storage) -> None:
    controller.start()
    controller.toggle_auth_mode()
    assert controller.model.auth_mode is AuthMode.REGISTER

    controller.submit_auth('ada@college.edu', 'secret', name='Ada', role='student')
    assert controller.model.view is View.AUTH
    assert controller.model.auth_mode is AuthMode.LOGIN
    assert controller.model.notification.message == 'Registration successful! Please login.'

    controller.submit_auth('ada@college.edu', 'secret')

    assert controller.model.view is View.STUDENT
    assert controller.model.user.name == 'Ada'
    assert controller.model.notification.message == 'Welcome back!'
    assert storage.load_user().email == 'ada@college.edu'


def test_failed_login_shows_error_notification(controller, make_user) -> None:
    make_user(email='ada@college.edu', password='secret')
    controller.start()

    controller.submit_auth('ada@college.edu', 'wrong')

    assert controller.model.view is View.AUTH
    assert controller.model.notification.message == 'Invalid credentials'
    assert controller.model.notification.is_error


def test_submitting_feedback_refreshes_history(controller, make_user) -> None:
    make_user(email='ada@college.edu', password='secret')
    controller.start()
    controller.submit_auth('ada@college.edu', 'secret')

    assert controller.submit_feedback('Facilities', 4, 'Good') is True

    assert [(entry['category'], entry['rating']) for entry in controller.model.history] == [('Facilities', 4)]
    assert controller.model.notification.message == 'Feedback submitted!'


def test_invalid_feedback_surfaces_error_and_keeps_history(controller, make_user) -> None:
    make_user(email='ada@college.edu', password='secret')
    controller.start()
    controller.submit_auth('ada@college.edu', 'secret')

    assert controller.submit_feedback('Facilities', 9, 'Too good') is False

    assert controller.model.history == ()
    assert controller.model.notification.is_error


def test_stored_identity_is_restored_on_start(client, storage, make_user) -> None:
    make_user(email='ada@college.edu', password='secret')
    first = ClientController(ApiClient(client), storage)
    first.start()
    first.submit_auth('ada@college.edu', 'secret')
    first.submit_feedback('Library', 3, 'Quiet')

    second = ClientController(ApiClient(client), storage)
    model = second.start()

    assert model.view is View.STUDENT
    assert len(model.history) == 1


def test_logout_clears_stored_identity(controller, storage, make_user) -> None:
    make_user(email='ada@college.edu', password='secret')
    controller.start()
    controller.submit_auth('ada@college.edu', 'secret')

    controller.logout()

    assert controller.model.view is View.AUTH
    assert storage.load_user() is None
    assert controller.api.token is None


def test_rejected_stored_token_returns_to_auth(controller, storage) -> None:
    storage.save_user(CurrentUser(id=5, name='Ghost', email='ghost@college.edu', role='student', access_token='bogus'))

    model = controller.start()

    assert model.view is View.AUTH
    assert model.notification.is_error
    assert storage.load_user() is None


def test_admin_moderation_flow(controller, db, make_user) -> None:
    make_user(name='System Admin', email='admin@college.edu', password='admin123', role='admin')
    student_id = make_user(name='Ada', email='ada@college.edu', password='secret')
    FeedbackStore(db).create(student_id, 'Food', 2, 'Cold')

    controller.start()
    controller.submit_auth('admin@college.edu', 'admin123')

    assert controller.model.view is View.ADMIN
    assert [entry['student_name'] for entry in controller.model.admin_feedback] == ['Ada']
    assert [(row.email, row.is_self) for row in controller.model.admin_users] == [
        ('admin@college.edu', True),
        ('ada@college.edu', False),
    ]

    controller.delete_user(controller.model.user.id)
    assert controller.model.notification.message == 'You cannot remove your own account'
    assert len(controller.model.admin_users) == 2

    controller.delete_user(student_id)

    assert [row.email for row in controller.model.admin_users] == ['admin@college.edu']
    assert controller.model.admin_feedback == ()
    assert controller.model.notification.message == 'User removed'


def test_deleting_feedback_refetches_admin_list(controller, db, make_user) -> None:
    make_user(name='System Admin', email='admin@college.edu', password='admin123', role='admin')
    student_id = make_user(name='Ada', email='ada@college.edu', password='secret')
    store = FeedbackStore(db)
    kept = store.create(student_id, 'Library', 4, 'Quiet')
    removed = store.create(student_id, 'Food', 1, 'Cold')
    controller.start()
    controller.submit_auth('admin@college.edu', 'admin123')

    controller.delete_feedback(removed)

    assert [entry['id'] for entry in controller.model.admin_feedback] == [kept]
    assert controller.model.notification.message == 'Feedback deleted'


def test_from_config_uses_configured_storage_and_base_url(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr('edufeedback.core.config.CLIENT_STORAGE_PATH', str(tmp_path / 'client.json'))
    monkeypatch.setattr('edufeedback.core.config.CLIENT_API_BASE_URL', 'http://feedback.example:3000')

    configured = ClientController.from_config()
    try:
        assert configured.storage.path == tmp_path / 'client.json'
        assert configured.api.http.base_url.host == 'feedback.example'
        assert configured.api.http.base_url.port == 3000
    finally:
        configured.api.close()
