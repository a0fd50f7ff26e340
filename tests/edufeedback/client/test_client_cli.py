import pytest

from edufeedback.client import cli
from edufeedback.client.api import ApiClient
from edufeedback.client.controller import ClientController
from edufeedback.client.storage import IdentityStorage
from edufeedback.stores.feedback_store import FeedbackStore


@pytest.fixture
def storage(tmp_path):
    return IdentityStorage(tmp_path / 'storage.json')


@pytest.fixture
def run(client, storage):
    """Run one CLI invocation with a fresh controller, like a new process would."""

    def _run(*argv: str) -> int:
        return cli.main(list(argv), controller=ClientController(ApiClient(client), storage))

    return _run


def test_stars_renders_filled_and_empty() -> None:
    assert cli.stars(3) == '★★★☆☆'
    assert cli.stars(5) == '★★★★★'


def test_status_when_logged_out(run, capsys) -> None:
    assert run('status') == 0

    assert 'Not logged in.' in capsys.readouterr().out


def test_register_login_submit_and_history(run, storage, capsys) -> None:
    assert run('register', 'Ada', 'ada@college.edu', '--password', 'secret') == 0
    assert 'Registration successful! Please login.' in capsys.readouterr().out

    assert run('login', 'ada@college.edu', '--password', 'secret') == 0
    assert 'Welcome back!' in capsys.readouterr().out
    assert storage.load_user().email == 'ada@college.edu'

    assert run('submit', 'Facilities', '4', '--comments', 'Clean labs') == 0
    assert 'Feedback submitted!' in capsys.readouterr().out

    assert run('history') == 0
    out = capsys.readouterr().out
    assert '★★★★☆  Facilities' in out
    assert 'Clean labs' in out


def test_failed_login_prints_error_and_exits_nonzero(run, make_user, capsys) -> None:
    make_user(email='ada@college.edu', password='secret')

    assert run('login', 'ada@college.edu', '--password', 'wrong') == 1

    captured = capsys.readouterr()
    assert 'Invalid credentials' in captured.err
    assert captured.out == ''


def test_student_commands_require_login(run, capsys) -> None:
    assert run('submit', 'Library', '3') == 1

    assert 'Log in as student first' in capsys.readouterr().err


def test_invalid_rating_is_reported(run, make_user, capsys) -> None:
    make_user(email='ada@college.edu', password='secret')
    run('login', 'ada@college.edu', '--password', 'secret')
    capsys.readouterr()

    assert run('submit', 'Library', '9') == 1

    assert 'Rating' in capsys.readouterr().err


def test_admin_lists_marks_self_and_removes_users(run, make_user, db, capsys) -> None:
    admin_id = make_user(name='Admin', email='admin@college.edu', password='secret', role='admin')
    student_id = make_user(name='Ada', email='ada@college.edu', password='secret')
    FeedbackStore(db).create(student_id, 'Library', 2, 'Noisy')
    run('login', 'admin@college.edu', '--password', 'secret')
    capsys.readouterr()

    assert run('users') == 0
    out = capsys.readouterr().out
    assert f'{admin_id}  Admin <admin@college.edu>  admin (you)' in out
    assert f'{student_id}  Ada <ada@college.edu>  student' in out

    assert run('feedback') == 0
    assert 'by Ada' in capsys.readouterr().out

    assert run('delete-user', str(admin_id)) == 1
    assert 'You cannot remove your own account' in capsys.readouterr().err

    assert run('delete-user', str(student_id)) == 0
    assert 'User removed' in capsys.readouterr().out

    run('feedback')
    assert 'No feedback yet.' in capsys.readouterr().out


def test_logout_forgets_stored_session(run, make_user, storage, capsys) -> None:
    make_user(email='ada@college.edu', password='secret')
    run('login', 'ada@college.edu', '--password', 'secret')

    assert run('logout') == 0

    assert storage.load_user() is None
    assert 'Logged out successfully' in capsys.readouterr().out


def test_login_while_logged_in_is_refused(run, make_user, capsys) -> None:
    make_user(email='ada@college.edu', password='secret')
    run('login', 'ada@college.edu', '--password', 'secret')
    capsys.readouterr()

    assert run('login', 'ada@college.edu', '--password', 'secret') == 1

    assert 'Already logged in' in capsys.readouterr().err
