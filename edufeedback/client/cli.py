"""Command-line front end for the feedback portal.

Usage:
    python -m edufeedback.client login ada@college.edu --password secret
    python -m edufeedback.client submit Facilities 4 --comments "Clean labs"
    python -m edufeedback.client history

The logged-in identity is kept in ``CLIENT_STORAGE_PATH`` between runs, the
same way the browser client keeps it in local storage.
"""
import argparse
import getpass
import logging
import sys

from edufeedback.client.controller import ClientController
from edufeedback.client.state import AdminTab, AuthMode, View
from edufeedback.core import config
from edufeedback.models.user import ROLES, ROLE_STUDENT

MAX_STARS = 5


def stars(rating: int) -> str:
    rating = max(0, min(MAX_STARS, int(rating)))
    return '★' * rating + '☆' * (MAX_STARS - rating)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='edufeedback.client', description='Student feedback portal client')
    commands = parser.add_subparsers(dest='command', required=True)

    login = commands.add_parser('login', help='Log in and remember the session')
    login.add_argument('email')
    login.add_argument('--password', help='Prompted for when omitted')

    register = commands.add_parser('register', help='Create an account')
    register.add_argument('name')
    register.add_argument('email')
    register.add_argument('--password', help='Prompted for when omitted')
    register.add_argument('--role', choices=ROLES, default=ROLE_STUDENT)

    commands.add_parser('logout', help='Forget the stored session')
    commands.add_parser('status', help='Show who is logged in')

    submit = commands.add_parser('submit', help='Submit feedback (students)')
    submit.add_argument('category')
    submit.add_argument('rating', type=int)
    submit.add_argument('--comments')

    commands.add_parser('history', help='List your feedback (students)')
    commands.add_parser('feedback', help='List all feedback (admins)')
    commands.add_parser('users', help='List all users (admins)')

    delete_feedback = commands.add_parser('delete-feedback', help='Delete a feedback entry (admins)')
    delete_feedback.add_argument('feedback_id', type=int)

    delete_user = commands.add_parser('delete-user', help='Remove a user and their feedback (admins)')
    delete_user.add_argument('user_id', type=int)

    return parser


def _password(args) -> str:
    return args.password if args.password is not None else getpass.getpass('Password: ')


def _require_view(controller: ClientController, view: View) -> bool:
    if controller.model.view is view:
        return True
    if view is View.AUTH:
        controller.notify('Already logged in; run logout first', is_error=True)
    else:
        controller.notify(f'Log in as {view.value} first', is_error=True)
    return False


def print_history(model, out) -> None:
    if not model.history:
        print('No feedback submitted yet.', file=out)
        return
    for item in model.history:
        print(f"#{item['id']}  {stars(item['rating'])}  {item['category']}  {item['created_at']}", file=out)
        if item.get('comments'):
            print(f"    {item['comments']}", file=out)


def print_admin_feedback(model, out) -> None:
    if not model.admin_feedback:
        print('No feedback yet.', file=out)
        return
    for item in model.admin_feedback:
        print(
            f"#{item['id']}  {stars(item['rating'])}  {item['category']}  "
            f"by {item['student_name']}  {item['created_at']}",
            file=out,
        )
        if item.get('comments'):
            print(f"    {item['comments']}", file=out)


def print_users(model, out) -> None:
    for row in model.admin_users:
        marker = ' (you)' if row.is_self else ''
        print(f'{row.id}  {row.name} <{row.email}>  {row.role}{marker}', file=out)


def print_status(model, out) -> None:
    if model.user is None:
        print('Not logged in.', file=out)
    else:
        print(f'Logged in as {model.user.name} <{model.user.email}> ({model.user.role})', file=out)


def run_command(controller: ClientController, args, out) -> None:
    command = args.command

    if command == 'login':
        if _require_view(controller, View.AUTH):
            if controller.model.auth_mode is not AuthMode.LOGIN:
                controller.toggle_auth_mode()
            controller.submit_auth(args.email, _password(args))
    elif command == 'register':
        if _require_view(controller, View.AUTH):
            if controller.model.auth_mode is not AuthMode.REGISTER:
                controller.toggle_auth_mode()
            controller.submit_auth(args.email, _password(args), name=args.name, role=args.role)
    elif command == 'logout':
        controller.logout()
    elif command == 'status':
        print_status(controller.model, out)
    elif command == 'submit':
        if _require_view(controller, View.STUDENT):
            controller.submit_feedback(args.category, args.rating, args.comments)
    elif command == 'history':
        if _require_view(controller, View.STUDENT):
            controller.refresh_history()
            print_history(controller.model, out)
    elif command == 'feedback':
        if _require_view(controller, View.ADMIN):
            controller.select_admin_tab(AdminTab.FEEDBACK)
            print_admin_feedback(controller.model, out)
    elif command == 'users':
        if _require_view(controller, View.ADMIN):
            controller.select_admin_tab(AdminTab.USERS)
            print_users(controller.model, out)
    elif command == 'delete-feedback':
        if _require_view(controller, View.ADMIN):
            controller.delete_feedback(args.feedback_id)
    elif command == 'delete-user':
        if _require_view(controller, View.ADMIN):
            controller.delete_user(args.user_id)


def main(argv: list[str] | None = None, controller: ClientController | None = None) -> int:
    args = build_parser().parse_args(argv)
    owns_controller = controller is None
    if owns_controller:
        logging.basicConfig(level=config.LOG_LEVEL)
        controller = ClientController.from_config()

    try:
        controller.dismiss_notification()
        controller.start()
        run_command(controller, args, sys.stdout)
    finally:
        if owns_controller:
            controller.api.close()

    notification = controller.model.notification
    if notification is None:
        return 0
    print(notification.message, file=sys.stderr if notification.is_error else sys.stdout)
    return 1 if notification.is_error else 0
