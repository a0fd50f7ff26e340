"""Create the default admin account when no users exist.

Usage:
    python -m edufeedback.seed
"""
import logging
import sys

from sqlalchemy.orm import Session

from edufeedback.core import config
from edufeedback.core.errors import FeedbackAppError
from edufeedback.database import SessionLocal, init_db
from edufeedback.models.user import ROLE_ADMIN
from edufeedback.stores.credential_store import CredentialStore

logger = logging.getLogger(__name__)


def seed_default_admin(db: Session) -> bool:
    """Insert the configured admin if the users table is empty.

    Returns True when an account was created.
    """
    store = CredentialStore(db)
    if store.count() > 0:
        logger.info('Database already initialized.')
        return False

    store.register(config.SEED_ADMIN_NAME, config.SEED_ADMIN_EMAIL, config.SEED_ADMIN_PASSWORD, ROLE_ADMIN)
    logger.info('Default admin seeded (email: %s)', config.SEED_ADMIN_EMAIL)
    return True


def main() -> None:
    logging.basicConfig(level=config.LOG_LEVEL)
    init_db()
    db = SessionLocal()
    try:
        created = seed_default_admin(db)
    except FeedbackAppError as exc:
        print(f"Seeding failed: {exc.message}", file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()
    print("Default admin created." if created else "Users already exist; nothing to seed.")


if __name__ == "__main__":
    main()
