import bcrypt

from edufeedback.core import config

# bcrypt only looks at the first 72 bytes of a secret.
MAX_PASSWORD_BYTES = 72


def get_password_hash(password: str) -> str:
    """
    Generate a salted bcrypt hash of a password.

    Parameters:
        password (str): The password to be hashed.

    Returns:
        str: The hash, including its salt and cost factor.
    """
    salt = bcrypt.gensalt(rounds=config.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify if a plain password matches a hashed password.

    Parameters:
        plain_password (str): The candidate password.
        hashed_password (str): The stored bcrypt hash.

    Returns:
        bool: True if the candidate matches the hash, False otherwise.
    """
    candidate = plain_password.encode("utf-8")
    if not hashed_password or len(candidate) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(candidate, hashed_password.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False
