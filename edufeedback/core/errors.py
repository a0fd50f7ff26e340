"""Domain errors raised by the stores and the authorization guard.

Each error carries the HTTP status the API layer answers with; the app-level
exception handler in ``edufeedback.main`` renders them as ``{"error": message}``.
"""

from fastapi import status


class FeedbackAppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FeedbackAppError):
    """Missing or out-of-range input."""
    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(FeedbackAppError):
    """Bad credentials. Unknown email and wrong password look the same."""
    status_code = status.HTTP_400_BAD_REQUEST


class DuplicateEmailError(FeedbackAppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class AuthenticationRequired(FeedbackAppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(FeedbackAppError):
    status_code = status.HTTP_404_NOT_FOUND


class PolicyError(FeedbackAppError):
    status_code = status.HTTP_403_FORBIDDEN


class LastAdminError(PolicyError):
    pass


class StoreError(FeedbackAppError):
    """Underlying engine failure; the engine message is passed through."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
