# File: login_portal/services/errors.py

"""
Error taxonomy for the account store and the registration/login service.

Store errors describe what went wrong in the database. Service errors
are what the HTTP layer renders: each carries the status code and the
message that is safe to show the caller.
"""


# ---------- store ----------

class StoreError(Exception):
    pass


class ConstraintViolation(StoreError):
    """Email or username already taken at insert time."""


class TransactionError(StoreError):
    """The registration transaction failed and was rolled back."""


# ---------- service ----------

class AccountServiceError(Exception):
    status_code = 400
    message = "Bad request"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(AccountServiceError):
    status_code = 400
    message = "Invalid input"


class DuplicateAccount(AccountServiceError):
    status_code = 400
    message = "User with this email or username already exists"


class InvalidCredentials(AccountServiceError):
    # Same text for unknown identifier and wrong secret
    status_code = 401
    message = "Invalid credentials"


class AdminAccessDenied(AccountServiceError):
    status_code = 403
    message = "Admin access required"


class InternalError(AccountServiceError):
    status_code = 500
    message = "Internal server error"
