"""Error taxonomy for account and registration operations."""

from __future__ import annotations


class AccountError(Exception):
    """Base class for account-related failures surfaced to the caller."""

    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FieldValidationError(AccountError):
    """Local input problem; never reaches the network."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class PasswordMismatchError(FieldValidationError):
    def __init__(self, message: str = "As novas senhas não coincidem."):
        super().__init__(message, field="confirm_new_password")


class WeakPasswordError(FieldValidationError):
    def __init__(self, message: str):
        super().__init__(message, field="new_password")


class DocumentInvalidError(FieldValidationError):
    pass


class ConflictError(AccountError):
    """The backend already holds a record with the same identity."""


class CredentialError(AccountError):
    """Wrong current password or rejected credentials."""


AuthorizationError = CredentialError


class NetworkError(AccountError):
    """Transport failure or timeout; the caller may resubmit."""

    retryable = True


class NotFoundError(AccountError):
    pass


class BackendError(AccountError):
    """Unexpected response from the backend."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class OperationInProgressError(AccountError):
    pass


class InvalidTransitionError(AccountError):
    pass


class NotAuthenticatedError(AccountError):
    pass
