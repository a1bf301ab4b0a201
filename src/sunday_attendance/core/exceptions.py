class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class ImportParseError(DomainError):
    """Raised when an uploaded spreadsheet cannot be read at all."""


class StoreError(Exception):
    """Raised when the backend rejects or fails a call."""


class LoadError(StoreError):
    """Raised after a failed fetch; cached data is left untouched."""


class WriteError(StoreError):
    """Raised after a failed mutation once local state has been reconciled."""
