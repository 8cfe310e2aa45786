# /intake/errors/app_error.py

import secrets
import string

from intake.errors.error_codes import ErrorCodes

_CORRELATION_ALPHABET = string.ascii_uppercase + string.digits


def generate_correlation_id() -> str:
    """Returns a short random id in the form XXXX-XXXX-XXXX."""
    groups = ("".join(secrets.choice(_CORRELATION_ALPHABET) for _ in range(4)) for _ in range(3))
    return "-".join(groups)


class AppError(Exception):
    """
    Top-level application error carrying a stable error code.

    Raised for configuration-integrity violations and caller contract breaches;
    recoverable conditions (a missing tab id, an unknown flow) never raise this.
    """

    def __init__(
        self,
        msg: str,
        error_code: ErrorCodes = ErrorCodes.UNCAUGHT_ERROR,
        *,
        status_code: int = 500,
        correlation_id: str | None = None,
    ):
        super().__init__(msg)
        self.msg = msg
        self.error_code = error_code
        self.status_code = status_code
        self.correlation_id = correlation_id or generate_correlation_id()

    def to_dict(self) -> dict:
        return {
            "error_code": self.error_code.value,
            "message": self.msg,
            "correlation_id": self.correlation_id,
        }

    def __repr__(self) -> str:
        return f"AppError({self.error_code.value}: {self.msg})"
