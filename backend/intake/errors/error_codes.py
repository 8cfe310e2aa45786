# /intake/errors/error_codes.py

from enum import Enum

# Stable identifiers attached to every AppError so that a failure can be traced
# from the error page back to the code that raised it.


class ErrorCodes(str, Enum):
    UNCAUGHT_ERROR = "UNC-0000"

    # component error codes
    MISSING_LANG_PARAM = "CMP-0001"

    # i18n error codes
    NO_LANGUAGE_FOUND = "I18N-0001"

    # route error codes
    ROUTE_NOT_FOUND = "RTE-0001"
    MISSING_ROUTE_PARAM = "RTE-0002"
    UNRECOGNIZED_ACTION = "RTE-0003"
    UNRECOGNIZED_SECTION = "RTE-0004"

    # workflow error codes
    MISSING_META = "WFL-0001"
    UNKNOWN_STATE = "WFL-0002"
    ACTOR_NOT_STARTED = "WFL-0004"
    INVALID_DEFINITION = "WFL-0005"

    # session error codes
    SESSION_STORE_UNAVAILABLE = "SES-0001"
