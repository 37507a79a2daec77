# src/qs_filter/base/exceptions.py


class QSFilterException(Exception):
    """Base class for every error raised by qs_filter."""

    def __init__(self, message: str = "Query string filter error."):
        super().__init__(message)


class ConfigurationError(QSFilterException):
    """Exception raised when parser options are invalid."""

    def __init__(self, message: str = "Invalid query string parser configuration."):
        super().__init__(message)


class OperatorConfigurationError(ConfigurationError):
    """Exception raised when the recognized operator table cannot be dispatched.

    Covers a token that has no handler and a token listed after one of its own
    prefixes (which could never be matched).
    """

    def __init__(self, message: str = "Operator table is misconfigured."):
        super().__init__(message)
