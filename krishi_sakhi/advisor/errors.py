"""Exceptions raised inside the advisor layer."""


class ConfigurationError(Exception):
    """Raised before any dispatch work when the service credential is missing."""


class CompletionServiceError(Exception):
    """Raised by a completion client when the service call fails.

    The message is the textual detail that the classifier inspects.
    """

    def __init__(self, message: str, status_code: int = 0, error_code: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
