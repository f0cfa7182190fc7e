class ValidationError(Exception):
    """Missing or malformed client input. Reported as HTTP 400."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CollaboratorUnavailable(Exception):
    """
    The breach-lookup service could not answer.
    Never reaches the client; callers fall back to a local check.
    """
