"""Domain exceptions raised by service functions."""


class ActionError(Exception):
    """A user action was rejected; ``str(exc)`` is shown verbatim to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
