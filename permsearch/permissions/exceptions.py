"""
Exceptions raised while reading permission policies.
"""


class FilterParseError(ValueError):
    """Raised when a policy string cannot be turned into a FilterSet."""

    def __init__(self, message: str, clause: str | None = None):
        self.clause = clause
        if clause is not None:
            message = f'{message} (in filter "{clause}")'
        super().__init__(message)
