"""Exception types raised by the crucible search engine and grid adapter."""


class CrucibleError(Exception):
    """Base class for all crucible errors."""


class MalformedGrid(CrucibleError, ValueError):
    """Raised when grid input is not rectangular or contains non-digit cells."""

    def __init__(self, message: str, row: int = None, col: int = None):
        super().__init__(message)
        self.row = row
        self.col = col


class InvalidStart(CrucibleError, ValueError):
    """Raised when the start coordinate lies outside the grid."""


class InvalidPolicy(CrucibleError, ValueError):
    """Raised when motion policy run-length bounds are inconsistent."""


class NoPathFound(CrucibleError, LookupError):
    """The goal cannot be reached under the given motion policy."""


class DeadlineExceeded(CrucibleError, TimeoutError):
    """The search ran out of time or expansions before it could finish."""
