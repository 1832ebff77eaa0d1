"""Custom exceptions for imports-detector.

Only genuinely exceptional conditions use these. An import that cannot be
resolved is not an error: the resolver returns None instead.
"""


class ImportsDetectorError(Exception):
    """Base class for all imports-detector errors."""


class DiscoveryError(ImportsDetectorError):
    """Raised when the search root cannot be enumerated.

    This is the only failure that aborts a whole operation.
    """

    def __init__(self, message: str, root: str | None = None):
        super().__init__(message)
        self.root = root


class ParseError(ImportsDetectorError):
    """Raised when a single file cannot be read or parsed.

    The orchestrator catches this per file, records it, and moves on.

    Attributes:
        path: File that failed
        line: First offending line (1-based) when known
    """

    def __init__(self, message: str, path: str, line: int | None = None):
        super().__init__(message)
        self.path = path
        self.line = line
