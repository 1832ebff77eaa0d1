"""Centralized exit codes for the imports-detector CLI."""


class ExitCodes:
    """Standard exit codes for imports-detector commands."""

    SUCCESS = 0

    NO_MATCHES = 1
    ERROR = 1

    @classmethod
    def for_matches(cls, count: int) -> int:
        """Exit code for a find command that produced ``count`` results."""
        return cls.SUCCESS if count > 0 else cls.NO_MATCHES
