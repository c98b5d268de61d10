"""Exceptions raised while resolving and submitting a Lighthouse CI run."""


class LighthouseCIError(Exception):
    """Base class for Lighthouse CI trigger errors."""


class UsageError(LighthouseCIError):
    """Raised when the command line is invalid or help was requested.

    Always fatal: the CLI prints the message followed by the usage text.
    """

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "")
        self.message = message


class DispatchError(LighthouseCIError):
    """Raised when the submission to the Lighthouse CI service fails."""
