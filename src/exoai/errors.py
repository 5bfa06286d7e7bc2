"""Exception types surfaced to the user as notifications."""


class ExoAIError(Exception):
    """Base class for user-visible failures."""


class NoDataError(ExoAIError):
    """An analysis was requested with nothing loaded."""


class FileParseError(ExoAIError):
    """Uploaded file is malformed, empty, or missing a required column."""


class ClassificationError(ExoAIError):
    """Remote classifier call failed (HTTP status, network, or bad body)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
