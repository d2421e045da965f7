from typing import Any

from .._utils.constants import DEFAULT_ERROR_MESSAGE


class ApiError(Exception):
    """Raised when a request does not complete successfully.

    Network failures, non-success status codes and server error bodies are all
    normalized into this one type.

    Attributes:
        status: The HTTP status code (503 when no response was received).
        status_text: The reason phrase that came with the status code.
        message: Human-readable description of the failure.
        details: Structured error details reported by the server, if any.
    """

    def __init__(
        self,
        status: int,
        status_text: str,
        message: str = DEFAULT_ERROR_MESSAGE,
    ) -> None:
        self.status = status
        self.status_text = status_text
        self.message = message
        self.details: Any | None = None
        self._unauthorized = status == 401
        super().__init__(message)

    @property
    def unauthorized(self) -> bool:
        """Whether the server answered with 401 Unauthorized."""
        return self._unauthorized

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"ApiError(status={self.status!r}, status_text={self.status_text!r}, "
            f"message={self.message!r})"
        )


class BaseUrlMissingError(Exception):
    def __init__(
        self,
        message="Base URL required. Pass base_url explicitly or set the GEARWORKS_BASE_URL environment variable.",
    ):
        self.message = message
        super().__init__(self.message)
