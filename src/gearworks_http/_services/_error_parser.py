import json
from logging import Logger, getLogger
from typing import Any, Mapping, Optional, Protocol, Union, runtime_checkable

from httpx import Response

from .._utils.constants import (
    LOGGER_NAME,
    NETWORK_ERROR_STATUS,
    NETWORK_ERROR_STATUS_TEXT,
)
from ..models.exceptions import ApiError

ErrorBody = Union[str, bytes, Mapping[str, Any], list[Any], None]


def _is_detail_entry(entry: Any) -> bool:
    if not isinstance(entry, Mapping):
        return False
    errors = entry.get("errors")
    return isinstance(errors, (list, tuple)) and all(
        isinstance(message, str) for message in errors
    )


@runtime_checkable
class ErrorParser(Protocol):
    """Turns a failed response into an ApiError.

    Implementations must always return an ApiError and never raise.
    """

    def parse_error_response(
        self, body: Any, response: Optional[Response]
    ) -> ApiError: ...


class DefaultErrorParser:
    """Parses error bodies shaped like ``{"message": ..., "details": [...]}``.

    ``details`` is expected to be a list of ``{"key": ..., "errors": [...]}``
    entries; when present, the joined errors become the message.
    """

    def __init__(self, logger: Optional[Logger] = None) -> None:
        self._logger = logger or getLogger(LOGGER_NAME)

    def parse_error_response(
        self, body: ErrorBody, response: Optional[Response]
    ) -> ApiError:
        if response is None:
            # Assume a network error occurred.
            return ApiError(NETWORK_ERROR_STATUS, NETWORK_ERROR_STATUS_TEXT)

        error = ApiError(response.status_code, response.reason_phrase)

        if body is None or body == "" or body == b"":
            return error

        if isinstance(body, (str, bytes)):
            try:
                parsed = json.loads(body)
            except ValueError:
                self._logger.warning(
                    f"Could not read response's error JSON: {body!r}"
                )
                text = body.decode(errors="replace") if isinstance(body, bytes) else body
                if text.strip():
                    error.message = text.strip()
                return error
        else:
            parsed = body

        if isinstance(parsed, str):
            if parsed:
                error.message = parsed
            return error

        if not isinstance(parsed, Mapping):
            return error

        details = parsed.get("details")
        if isinstance(details, list):
            if not all(_is_detail_entry(entry) for entry in details):
                self._logger.warning(
                    f"Could not read response's error details: {details!r}"
                )
                return error

            error.message = ", ".join(", ".join(entry["errors"]) for entry in details)
            error.details = details
        elif parsed.get("message") is not None:
            error.message = str(parsed["message"])

        return error
