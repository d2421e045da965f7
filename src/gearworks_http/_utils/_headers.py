from logging import Logger, getLogger
from typing import Mapping, Optional

from .constants import LOGGER_NAME


def build_headers(
    headers: Mapping[str, Optional[str]], logger: Optional[Logger] = None
) -> dict[str, str]:
    """Copy the given headers, leaving out the ones without a value.

    A ``None`` value cannot be sent by httpx, so the entry is dropped and a
    warning is logged instead of failing the request.

    Args:
        headers: Header names mapped to their values.
        logger: Logger receiving the warnings. Defaults to the package logger.

    Returns:
        dict[str, str]: The headers that can be sent.
    """
    logger = logger or getLogger(LOGGER_NAME)
    result: dict[str, str] = {}

    for key, value in headers.items():
        if value is None:
            logger.warning(
                f"Header value for key {key} is None. {key} header will not be included in request."
            )
            continue

        result[key] = value

    return result
