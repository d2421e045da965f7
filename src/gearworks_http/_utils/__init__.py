from ._headers import build_headers
from ._logs import setup_logging
from ._paths import join_uri_paths
from ._request_spec import (
    FileRequestData,
    ProgressCallback,
    ProgressEvent,
    RequestData,
    RequestMethod,
    RequestSpec,
)

__all__ = [
    "build_headers",
    "join_uri_paths",
    "setup_logging",
    "FileRequestData",
    "ProgressCallback",
    "ProgressEvent",
    "RequestData",
    "RequestMethod",
    "RequestSpec",
]
