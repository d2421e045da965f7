"""A standardized base client for typed HTTP APIs, backed by httpx."""

from ._config import ClientConfig, ProxyConfig
from ._services import (
    ApiClient,
    BaseService,
    DefaultErrorParser,
    DispatchResult,
    Dispatcher,
    ErrorParser,
    HttpxDispatcher,
    RequestExecutor,
    is_okay,
)
from ._utils import (
    FileRequestData,
    ProgressCallback,
    ProgressEvent,
    RequestData,
    RequestMethod,
    RequestSpec,
    join_uri_paths,
    setup_logging,
)
from .models import ApiError, BaseUrlMissingError

__all__ = [
    "ApiClient",
    "ApiError",
    "BaseService",
    "BaseUrlMissingError",
    "ClientConfig",
    "DefaultErrorParser",
    "DispatchResult",
    "Dispatcher",
    "ErrorParser",
    "FileRequestData",
    "HttpxDispatcher",
    "ProgressCallback",
    "ProgressEvent",
    "ProxyConfig",
    "RequestData",
    "RequestExecutor",
    "RequestMethod",
    "RequestSpec",
    "is_okay",
    "join_uri_paths",
    "setup_logging",
]
