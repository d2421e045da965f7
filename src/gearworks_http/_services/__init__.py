from ._base_service import BaseService, RequestExecutor, is_okay
from ._dispatcher import DispatchResult, Dispatcher, HttpxDispatcher, decode_body
from ._error_parser import DefaultErrorParser, ErrorParser
from .api_client import ApiClient

__all__ = [
    "ApiClient",
    "BaseService",
    "DefaultErrorParser",
    "DispatchResult",
    "Dispatcher",
    "ErrorParser",
    "HttpxDispatcher",
    "RequestExecutor",
    "decode_body",
    "is_okay",
]
