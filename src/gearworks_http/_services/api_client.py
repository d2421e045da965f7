from typing import Any, Mapping, Optional

from httpx._types import FileTypes, QueryParamTypes

from .._config import ClientConfig
from .._utils._request_spec import (
    FileRequestData,
    ProgressCallback,
    RequestData,
    RequestMethod,
)
from ._base_service import BaseService, RequestExecutor
from ._dispatcher import Dispatcher
from ._error_parser import ErrorParser


def _options(
    query: Optional[QueryParamTypes],
    on_upload_progress: Optional[ProgressCallback],
    on_download_progress: Optional[ProgressCallback],
) -> FileRequestData:
    options = FileRequestData()
    if query is not None:
        options["query"] = query
    if on_upload_progress is not None:
        options["on_upload_progress"] = on_upload_progress
    if on_download_progress is not None:
        options["on_download_progress"] = on_download_progress
    return options


class ApiClient:
    """Low-level client for sending requests to any endpoint of an API.

    Useful when no dedicated client exists for an API. It does not inherit the
    request pipeline: it forwards every call to a :class:`RequestExecutor`,
    by default a :class:`BaseService` built from the given config.

    Example:
        ```python
        client = ApiClient(ClientConfig(base_url="https://example.com/api"))
        webhooks = client.request("/webhooks", "GET", query={"limit": 10})
        ```
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        error_parser: Optional[ErrorParser] = None,
        dispatcher: Optional[Dispatcher] = None,
        executor: Optional[RequestExecutor] = None,
    ) -> None:
        self._executor = executor or BaseService(
            config, error_parser=error_parser, dispatcher=dispatcher
        )

    @property
    def executor(self) -> RequestExecutor:
        return self._executor

    def request(
        self,
        path: str,
        method: RequestMethod = "GET",
        *,
        body: Any = None,
        query: Optional[QueryParamTypes] = None,
        on_upload_progress: Optional[ProgressCallback] = None,
        on_download_progress: Optional[ProgressCallback] = None,
    ) -> Any:
        """Send a JSON request and return the deserialized response body.

        Raises:
            ApiError: If the request failed or the status code was not 2xx.
        """
        options = RequestData(
            **_options(query, on_upload_progress, on_download_progress)
        )
        if body is not None:
            options["body"] = body

        return self._executor.send_request(path, method, options)

    async def request_async(
        self,
        path: str,
        method: RequestMethod = "GET",
        *,
        body: Any = None,
        query: Optional[QueryParamTypes] = None,
        on_upload_progress: Optional[ProgressCallback] = None,
        on_download_progress: Optional[ProgressCallback] = None,
    ) -> Any:
        options = RequestData(
            **_options(query, on_upload_progress, on_download_progress)
        )
        if body is not None:
            options["body"] = body

        return await self._executor.send_request_async(path, method, options)

    def upload(
        self,
        path: str,
        files: Mapping[str, FileTypes],
        method: RequestMethod = "POST",
        *,
        query: Optional[QueryParamTypes] = None,
        on_upload_progress: Optional[ProgressCallback] = None,
        on_download_progress: Optional[ProgressCallback] = None,
    ) -> Any:
        """Upload files as a multipart form and return the deserialized body."""
        options = _options(query, on_upload_progress, on_download_progress)
        return self._executor.send_files(path, method, files, options)

    async def upload_async(
        self,
        path: str,
        files: Mapping[str, FileTypes],
        method: RequestMethod = "POST",
        *,
        query: Optional[QueryParamTypes] = None,
        on_upload_progress: Optional[ProgressCallback] = None,
        on_download_progress: Optional[ProgressCallback] = None,
    ) -> Any:
        options = _options(query, on_upload_progress, on_download_progress)
        return await self._executor.send_files_async(path, method, files, options)
