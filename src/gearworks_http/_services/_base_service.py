from logging import Logger, getLogger
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from httpx import HTTPError, InvalidURL, Response
from httpx._types import FileTypes

from .._config import ClientConfig
from .._utils._headers import build_headers
from .._utils._paths import join_uri_paths
from .._utils._request_spec import (
    FileRequestData,
    RequestData,
    RequestMethod,
    RequestSpec,
)
from .._utils.constants import CONTENT_TYPE_JSON, HEADER_CONTENT_TYPE, LOGGER_NAME
from ..models.exceptions import ApiError
from ._dispatcher import DispatchResult, Dispatcher, HttpxDispatcher
from ._error_parser import DefaultErrorParser, ErrorParser

# Unserializable bodies and unencodable headers fail while httpx builds the
# request; they are reported like a failed dispatch.
_DISPATCH_ERRORS = (HTTPError, InvalidURL, TypeError, ValueError)


def is_okay(response: Optional[Response]) -> bool:
    """Indicates whether the request was a success or not (between 200-300)."""
    return response is not None and 200 <= response.status_code < 300


def _is_file_like(value: Any) -> bool:
    if isinstance(value, tuple) and len(value) >= 2:
        value = value[1]
    return callable(getattr(value, "read", None))


@runtime_checkable
class RequestExecutor(Protocol):
    """The request pipeline a concrete client depends on."""

    def send_request(
        self, path: str, method: RequestMethod, config: Optional[RequestData] = None
    ) -> Any: ...

    async def send_request_async(
        self, path: str, method: RequestMethod, config: Optional[RequestData] = None
    ) -> Any: ...

    def send_files(
        self,
        path: str,
        method: RequestMethod,
        files: Mapping[str, FileTypes],
        config: Optional[FileRequestData] = None,
    ) -> Any: ...

    async def send_files_async(
        self,
        path: str,
        method: RequestMethod,
        files: Mapping[str, FileTypes],
        config: Optional[FileRequestData] = None,
    ) -> Any: ...


class BaseService:
    """Base class for typed HTTP API clients.

    Concrete clients only declare their endpoints and call :meth:`send_request`
    or :meth:`send_files`. Headers, URL joining, dispatching and error
    normalization are handled here.

    Every failure is raised as an :class:`ApiError`: non-success responses are
    passed through :meth:`parse_error_response`, and network failures become a
    503 error. The error parsing and the transport can be replaced either by
    overriding the methods in a subclass or by passing an ``error_parser`` or a
    ``dispatcher`` to the constructor.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        error_parser: Optional[ErrorParser] = None,
        dispatcher: Optional[Dispatcher] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._logger = logger or getLogger(LOGGER_NAME)
        self._config = config
        self._error_parser = error_parser or DefaultErrorParser(self._logger)
        self._dispatcher = dispatcher or HttpxDispatcher(config)

        self._logger.debug(f"BASE URL: {self._config.base_url}")

        super().__init__()

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def config(self) -> ClientConfig:
        return self._config

    def join_uri_paths(self, *paths: str) -> str:
        """Joins URI paths into one single string, replacing bad slashes.

        The result never starts with two or more slashes nor ends in
        ``/.extension``.
        """
        return join_uri_paths(*paths)

    def parse_error_response(
        self, body: Any, response: Optional[Response]
    ) -> ApiError:
        """Parses the error response of a request and returns a new ApiError.

        Only called when a response does not indicate success, or when no
        response was received at all. Override it (or pass an ``error_parser``)
        to support custom error bodies.

        Args:
            body: The deserialized response body. May be a string, a mapping or
                None.
            response: The httpx response, or None on network failure.

        Returns:
            ApiError: The error to raise.
        """
        return self._error_parser.parse_error_response(body, response)

    def _prepare(
        self,
        path: str,
        method: RequestMethod,
        options: Mapping[str, Any],
        *,
        files: Optional[Mapping[str, FileTypes]] = None,
    ) -> RequestSpec:
        headers = build_headers(self._config.headers, self._logger)
        url = self.join_uri_paths(self._config.base_url, path)

        if files is not None:
            for key, file in files.items():
                if not _is_file_like(file):
                    self._logger.warning(
                        f"send_files has detected a value that wasn't a file "
                        f"for key {key}. This may cause problems."
                    )

            # httpx sets the multipart Content-Type along with its boundary.
            return RequestSpec.from_options(
                method, url, headers, options, files=dict(files)
            )

        body = options.get("body")
        if body is not None:
            headers[HEADER_CONTENT_TYPE] = CONTENT_TYPE_JSON

        return RequestSpec.from_options(method, url, headers, options, json=body)

    def _complete(self, result: DispatchResult) -> Any:
        if not is_okay(result.response):
            raise self.parse_error_response(result.body, result.response)

        return result.body

    def _network_error(self, spec: RequestSpec, e: Exception) -> ApiError:
        self._logger.warning(
            f"There was a problem with the fetch operation for {spec.url}: {e!r}"
        )
        return self.parse_error_response(None, None)

    def _execute(self, spec: RequestSpec) -> Any:
        self._logger.debug(f"Request: {spec.method} {spec.url}")
        self._logger.debug(f"HEADERS: {spec.headers}")

        try:
            result = self._dispatcher.dispatch(spec)
        except _DISPATCH_ERRORS as e:
            raise self._network_error(spec, e) from e

        return self._complete(result)

    async def _execute_async(self, spec: RequestSpec) -> Any:
        self._logger.debug(f"Request: {spec.method} {spec.url}")
        self._logger.debug(f"HEADERS: {spec.headers}")

        try:
            result = await self._dispatcher.dispatch_async(spec)
        except _DISPATCH_ERRORS as e:
            raise self._network_error(spec, e) from e

        return self._complete(result)

    def send_request(
        self, path: str, method: RequestMethod, config: Optional[RequestData] = None
    ) -> Any:
        """Sends a request to the target URL, parsing the response as JSON.

        Args:
            path: The endpoint that the request should be sent to. Will be
                combined with the base URL.
            method: Method to use for the request. Must be upper-case.
            config: Request options: the JSON ``body``, the ``query`` mapping
                and the progress callbacks.

        Returns:
            Any: The deserialized response body.

        Raises:
            ApiError: If the request failed or the status code was not 2xx.
        """
        return self._execute(self._prepare(path, method, config or {}))

    async def send_request_async(
        self, path: str, method: RequestMethod, config: Optional[RequestData] = None
    ) -> Any:
        """Asynchronous version of :meth:`send_request`."""
        return await self._execute_async(self._prepare(path, method, config or {}))

    def send_files(
        self,
        path: str,
        method: RequestMethod,
        files: Mapping[str, FileTypes],
        config: Optional[FileRequestData] = None,
    ) -> Any:
        """Like send_request, but specifically meant for uploading files.

        Args:
            path: The endpoint that the request should be sent to. Will be
                combined with the base URL.
            method: Method to use for the request. Must be upper-case.
            files: Form field names mapped to the files being uploaded, e.g.
                ``{"file_1": open("a.png", "rb")}``.
            config: Request options: the ``query`` mapping and the progress
                callbacks.

        Returns:
            Any: The deserialized response body.

        Raises:
            ApiError: If the request failed or the status code was not 2xx.
        """
        spec = self._prepare(path, method, config or {}, files=files)
        return self._execute(spec)

    async def send_files_async(
        self,
        path: str,
        method: RequestMethod,
        files: Mapping[str, FileTypes],
        config: Optional[FileRequestData] = None,
    ) -> Any:
        """Asynchronous version of :meth:`send_files`."""
        spec = self._prepare(path, method, config or {}, files=files)
        return await self._execute_async(spec)

    def close(self) -> None:
        """Close the synchronous transport.

        The asynchronous transport can only be closed from a running loop; use
        :meth:`aclose` (or ``async with``) once the async methods were used.
        """
        self._dispatcher.close()

    async def aclose(self) -> None:
        """Close both the synchronous and the asynchronous transports."""
        await self._dispatcher.aclose()

    def __enter__(self) -> "BaseService":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    async def __aenter__(self) -> "BaseService":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
