import json
from dataclasses import dataclass
from logging import getLogger
from typing import Any, AsyncIterator, Iterator, Optional, Protocol, runtime_checkable

from httpx import AsyncClient, Client, Request, Response

from .._config import ClientConfig
from .._utils._request_spec import ProgressCallback, ProgressEvent, RequestSpec
from .._utils.constants import LOGGER_NAME, UPLOAD_CHUNK_SIZE


@dataclass
class DispatchResult:
    response: Response
    body: Any


@runtime_checkable
class Dispatcher(Protocol):
    """Sends a prepared request over the wire.

    Every HTTP status is returned as a response. Implementations raise an
    ``httpx.HTTPError`` only when no response could be obtained.
    """

    def dispatch(self, spec: RequestSpec) -> DispatchResult: ...

    async def dispatch_async(self, spec: RequestSpec) -> DispatchResult: ...

    def close(self) -> None: ...

    async def aclose(self) -> None: ...


def decode_body(content: bytes, encoding: Optional[str] = None) -> Any:
    """Deserialize a response body: JSON when possible, text otherwise."""
    if not content:
        return None

    text = content.decode(encoding or "utf-8", errors="replace")
    try:
        return json.loads(text)
    except ValueError:
        return text


def _content_length(response: Response) -> Optional[int]:
    try:
        return int(response.headers["Content-Length"])
    except (KeyError, ValueError):
        return None


def _downloaded(response: Response, decoded: int) -> int:
    # Content-Length counts encoded bytes, so report those when httpx tracked them.
    return response.num_bytes_downloaded or decoded


def _upload_chunks(content: bytes, callback: ProgressCallback) -> Iterator[bytes]:
    total = len(content)
    for start in range(0, total, UPLOAD_CHUNK_SIZE):
        chunk = content[start : start + UPLOAD_CHUNK_SIZE]
        yield chunk
        callback(ProgressEvent(loaded=start + len(chunk), total=total))


async def _aupload_chunks(
    content: bytes, callback: ProgressCallback
) -> AsyncIterator[bytes]:
    for chunk in _upload_chunks(content, callback):
        yield chunk


class HttpxDispatcher:
    """Dispatches requests through httpx.

    One synchronous and one asynchronous client are created per instance. httpx
    never raises on a status code unless asked to, so 4xx and 5xx responses come
    back like any other.
    """

    def __init__(self, config: ClientConfig) -> None:
        self._logger = getLogger(LOGGER_NAME)
        client_kwargs: dict[str, Any] = {
            "timeout": config.timeout,
            "follow_redirects": config.follow_redirects,
        }
        if config.proxy_url:
            client_kwargs["proxy"] = config.proxy_url

        self._client = Client(**client_kwargs)
        self._client_async = AsyncClient(**client_kwargs)
        self._async_used = False

    def _build_request(
        self, client: Any, spec: RequestSpec, is_async: bool
    ) -> Request:
        request = client.build_request(
            spec.method,
            spec.url,
            headers=spec.headers,
            params=spec.params,
            json=spec.json,
            files=spec.files,
        )

        if spec.on_upload_progress is None:
            return request

        # Re-send the encoded body in chunks; the Content-Length header of the
        # original request is kept so the body is not sent chunked.
        content = request.read()
        if not content:
            # Nothing to stream; a bodiless request must not be sent chunked.
            spec.on_upload_progress(ProgressEvent(loaded=0, total=0))
            return request

        chunks = (
            _aupload_chunks(content, spec.on_upload_progress)
            if is_async
            else _upload_chunks(content, spec.on_upload_progress)
        )
        return client.build_request(
            spec.method, request.url, headers=request.headers, content=chunks
        )

    def dispatch(self, spec: RequestSpec) -> DispatchResult:
        request = self._build_request(self._client, spec, is_async=False)

        if spec.on_download_progress is None:
            response = self._client.send(request)
            return DispatchResult(
                response, decode_body(response.content, response.encoding)
            )

        response = self._client.send(request, stream=True)
        try:
            total = _content_length(response)
            decoded = 0
            chunks = []
            for chunk in response.iter_bytes():
                decoded += len(chunk)
                chunks.append(chunk)
                loaded = _downloaded(response, decoded)
                spec.on_download_progress(ProgressEvent(loaded=loaded, total=total))
        finally:
            response.close()

        body = decode_body(b"".join(chunks), response.encoding)
        return DispatchResult(response, body)

    async def dispatch_async(self, spec: RequestSpec) -> DispatchResult:
        self._async_used = True
        request = self._build_request(self._client_async, spec, is_async=True)

        if spec.on_download_progress is None:
            response = await self._client_async.send(request)
            return DispatchResult(
                response, decode_body(response.content, response.encoding)
            )

        response = await self._client_async.send(request, stream=True)
        try:
            total = _content_length(response)
            decoded = 0
            chunks = []
            async for chunk in response.aiter_bytes():
                decoded += len(chunk)
                chunks.append(chunk)
                loaded = _downloaded(response, decoded)
                spec.on_download_progress(ProgressEvent(loaded=loaded, total=total))
        finally:
            await response.aclose()

        body = decode_body(b"".join(chunks), response.encoding)
        return DispatchResult(response, body)

    def close(self) -> None:
        if self._async_used and not self._client_async.is_closed:
            self._logger.warning(
                "The asynchronous client was used but is still open. "
                "Call aclose() to release it."
            )
        self._client.close()

    async def aclose(self) -> None:
        await self._client_async.aclose()
        self._client.close()
