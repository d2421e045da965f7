import io
import json
from typing import Any, Mapping, Optional

import pytest
from pytest_httpx import HTTPXMock

from gearworks_http import (
    ApiClient,
    ApiError,
    BaseService,
    ClientConfig,
    FileRequestData,
    ProgressEvent,
    RequestData,
    RequestExecutor,
)


@pytest.fixture
def client(config: ClientConfig) -> ApiClient:
    return ApiClient(config)


class RecordingExecutor:
    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def send_request(
        self, path: str, method: str, config: Optional[RequestData] = None
    ) -> Any:
        self.calls.append(("send_request", path, method, config))
        return {"sent": path}

    async def send_request_async(
        self, path: str, method: str, config: Optional[RequestData] = None
    ) -> Any:
        self.calls.append(("send_request_async", path, method, config))
        return {"sent": path}

    def send_files(
        self,
        path: str,
        method: str,
        files: Mapping[str, Any],
        config: Optional[FileRequestData] = None,
    ) -> Any:
        self.calls.append(("send_files", path, method, files, config))
        return {"uploaded": list(files)}

    async def send_files_async(
        self,
        path: str,
        method: str,
        files: Mapping[str, Any],
        config: Optional[FileRequestData] = None,
    ) -> Any:
        self.calls.append(("send_files_async", path, method, files, config))
        return {"uploaded": list(files)}


class TestApiClient:
    def test_default_executor(self, client: ApiClient):
        assert isinstance(client.executor, BaseService)
        assert isinstance(client.executor, RequestExecutor)

    def test_request(self, httpx_mock: HTTPXMock, client: ApiClient, base_url: str):
        httpx_mock.add_response(
            url=f"{base_url}/api/v1/webhooks?limit=5", method="POST", json={"id": 1}
        )

        response = client.request(
            "/api/v1/webhooks", "POST", body={"address": "x"}, query={"limit": 5}
        )

        assert response == {"id": 1}

        sent_request = httpx_mock.get_request()
        assert sent_request is not None
        assert json.loads(sent_request.read()) == {"address": "x"}
        assert sent_request.headers["content-type"] == "application/json"

    def test_request_defaults_to_get(
        self, httpx_mock: HTTPXMock, client: ApiClient, base_url: str
    ):
        httpx_mock.add_response(url=f"{base_url}/status", method="GET", json="ok")

        assert client.request("/status") == "ok"

    def test_request_error(
        self, httpx_mock: HTTPXMock, client: ApiClient, base_url: str
    ):
        httpx_mock.add_response(
            url=f"{base_url}/status", status_code=403, json={"message": "Forbidden"}
        )

        with pytest.raises(ApiError) as exc_info:
            client.request("/status")

        assert exc_info.value.status == 403
        assert exc_info.value.message == "Forbidden"

    def test_upload(self, httpx_mock: HTTPXMock, client: ApiClient, base_url: str):
        httpx_mock.add_response(url=f"{base_url}/files", method="POST", json={"ok": 1})
        events: list[ProgressEvent] = []

        response = client.upload(
            "/files",
            {"file": ("a.txt", io.BytesIO(b"abc"), "text/plain")},
            on_download_progress=events.append,
        )

        assert response == {"ok": 1}
        assert events

    @pytest.mark.asyncio
    async def test_request_async(
        self, httpx_mock: HTTPXMock, client: ApiClient, base_url: str
    ):
        httpx_mock.add_response(url=f"{base_url}/things/1", method="PUT", json={})

        assert await client.request_async("/things/1", "PUT", body={"a": 1}) == {}

    @pytest.mark.asyncio
    async def test_upload_async(
        self, httpx_mock: HTTPXMock, client: ApiClient, base_url: str
    ):
        httpx_mock.add_response(url=f"{base_url}/files", method="POST", json={"ok": 1})

        assert await client.upload_async("/files", {"file": io.BytesIO(b"abc")}) == {
            "ok": 1
        }

    class TestComposedExecutor:
        def test_forwards_requests(self, config: ClientConfig):
            executor = RecordingExecutor()
            client = ApiClient(config, executor=executor)

            def progress(event: ProgressEvent) -> None:
                pass

            assert client.request(
                "/a", "DELETE", query={"force": True}, on_upload_progress=progress
            ) == {"sent": "/a"}
            assert executor.calls == [
                (
                    "send_request",
                    "/a",
                    "DELETE",
                    {"query": {"force": True}, "on_upload_progress": progress},
                )
            ]

        def test_omits_unset_options(self, config: ClientConfig):
            executor = RecordingExecutor()
            client = ApiClient(config, executor=executor)

            client.request("/a")
            client.upload("/b", {"file": b"x"})

            assert executor.calls == [
                ("send_request", "/a", "GET", {}),
                ("send_files", "/b", "POST", {"file": b"x"}, {}),
            ]

        @pytest.mark.asyncio
        async def test_forwards_async_requests(self, config: ClientConfig):
            executor = RecordingExecutor()
            client = ApiClient(config, executor=executor)

            await client.request_async("/a", "POST", body={"x": 1})
            await client.upload_async("/b", {"file": b"x"}, "PUT")

            assert executor.calls == [
                ("send_request_async", "/a", "POST", {"body": {"x": 1}}),
                ("send_files_async", "/b", "PUT", {"file": b"x"}, {}),
            ]
