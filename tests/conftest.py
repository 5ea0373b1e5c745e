"""测试配置文件。

提供测试所需的fixtures和配置。
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
from PIL import Image, ImageDraw

from octosqueeze_client import OctoSqueeze
from octosqueeze_client.config import reset_config


TEST_API_KEY = "test-key-123"
TEST_ENDPOINT = "https://api.test/api/v1"


class RequestRecorder:
    """记录所有请求并按预设返回响应或抛出异常的 httpx 传输"""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: Any = {"data": {}}
        self.raw: bytes | None = None
        self.error: Exception | None = None

    def respond(self, body: Any = None, status_code: int = 200) -> "RequestRecorder":
        self.body = body
        self.status_code = status_code
        self.raw = None
        return self

    def respond_raw(self, content: bytes, status_code: int = 200) -> "RequestRecorder":
        self.raw = content
        self.status_code = status_code
        return self

    def fail(self, error: Exception) -> "RequestRecorder":
        self.error = error
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """隔离环境变量对全局配置的影响"""
    for name in (
        "OCTOSQUEEZE_ENDPOINT",
        "OCTOSQUEEZE_API_KEY",
        "OCTOSQUEEZE_TIMEOUT",
        "OCTOSQUEEZE_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def recorder() -> RequestRecorder:
    """请求记录器fixture"""
    return RequestRecorder()


@pytest.fixture
def make_client(recorder) -> Callable[..., OctoSqueeze]:
    """创建使用模拟传输的客户端"""
    created: list[OctoSqueeze] = []

    def factory(api_key: str = TEST_API_KEY, **transport_config: Any) -> OctoSqueeze:
        client = OctoSqueeze(api_key).set_endpoint_uri(TEST_ENDPOINT)
        client.set_http_client_config(
            {"transport": httpx.MockTransport(recorder.handler), **transport_config}
        )
        created.append(client)
        return client

    yield factory

    for client in created:
        client.close()


@pytest.fixture
def api_client(make_client) -> OctoSqueeze:
    """默认测试客户端"""
    return make_client()


@pytest.fixture
def sample_image(tmp_path: Path) -> Path:
    """创建一张小 PNG 测试图片"""
    image_path = tmp_path / "photo.png"
    img = Image.new("RGB", (64, 48), color="white")
    draw = ImageDraw.Draw(img)
    for i in range(6):
        draw.rectangle([i * 10, i * 8, i * 10 + 12, i * 8 + 10], fill=(i * 40, 80, 200))
    img.save(image_path, "PNG")
    return image_path


@pytest.fixture
def sample_text_file(tmp_path: Path) -> Path:
    """创建一个非图片文件"""
    path = tmp_path / "notes.bin"
    path.write_bytes(b"\x00\x01not an image")
    return path
