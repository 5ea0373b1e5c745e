"""集成测试。

测试 MCP 服务器工具与客户端的端到端协作。
"""

from pathlib import Path

import pytest

from octosqueeze_client import __main__ as entry
from octosqueeze_client import mcp_server
from octosqueeze_client.config import reset_config
from tests.conftest import TEST_API_KEY


@pytest.fixture
def server_client(api_client):
    """把模拟客户端注入 MCP 服务器"""
    mcp_server.set_client(api_client)
    yield api_client
    mcp_server.set_client(None)


class TestMCPServer:
    """MCP服务器功能测试"""

    def test_mcp_server_imports(self):
        """测试MCP服务器模块导入"""
        assert mcp_server.mcp is not None

    @pytest.mark.parametrize(
        "tool_name",
        ["compress_url", "compress_file", "get_status", "get_usage", "download"],
    )
    def test_mcp_tools(self, tool_name):
        """测试 MCP 工具注册"""
        tool = getattr(mcp_server, tool_name)
        assert hasattr(tool, "name")
        assert tool.name == tool_name

    def test_missing_api_key(self):
        """测试未配置 API 密钥时返回配置错误"""
        mcp_server.set_client(None)

        result = mcp_server.get_usage.fn()

        assert result["state"] is False
        assert result["error_type"] == "config"
        assert "OCTOSQUEEZE_API_KEY" in result["error"]

    def test_client_from_environment(self, monkeypatch):
        """测试从环境变量创建全局客户端"""
        monkeypatch.setenv("OCTOSQUEEZE_API_KEY", "env-key")
        reset_config()
        mcp_server.set_client(None)

        client = mcp_server.get_client()

        assert client is not None
        assert client.api_key == "env-key"
        assert mcp_server.get_client() is client
        mcp_server.set_client(None)


class TestEndToEnd:
    """端到端核心测试"""

    def test_compress_url_tool(self, server_client, recorder):
        """测试 URL 压缩工具"""
        recorder.respond({"data": {"items": [{"id": 1}], "usage": {"count": 1}}})

        result = mcp_server.compress_url.fn(
            "https://img.test/a.jpg", mode="balanced", formats=["webp"]
        )

        assert result == {"state": True, "items": [{"id": 1}], "usage": {"count": 1}}
        assert recorder.last_json()["items"] == [
            {
                "url": "https://img.test/a.jpg",
                "options": {"mode": "balanced", "formats": ["webp"]},
            }
        ]

    def test_compress_file_tool_missing_file(self, server_client, recorder):
        """测试文件压缩工具处理不存在的文件"""
        result = mcp_server.compress_file.fn("/does/not/exist.png")

        assert result == {"state": False, "error": "File not found: /does/not/exist.png"}
        assert recorder.requests == []

    def test_compress_file_tool(self, server_client, recorder, sample_image):
        """测试文件压缩工具"""
        recorder.respond({"data": {"id": "job-1"}})

        result = mcp_server.compress_file.fn(str(sample_image), formats=["avif"])

        assert result == {"state": True, "data": {"id": "job-1"}}
        assert b'name="format"\r\n\r\navif' in recorder.last.content

    def test_status_and_usage_tools(self, server_client, recorder):
        """测试状态与用量工具"""
        recorder.respond({"data": {"status": "done"}})
        assert mcp_server.get_status.fn("job-1") == {
            "state": True,
            "data": {"status": "done"},
        }

        recorder.respond({}, status_code=500)
        result = mcp_server.get_usage.fn()
        assert result["state"] is False
        assert result["code"] == 500

    def test_download_tool_saves_file(self, server_client, recorder, tmp_path: Path):
        """测试下载工具保存文件"""
        recorder.respond_raw(b"x" * 2048)
        output = tmp_path / "out" / "photo.webp"

        result = mcp_server.download.fn("https://cdn.test/photo.webp", str(output))

        assert result["state"] is True
        assert result["size"] == 2048
        assert result["size_human"] == "2.0 KiB"
        assert output.read_bytes() == b"x" * 2048
        assert recorder.last.headers["Authorization"] == f"Bearer {TEST_API_KEY}"

    def test_download_tool_failure(self, server_client, recorder, tmp_path: Path):
        """测试下载失败时不写文件"""
        recorder.respond_raw(b"gone", status_code=410)
        output = tmp_path / "photo.webp"

        result = mcp_server.download.fn("https://cdn.test/photo.webp", str(output))

        assert result["state"] is False
        assert result["error_type"] == "download"
        assert not output.exists()


class TestEntryPoint:
    """命令行入口测试"""

    def test_version_flag(self, monkeypatch, capsys):
        """测试 --version 输出版本号"""
        from octosqueeze_client import __version__

        monkeypatch.setattr("sys.argv", ["octosqueeze-mcp", "--version"])

        entry.main()

        assert capsys.readouterr().out.strip() == f"octosqueeze-client {__version__}"
