#!/usr/bin/env python3
"""OctoSqueeze 客户端演示脚本。

展示客户端的核心功能，包括：
- URL 批量压缩
- 本地文件上传压缩
- 任务状态与用量查询
- 下载压缩结果

运行前设置环境变量 OCTOSQUEEZE_API_KEY。
"""

import sys
from pathlib import Path

from octosqueeze_client import CompressionItem, OctoSqueeze
from octosqueeze_client.config import get_config


def main() -> int:
    api_key = get_config().client.API_KEY
    if not api_key:
        print("⚠️ 请先设置 OCTOSQUEEZE_API_KEY")
        return 1

    with OctoSqueeze.client(api_key) as client:
        client.set_options({"mode": "balanced", "formats": ["webp"]})

        usage = client.get_usage()
        print(f"📊 用量: {usage.to_dict()}")

        batch = client.squeeze_url(
            [
                CompressionItem(url="https://picsum.photos/800", image_id=1),
                CompressionItem(url="https://picsum.photos/600", name="small.jpg"),
            ]
        )
        if not batch.state:
            print(f"❌ 批量压缩失败: {batch.error} (code={batch.code})")
            return 1
        print(f"✅ 提交 {len(batch.items)} 个条目")

        if len(sys.argv) > 1:
            result = client.compress_file(Path(sys.argv[1]))
            print(f"📁 文件压缩: {result.to_dict()}")

            data = result.data if result.state else {}
            if isinstance(data, dict) and (url := data.get("download_url")):
                content = client.download(url)
                if content is not None:
                    out = Path(sys.argv[1]).with_suffix(".compressed.webp")
                    out.write_bytes(content)
                    print(f"💾 已保存: {out}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
