#!/usr/bin/env python3
"""图像编码演示脚本。

展示 py_image_codec_mcp 库的核心功能，包括：
- 扩展名识别与 MIME 前缀
- 各编码方案的能力矩阵
- 读取文件并编码为文本、再解码写回
- 生成内联数据 URI
"""

import sys
from pathlib import Path

from py_image_codec_mcp import (
    EncodingEngine,
    EncodingVariant,
    ImageCodec,
    mime_prefix,
    tag_from_extension,
)
from py_image_codec_mcp.exceptions import ImageCodecError


def get_output_dir() -> Path:
    """获取输出目录 - 使用项目的 tmp 目录"""
    project_root = Path(__file__).parent.parent
    output_dir = project_root / "tmp" / "examples"
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def demo_classifier() -> None:
    print("🔍 扩展名识别:")
    for ext in ["png", "jpeg", "svg", "jpg", "bmp"]:
        tag = tag_from_extension(ext)
        try:
            prefix = mime_prefix(tag)
        except ImageCodecError as e:
            prefix = f"❌ {e}"
        print(f"  - {ext:5} -> {tag.name:12} {prefix}")


def demo_capabilities() -> None:
    print("\n📋 能力矩阵:")
    for variant, row in EncodingEngine().capabilities().items():
        cells = ", ".join(f"{op}={state}" for op, state in row.items())
        print(f"  - {variant:13} {cells}")


def demo_round_trip(image_path: Path) -> None:
    print(f"\n🔁 往返编码: {image_path}")
    codec = ImageCodec(max_file_size=10 * 1024 * 1024)
    output_dir = get_output_dir()

    for variant in (EncodingVariant.HEX, EncodingVariant.BASE64, EncodingVariant.LZ4_BASE64):
        result = codec.encode_file(image_path, variant)
        print(f"  - {result.get_summary()}")
        if not result.success:
            continue

        target = output_dir / f"{image_path.stem}_{variant.value}{image_path.suffix}"
        decoded = codec.decode_to_file(result.text, target, variant)
        print(f"    ↳ {decoded.get_summary()}")

    try:
        uri = codec.to_data_uri(codec.read(image_path))
        print(f"  - data URI: {uri[:60]}...")
    except ImageCodecError as e:
        print(f"  - data URI 失败: {e}")


def main() -> None:
    demo_classifier()
    demo_capabilities()
    if len(sys.argv) > 1:
        demo_round_trip(Path(sys.argv[1]))
    else:
        print("\n💡 传入图片路径可演示往返编码: python examples/encode_demo.py logo.png")


if __name__ == "__main__":
    main()
