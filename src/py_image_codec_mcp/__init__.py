"""图像文件读取与编码库。

按扩展名识别图像类型，并通过 hex、base64、lz4、z85 等编码方案
把原始字节编码为文本或二进制。
"""

__version__ = "0.1.0"
__author__ = "crper"
__description__ = "图像文件读取、类型识别与文本/二进制编码"

# 核心功能导出
from .codec import ImageCodec, encode_file
from .core.classifier import mime_prefix, tag_from_extension
from .core.engine import (
    EncodingEngine,
    decode_from_text,
    decompress_from_binary,
    encode_to_binary,
    encode_to_text,
)
from .engine.reader import ImageReader
from .models import EncodingVariant, ImageRecord, MediaTag


__all__ = [
    "EncodingEngine",
    "EncodingVariant",
    "ImageCodec",
    "ImageReader",
    "ImageRecord",
    "MediaTag",
    "decode_from_text",
    "decompress_from_binary",
    "encode_file",
    "encode_to_binary",
    "encode_to_text",
    "get_version",
    "mime_prefix",
    "tag_from_extension",
]


def get_version() -> str:
    """获取版本号。"""
    return __version__
