"""核心模块包。

纯函数的编码核心：类型识别、编码原语和能力矩阵分发，不涉及文件读写。
"""

from .classifier import data_uri, mime_prefix, tag_from_extension
from .engine import (
    CAPABILITY_MATRIX,
    UNSUPPORTED_ERRORS,
    EncodingEngine,
    decode_from_text,
    decompress_from_binary,
    encode_to_binary,
    encode_to_text,
    get_engine,
    resolve,
)
from .primitives import Base64Codec, HexCodec, Lz4BlockCodec, Z85Codec


__all__ = [
    "CAPABILITY_MATRIX",
    "UNSUPPORTED_ERRORS",
    "Base64Codec",
    "EncodingEngine",
    "HexCodec",
    "Lz4BlockCodec",
    "Z85Codec",
    "data_uri",
    "decode_from_text",
    "decompress_from_binary",
    "encode_to_binary",
    "encode_to_text",
    "get_engine",
    "mime_prefix",
    "resolve",
    "tag_from_extension",
]
