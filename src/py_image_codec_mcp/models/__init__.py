"""数据模型包。

定义图像类型、编码方案、记录和结果等数据结构。
"""

from .codec_result import (
    BaseResult,
    BatchEncodeResult,
    DecodeResult,
    EncodeResult,
)
from .constants import (
    ImageFormats,
    MediaTag,
    ReaderLimits,
    SizeUnits,
)
from .encoding import (
    COMPOSITIONS,
    Composition,
    Compressor,
    EncodingVariant,
    Feature,
    Operation,
    TextCodec,
)
from .image_record import ImageRecord
from .reader_config import ReaderConfig


__all__ = [
    "COMPOSITIONS",
    "BaseResult",
    "BatchEncodeResult",
    "Composition",
    "Compressor",
    "DecodeResult",
    "EncodeResult",
    "EncodingVariant",
    "Feature",
    "ImageFormats",
    "ImageRecord",
    "MediaTag",
    "Operation",
    "ReaderConfig",
    "ReaderLimits",
    "SizeUnits",
    "TextCodec",
]
