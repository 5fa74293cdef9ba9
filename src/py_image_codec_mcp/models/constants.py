"""图像类型相关常量定义。

固定的图像媒体类型集合，以及扩展名、MIME 前缀的映射表。
"""

from enum import Enum
from typing import Final


class MediaTag(str, Enum):
    """图像媒体类型枚举

    封闭集合，UNSUPPORTED 表示无法识别的扩展名。
    """

    SVG = "svg"
    PNG = "png"
    JPEG = "jpeg"
    GIF = "gif"
    AVIF = "avif"
    WEBP = "webp"
    UNSUPPORTED = "unsupported"

    @classmethod
    def default(cls) -> "MediaTag":
        """默认类型为 SVG"""
        return cls.SVG


class ImageFormats:
    """图像格式映射表"""

    # 扩展名 -> 媒体类型，严格区分大小写
    EXTENSIONS: Final[dict[str, MediaTag]] = {
        "svg": MediaTag.SVG,
        "png": MediaTag.PNG,
        "jpeg": MediaTag.JPEG,
        "gif": MediaTag.GIF,
        "avif": MediaTag.AVIF,
        "webp": MediaTag.WEBP,
    }

    # 媒体类型 -> 内联数据 MIME 前缀
    MIME_PREFIXES: Final[dict[MediaTag, str]] = {
        MediaTag.SVG: "data:image/svg+xml",
        MediaTag.PNG: "data:image/png",
        MediaTag.JPEG: "data:image/jpeg",
        MediaTag.GIF: "data:image/gif",
        MediaTag.AVIF: "data:image/avif",
        MediaTag.WEBP: "data:image/webp",
    }

    @classmethod
    def get_supported_extensions(cls) -> set[str]:
        """获取所有可识别的扩展名"""
        return set(cls.EXTENSIONS)


class SizeUnits:
    """字节单位换算"""

    BYTE: Final[int] = 1
    KIB: Final[int] = 1024
    MIB: Final[int] = 1024 * 1024
    GIB: Final[int] = 1024 * 1024 * 1024


class ReaderLimits:
    """读取相关限制"""

    # 流式读取缓冲区大小 (字节)
    READ_CHUNK_SIZE: Final[int] = 1024

    # 默认最大文件大小 (字节)
    DEFAULT_MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10MiB

    # lz4 块头部长度 (小端 u32)
    LZ4_SIZE_HEADER: Final[int] = 4
