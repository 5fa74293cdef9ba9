"""图像类型识别模块。

根据扩展名确定媒体类型，并给出内联数据使用的 MIME 前缀。
"""

from ..exceptions import UnsupportedImageFormatError
from ..models.constants import ImageFormats, MediaTag


def tag_from_extension(extension: str) -> MediaTag:
    """扩展名 -> 媒体类型

    精确匹配，区分大小写；无法识别时返回 UNSUPPORTED，从不抛出异常。

    Examples:
        >>> tag_from_extension("png")
        <MediaTag.PNG: 'png'>
        >>> tag_from_extension("PNG")
        <MediaTag.UNSUPPORTED: 'unsupported'>
    """
    return ImageFormats.EXTENSIONS.get(extension, MediaTag.UNSUPPORTED)


def mime_prefix(tag: MediaTag) -> str:
    """媒体类型 -> ``data:image/<subtype>`` 前缀

    Raises:
        UnsupportedImageFormatError: 该类型没有 MIME 映射时
    """
    try:
        return ImageFormats.MIME_PREFIXES[tag]
    except KeyError:
        raise UnsupportedImageFormatError(tag) from None


def data_uri(tag: MediaTag, base64_text: str) -> str:
    """拼接完整的内联数据 URI"""
    return f"{mime_prefix(tag)};base64,{base64_text}"
