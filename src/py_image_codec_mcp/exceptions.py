"""图像编码异常处理模块。

定义统一的异常类型和错误处理机制，包含原语错误转换装饰器。
"""

import binascii
import struct
from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

from lz4.block import LZ4BlockError

from .models.codec_result import BatchEncodeResult, EncodeResult
from .utils.logging_helpers import get_logger
from .utils.message_formatter import MessageFormatter


if TYPE_CHECKING:
    from .models.constants import MediaTag
    from .models.encoding import EncodingVariant, Feature, Operation


logger = get_logger()
T = TypeVar("T")


# 统一的异常类型
class ImageCodecError(Exception):
    """图像编码相关错误基类"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ImageCodecError):
    """参数验证错误"""

    pass


class UnsupportedImageFormatError(ImageCodecError):
    """媒体类型没有对应的 MIME 映射"""

    def __init__(self, tag: "MediaTag"):
        super().__init__(f"不支持的图像格式: {tag.value}")
        self.tag = tag


# ----------------------------------------------------------------------------
# 编码方案不支持的操作
# ----------------------------------------------------------------------------


class UnsupportedOperationError(ImageCodecError):
    """编码方案不支持该操作，携带变体和操作信息"""

    description = "不支持的操作"

    def __init__(self, variant: "EncodingVariant", operation: "Operation"):
        super().__init__(
            f"{self.description}: {variant.value} 不支持 {operation.value}"
        )
        self.variant = variant
        self.operation = operation


class UnsupportedTextEncodingError(UnsupportedOperationError):
    description = "不支持的文本编码"


class UnsupportedBinaryEncodingError(UnsupportedOperationError):
    description = "不支持的二进制编码"


class UnsupportedDecodeStringError(UnsupportedOperationError):
    description = "不支持的文本解码"


class UnsupportedDecodeBinaryError(UnsupportedOperationError):
    description = "不支持的二进制解压"


class UnsupportedFormatError(UnsupportedOperationError):
    """原语已声明但未实现（高压缩率系列）"""

    description = "尚未实现的编码格式"


class VariantUnavailableError(ImageCodecError):
    """变体依赖的能力未启用"""

    def __init__(self, variant: "EncodingVariant", missing: "frozenset[Feature]"):
        names = ", ".join(sorted(f.value for f in missing))
        super().__init__(f"编码方案 {variant.value} 未启用，缺少能力: {names}")
        self.variant = variant
        self.missing = missing


# ----------------------------------------------------------------------------
# 原语层编解码错误
# ----------------------------------------------------------------------------


class CodecError(ImageCodecError):
    """原语编解码错误，stage 标识失败的原语"""

    def __init__(self, stage: str, message: str):
        super().__init__(f"[{stage}] {message}")
        self.stage = stage


class DecodeError(CodecError):
    """文本格式错误或压缩数据损坏"""

    pass


class EncodeFormatError(CodecError):
    """输入不满足原语的格式要求"""

    pass


# ----------------------------------------------------------------------------
# 文件读写边界错误
# ----------------------------------------------------------------------------


class ImageIOError(ImageCodecError):
    """文件读写相关错误基类"""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class FilePathError(ImageIOError):
    """路径缺少文件名或扩展名"""

    def __init__(self, cause: str, path: Path | str):
        super().__init__(f"{cause}: {path}", Path(path))
        self.cause = cause


class NotAFileError(ImageIOError):
    """路径指向目录而不是文件"""

    def __init__(self, path: Path | str):
        super().__init__(MessageFormatter.path_not_file(path), Path(path))


class FileSizeExceededError(ImageIOError):
    """超出配置的最大字节数"""

    def __init__(
        self, capacity_allowed: int, size_encountered: int, path: Path | None = None
    ):
        super().__init__(
            MessageFormatter.size_exceeded(capacity_allowed, size_encountered), path
        )
        self.capacity_allowed = capacity_allowed
        self.size_encountered = size_encountered


class StorageError(ImageIOError):
    """底层文件系统错误"""

    def __init__(self, path: Path | str, error: OSError):
        super().__init__(MessageFormatter.operation_failed("文件读写", path, error))
        self.path = Path(path)
        self.error = error


# 原语错误转换装饰器
def handle_codec_errors(stage: str):
    """把原语库抛出的异常统一转换为 DecodeError

    Args:
        stage: 原语名称，用于定位失败环节
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except CodecError:
                raise
            except binascii.Error as e:
                raise DecodeError(stage, f"文本格式错误: {e}") from e
            except LZ4BlockError as e:
                raise DecodeError(stage, f"压缩数据损坏: {e}") from e
            except (ValueError, KeyError, struct.error) as e:
                raise DecodeError(stage, f"无法解码: {e}") from e
            except MemoryError as e:
                raise DecodeError(stage, f"头部记录的大小无效: {e}") from e

        return wrapper

    return decorator


class ErrorHandler:
    """统一错误处理器

    在批量和门面边界，把异常转换为失败的结果模型。
    """

    @staticmethod
    def _log_error(
        operation: str, target: str | Path, error: Exception, level: str = "error"
    ) -> None:
        """标准化的错误日志记录"""
        log_msg = MessageFormatter.format_error(operation, target, error)
        getattr(logger, level, logger.error)(log_msg)

    @staticmethod
    def error_type(error: Exception) -> str:
        """错误分类，用于响应中的 error_type 字段"""
        match error:
            case ValidationError():
                return "validation"
            case UnsupportedImageFormatError():
                return "unsupported_image_format"
            case UnsupportedFormatError():
                return "unsupported_format"
            case UnsupportedOperationError():
                return "unsupported_operation"
            case VariantUnavailableError():
                return "variant_unavailable"
            case CodecError():
                return "codec"
            case FileSizeExceededError():
                return "quota"
            case FilePathError() | NotAFileError():
                return "path"
            case ImageIOError() | OSError():
                return "file"
            case _:
                return "processing"

    @staticmethod
    def handle_encode_error(
        error: Exception,
        file_stem: str,
        extension: str,
        variant: "EncodingVariant",
        original_size: int = 0,
        operation: str = "图像编码",
    ) -> EncodeResult:
        """把编码异常转换为失败的 EncodeResult"""
        # 不支持的组合是调用方的选择问题，按警告记录
        level = (
            "warning"
            if isinstance(error, (UnsupportedOperationError, VariantUnavailableError))
            else "error"
        )
        ErrorHandler._log_error(operation, f"{file_stem}.{extension}", error, level)
        return EncodeResult(
            file_stem=file_stem,
            extension=extension,
            variant=variant.value,
            original_size=original_size,
            success=False,
            error=f"{operation}: {error}",
            error_type=ErrorHandler.error_type(error),
        )

    @staticmethod
    def create_error_batch_result(
        variant: "EncodingVariant", error: Exception
    ) -> BatchEncodeResult:
        """创建失败的批量结果"""
        ErrorHandler._log_error("批量编码", variant.value, error)
        return BatchEncodeResult(
            variant=variant.value,
            results=[],
            success=False,
            error=str(error),
        )
