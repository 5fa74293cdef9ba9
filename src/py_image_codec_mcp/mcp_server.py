"""图像编码 MCP 服务器。

通过 MCP 工具暴露类型识别、编码、解码和能力矩阵查询。
"""

from pathlib import Path
from typing import Any

from fastmcp import FastMCP

from .codec import ImageCodec
from .config import get_config
from .core.classifier import mime_prefix, tag_from_extension
from .exceptions import ErrorHandler, UnsupportedImageFormatError
from .models.constants import SizeUnits
from .utils.logging_helpers import configure_logging, get_logger
from .utils.message_formatter import MessageFormatter


# MCP 服务器响应类型定义
MCPResponse = dict[str, Any]


class MCPResponseBuilder:
    """MCP 服务器响应构建器"""

    @staticmethod
    def error(
        message: str,
        error_type: str = "general",
        details: dict[str, Any] | None = None,
    ) -> MCPResponse:
        """构建错误结果。

        Args:
            message: 错误消息
            error_type: 错误类型
            details: 额外的错误详情

        Returns:
            dict: 标准化的错误响应
        """
        result: MCPResponse = {
            "success": False,
            "error": message,
            "error_type": error_type,
        }

        if details:
            result["details"] = details

        return result

    @staticmethod
    def file_error(message: str, file_path: str | None = None) -> MCPResponse:
        details = {"file_path": file_path} if file_path else None
        return MCPResponseBuilder.error(message, "file", details)


logger = get_logger(__name__)

# 创建MCP应用
mcp: FastMCP[Any] = FastMCP("图像编码服务")

# 全局编码器实例
codec = ImageCodec()


@mcp.tool()
def classify_image(extension: str) -> MCPResponse:
    """根据扩展名识别图像类型，并给出内联数据 MIME 前缀。

    扩展名精确匹配且区分大小写（如 "png"、"jpeg"、"svg"）。

    Args:
        extension: 不含点的扩展名

    Returns:
        dict: media_tag 与 mime_prefix；无法识别时 success 为 False
    """
    tag = tag_from_extension(extension)
    try:
        prefix = mime_prefix(tag)
    except UnsupportedImageFormatError as e:
        return MCPResponseBuilder.error(
            e.message, ErrorHandler.error_type(e), {"media_tag": tag.value}
        )

    return {"success": True, "media_tag": tag.value, "mime_prefix": prefix}


@mcp.tool()
def encode_image(
    input_path: str,
    encoding: str | None = None,
    max_file_size_kib: int | None = None,
) -> MCPResponse:
    """读取图像文件并编码。

    Args:
        input_path: 图像文件路径
        encoding: 编码方案，如 "hex"、"base64"、"lz4_base64"、"lz4_z85"、"lz4"
            （None 使用服务器默认方案）
        max_file_size_kib: 文件大小上限（KiB），None 使用服务器默认值

    Returns:
        dict: 编码结果；文本方案返回 text，纯压缩方案返回 hex 形式的 data
    """
    if not Path(input_path).exists():
        return MCPResponseBuilder.file_error(
            MessageFormatter.file_not_found(input_path), input_path
        )

    encoder = (
        codec
        if max_file_size_kib is None
        else ImageCodec(max_file_size=max_file_size_kib * SizeUnits.KIB)
    )
    result = encoder.encode_file(input_path, encoding)
    if not result.success:
        return MCPResponseBuilder.error(
            result.error or "编码失败", result.error_type or "processing"
        )

    return {
        "success": True,
        "file_stem": result.file_stem,
        "extension": result.extension,
        "media_tag": result.media_tag,
        "encoding": result.variant,
        "original_size": result.original_size,
        "encoded_size": result.encoded_size,
        "text": result.text,
        "data": result.data.hex() if result.data is not None else None,
        "summary": result.get_summary(),
    }


@mcp.tool()
def decode_image(
    text: str,
    output_path: str,
    encoding: str | None = None,
) -> MCPResponse:
    """把编码文本解码并写出为文件。

    Args:
        text: encode_image 产生的文本
        output_path: 输出文件路径（需包含扩展名）
        encoding: 编码时使用的方案

    Returns:
        dict: 写出的路径和字节数
    """
    result = codec.decode_to_file(text, output_path, encoding)
    if not result.success:
        return MCPResponseBuilder.error(
            result.error or "解码失败", result.error_type or "processing"
        )

    return {
        "success": True,
        "encoding": result.variant,
        "output_path": str(result.output_path),
        "decoded_size": result.decoded_size,
        "summary": result.get_summary(),
    }


@mcp.tool()
def list_encodings() -> MCPResponse:
    """列出启用的编码方案及其能力矩阵。

    每个方案对四种操作给出 supported / unsupported / unimplemented。
    """
    return {
        "success": True,
        "default": codec.default_variant.value,
        "features": sorted(f.value for f in codec.engine.features),
        "capabilities": codec.engine.capabilities(),
    }


# ============================================================================
# 应用入口
# ============================================================================


def main() -> None:
    """启动 MCP 服务器"""
    logging_config = get_config().logging
    configure_logging(logging_config.LOG_LEVEL, logging_config.LOG_FORMAT)
    logger.info("启动图像编码 MCP 服务器")
    mcp.run()


if __name__ == "__main__":
    main()
