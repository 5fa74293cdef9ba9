"""工具模块包。

提供纯工具函数，不包含业务逻辑。
"""

from .file_helpers import find_image_files, output_file_name, split_path
from .logging_helpers import configure_logging, get_logger
from .message_formatter import MessageFormatter


__all__ = [
    "MessageFormatter",
    "configure_logging",
    "find_image_files",
    "get_logger",
    "output_file_name",
    "split_path",
]
