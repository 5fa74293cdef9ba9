"""读取与批量处理模块。

包含文件读取器、批量编码和并发执行等外围处理逻辑。
"""

from .batch import BatchEncoder
from .concurrent_executor import ConcurrentExecutor
from .reader import ImageReader


__all__ = [
    "BatchEncoder",
    "ConcurrentExecutor",
    "ImageReader",
]
