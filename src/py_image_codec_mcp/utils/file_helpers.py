"""文件工具模块。

提供路径拆分、图像文件查找等与业务无关的工具函数。
"""

from collections.abc import Iterator
from pathlib import Path

from ..models.constants import ImageFormats
from .logging_helpers import get_logger


logger = get_logger()


def split_path(path: str | Path) -> tuple[str, str]:
    """把路径拆分为 (文件名, 扩展名)，扩展名不含点

    Raises:
        FilePathError: 缺少文件名或扩展名时
    """
    from ..exceptions import FilePathError

    path = Path(path)
    stem = path.stem
    extension = path.suffix[1:]

    if not path.name or not stem:
        raise FilePathError("缺少文件名或路径无效", path)
    if not extension:
        raise FilePathError("缺少扩展名或扩展名无效", path)

    return stem, extension


def output_file_name(file_stem: str, extension: str) -> str:
    """组合输出文件名 ``<stem>.<ext>``"""
    if not extension:
        return file_stem
    return f"{file_stem}.{extension}"


def find_image_files(
    directory: str | Path,
    recursive: bool = True,
) -> Iterator[Path]:
    """查找目录中扩展名可识别的图像文件。

    Args:
        directory: 搜索目录
        recursive: 是否递归搜索子目录

    Yields:
        Path: 图像文件路径，按路径排序
    """
    directory = Path(directory)

    if not directory.is_dir():
        logger.warning(f"目录不存在或不是目录: {directory}")
        return

    pattern = "**/*" if recursive else "*"
    supported = ImageFormats.get_supported_extensions()

    for file_path in sorted(directory.glob(pattern)):
        if file_path.is_file() and file_path.suffix[1:] in supported:
            yield file_path
