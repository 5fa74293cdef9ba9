"""图像读取器模块。

构建器风格的文件读取：登记文件列表和大小限制，逐个流式读取为 ImageRecord，
并把字节写回存储。编码核心不依赖本模块。
"""

from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from ..config import get_config
from ..core.classifier import tag_from_extension
from ..exceptions import (
    FileSizeExceededError,
    NotAFileError,
    StorageError,
    ValidationError,
)
from ..models.constants import SizeUnits
from ..models.image_record import ImageRecord
from ..models.reader_config import ReaderConfig
from ..utils.file_helpers import output_file_name, split_path
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter


logger = get_logger()


class ImageReader:
    """图像文件读取器

    Examples:
        >>> reader = ImageReader().add_file_path("images/001.png").from_kib(200)
        >>> records = reader.get_images()
    """

    def __init__(self, config: ReaderConfig | None = None):
        if config is None:
            defaults = get_config().reader
            config = ReaderConfig(
                max_file_size=defaults.MAX_FILE_SIZE,
                chunk_size=defaults.READ_CHUNK_SIZE,
            )
        self.config = config

    @property
    def files(self) -> list[Path]:
        return list(self.config.files)

    @property
    def max_file_size(self) -> int:
        return self.config.max_file_size

    def add_file_path(self, file_path: str | Path) -> "ImageReader":
        try:
            self.config.files = [*self.config.files, Path(file_path)]
        except PydanticValidationError as e:
            raise ValidationError(
                MessageFormatter.validation_error("file_path", file_path, "文件路径不能为空")
            ) from e
        return self

    def add_max_file_size(self, max_file_size: int) -> "ImageReader":
        try:
            self.config.max_file_size = max_file_size
        except PydanticValidationError as e:
            raise ValidationError(
                MessageFormatter.validation_error(
                    "max_file_size", max_file_size, "必须是非负整数"
                )
            ) from e
        return self

    def from_bytes(self, size: int) -> "ImageReader":
        return self.add_max_file_size(size * SizeUnits.BYTE)

    def from_kib(self, size: int) -> "ImageReader":
        return self.add_max_file_size(size * SizeUnits.KIB)

    def from_mib(self, size: int) -> "ImageReader":
        return self.add_max_file_size(size * SizeUnits.MIB)

    def from_gib(self, size: int) -> "ImageReader":
        return self.add_max_file_size(size * SizeUnits.GIB)

    def get_images(self) -> list[ImageRecord]:
        """按登记顺序逐个读取，遇到第一个错误即停止"""
        return [self.read_file(path) for path in self.config.files]

    def read_file(self, path: str | Path) -> ImageRecord:
        """读取单个文件

        Raises:
            FilePathError: 路径缺少文件名或扩展名
            NotAFileError: 路径是目录
            FileSizeExceededError: 文件超过大小限制
            StorageError: 底层读取失败
        """
        path = Path(path)
        file_stem, extension = split_path(path)

        try:
            if path.is_dir():
                raise NotAFileError(path)

            size = path.stat().st_size
            self._check_size(size, path)

            data = self._read_chunks(path)
        except OSError as e:
            raise StorageError(path, e) from e

        logger.debug(f"已读取 {path} ({len(data)} 字节)")
        return ImageRecord(
            file_stem=file_stem,
            extension=extension,
            media_tag=tag_from_extension(extension),
            data=data,
        )

    def _read_chunks(self, path: Path) -> bytes:
        """按缓冲区大小流式读取，读取过程中仍然检查大小限制"""
        container = bytearray()
        with path.open("rb") as file:
            while chunk := file.read(self.config.chunk_size):
                container += chunk
                self._check_size(len(container), path)
        return bytes(container)

    def _check_size(self, size: int, path: Path) -> None:
        if size > self.config.max_file_size:
            raise FileSizeExceededError(
                capacity_allowed=self.config.max_file_size,
                size_encountered=size,
                path=path,
            )

    def write_to_file(
        self,
        file_stem: str,
        extension: str,
        data: bytes,
        output_dir: str | Path | None = None,
    ) -> Path:
        """把字节写为 ``<stem>.<ext>``，返回写出的路径

        Raises:
            StorageError: 写入失败
        """
        file_name = output_file_name(file_stem, extension)
        output_path = Path(output_dir) / file_name if output_dir else Path(file_name)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with output_path.open("wb") as file:
                file.write(data)
        except OSError as e:
            raise StorageError(output_path, e) from e

        logger.debug(f"已写出 {output_path} ({len(data)} 字节)")
        return output_path
