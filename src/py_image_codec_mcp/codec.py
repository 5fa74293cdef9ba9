"""图像编码器接口。

组合读取器和编码引擎的简洁用户接口：读取图像文件、编码为文本或二进制、
生成内联数据 URI，以及把文本解码后写回文件。
"""

from pathlib import Path
from typing import Any

from .config import get_config
from .core.classifier import data_uri
from .core.engine import EncodingEngine
from .core.record_codec import encode_record
from .engine.batch import BatchEncoder
from .engine.reader import ImageReader
from .exceptions import ErrorHandler, ImageCodecError, ValidationError
from .models import (
    BatchEncodeResult,
    DecodeResult,
    EncodeResult,
    EncodingVariant,
    ImageRecord,
)
from .utils.file_helpers import split_path
from .utils.logging_helpers import get_logger


logger = get_logger()


class ImageCodec:
    """图像编码器。

    单文件失败不会抛出异常，而是返回失败的结果对象。
    """

    def __init__(
        self,
        max_file_size: int | None = None,
        features: Any = None,
        max_workers: int | None = None,
        force_executor_type: str | None = None,
    ):
        """初始化编码器。

        Args:
            max_file_size: 单个文件最大字节数，None 使用配置默认值
            features: 启用的底层能力，None 使用配置默认值
            max_workers: 批量编码时的最大并发数
            force_executor_type: 强制指定执行器类型 ('thread'/'process'/None为自动选择)
        """
        app_config = get_config()

        if max_workers is None:
            max_workers = app_config.codec.MAX_WORKERS
        if max_workers <= 0:
            raise ValidationError("max_workers 必须大于 0")

        if force_executor_type not in {None, "thread", "process"}:
            raise ValidationError(
                "force_executor_type 必须是 'thread', 'process' 或 None"
            )

        self.max_file_size = (
            app_config.reader.MAX_FILE_SIZE if max_file_size is None else max_file_size
        )
        self.engine = EncodingEngine(
            app_config.codec.ENABLED_FEATURES if features is None else features
        )
        self.default_variant = EncodingVariant.parse(app_config.codec.DEFAULT_ENCODING)
        self.batch_encoder = BatchEncoder(
            max_workers=max_workers,
            force_executor_type=force_executor_type,
            features=self.engine.features,
        )

        logger.debug("初始化图像编码器")

    def _reader(self) -> ImageReader:
        return ImageReader().add_max_file_size(self.max_file_size)

    def _variant(self, encoding: EncodingVariant | str | None) -> EncodingVariant:
        return self.default_variant if encoding is None else EncodingVariant.parse(encoding)

    def read(self, input_path: str | Path) -> ImageRecord:
        """读取单个图像文件（异常直接抛出）"""
        return self._reader().read_file(input_path)

    def encode_file(
        self,
        input_path: str | Path,
        encoding: EncodingVariant | str | None = None,
    ) -> EncodeResult:
        """读取并编码单个文件。

        Args:
            input_path: 输入文件路径
            encoding: 编码方案，None 使用配置默认值

        Returns:
            EncodeResult: 编码结果

        Examples:
            >>> codec = ImageCodec(max_file_size=200 * 1024)
            >>> result = codec.encode_file("logo.png", "lz4_base64")
            >>> print(result.get_summary())
        """
        input_path = Path(input_path)

        try:
            variant = self._variant(encoding)
        except ImageCodecError as e:
            return ErrorHandler.handle_encode_error(
                e, input_path.stem, input_path.suffix[1:], self.default_variant
            )

        try:
            record = self.read(input_path)
        except ImageCodecError as e:
            return ErrorHandler.handle_encode_error(
                e, input_path.stem, input_path.suffix[1:], variant, operation="文件读取"
            )

        return encode_record(record, variant, self.engine)

    def encode_files(
        self,
        input_paths: list[str | Path],
        encoding: EncodingVariant | str | None = None,
    ) -> BatchEncodeResult:
        """逐个读取后并发编码多个文件，读取失败的文件记为失败结果"""
        try:
            variant = self._variant(encoding)
        except ImageCodecError as e:
            return ErrorHandler.create_error_batch_result(self.default_variant, e)

        reader = self._reader()
        records: list[ImageRecord] = []
        # 每个输入位置对应一个结果，读取失败的位置先填入失败结果
        results: list[EncodeResult | None] = []
        for path in map(Path, input_paths):
            try:
                records.append(reader.read_file(path))
                results.append(None)
            except ImageCodecError as e:
                results.append(
                    ErrorHandler.handle_encode_error(
                        e, path.stem, path.suffix[1:], variant, operation="文件读取"
                    )
                )

        encoded = iter(self.batch_encoder.encode_records(records, variant).results)
        results = [next(encoded) if r is None else r for r in results]
        success = not results or any(r.success for r in results)
        return BatchEncodeResult(
            variant=variant.value,
            results=results,
            success=success,
            error=None if success else "所有文件编码都失败",
        )

    def encode_directory(
        self,
        input_dir: str | Path,
        encoding: EncodingVariant | str | None = None,
        recursive: bool = True,
    ) -> BatchEncodeResult:
        """批量编码目录中可识别的图像文件"""
        return self.batch_encoder.encode_directory(
            input_dir,
            self.default_variant if encoding is None else encoding,
            max_file_size=self.max_file_size,
            recursive=recursive,
        )

    def to_data_uri(self, record: ImageRecord) -> str:
        """生成 ``data:image/<subtype>;base64,<payload>`` 形式的内联数据

        Raises:
            UnsupportedImageFormatError: 记录的媒体类型没有 MIME 映射
        """
        payload = self.engine.encode_to_text(EncodingVariant.BASE64, record.data)
        return data_uri(record.media_tag, payload)

    def decode_to_file(
        self,
        text: str,
        output_path: str | Path,
        encoding: EncodingVariant | str | None = None,
    ) -> DecodeResult:
        """把编码文本解码后写出为文件。

        Args:
            text: encode_to_text 产生的文本
            output_path: 输出文件路径，必须包含文件名和扩展名
            encoding: 编码方案

        Returns:
            DecodeResult: 解码结果
        """
        output_path = Path(output_path)
        variant_name = str(encoding or self.default_variant.value)

        try:
            variant = self._variant(encoding)
            variant_name = variant.value
            file_stem, extension = split_path(output_path)
            data = self.engine.decode_from_text(variant, text)
            written = self._reader().write_to_file(
                file_stem, extension, data, output_path.parent
            )
        except ImageCodecError as e:
            ErrorHandler._log_error("文本解码", output_path, e, "warning")
            return DecodeResult(
                variant=variant_name,
                success=False,
                error=f"文本解码: {e}",
                error_type=ErrorHandler.error_type(e),
            )

        return DecodeResult(
            variant=variant_name,
            output_path=written,
            decoded_size=len(data),
            success=True,
        )


# 便捷函数


def encode_file(
    input_path: str | Path, encoding: str | None = None, **kwargs: Any
) -> EncodeResult:
    """便捷的单文件编码函数

    Examples:
        >>> result = encode_file("photo.webp", "base64", max_file_size=1 << 20)
        >>> print(result.success, result.text[:16])
    """
    return ImageCodec(**kwargs).encode_file(input_path, encoding)
