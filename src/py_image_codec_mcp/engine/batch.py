"""批量编码器模块。

并发编码多个图像记录，或读取目录中的所有图像文件后批量编码。
"""

from collections.abc import Sequence
from pathlib import Path

from ..config import get_config
from ..core.record_codec import EncodeTask, process_task
from ..exceptions import ErrorHandler, ImageCodecError
from ..models.codec_result import BatchEncodeResult, EncodeResult
from ..models.encoding import EncodingVariant, Feature
from ..models.image_record import ImageRecord
from ..utils.file_helpers import find_image_files
from ..utils.logging_helpers import get_logger
from .concurrent_executor import ConcurrentExecutor
from .reader import ImageReader


logger = get_logger()


class BatchEncoder:
    """批量图像编码器

    编码核心无共享状态，记录之间可以安全地并发编码。
    """

    def __init__(
        self,
        max_workers: int = 4,
        force_executor_type: str | None = None,
        features: frozenset[Feature] | None = None,
    ):
        """初始化批量编码器

        Args:
            max_workers: 最大并发数
            force_executor_type: 强制指定执行器类型 ('thread'/'process'/None为自动选择)
            features: 启用的底层能力，None 表示全部启用
        """
        self.max_workers = max_workers
        self.force_executor_type = force_executor_type
        self.features = features
        self.concurrent_executor = ConcurrentExecutor(
            max_workers,
            force_executor_type,
            get_config().codec.PROCESS_POOL_THRESHOLD,
        )

    def encode_records(
        self,
        records: Sequence[ImageRecord],
        variant: EncodingVariant | str,
    ) -> BatchEncodeResult:
        """并发编码记录列表

        Args:
            records: 图像记录
            variant: 编码方案

        Returns:
            BatchEncodeResult: 批量编码结果，顺序与 records 一致
        """
        try:
            variant = EncodingVariant.parse(variant)
        except ImageCodecError as e:
            return ErrorHandler.create_error_batch_result(
                EncodingVariant.default(), e
            )

        tasks = [EncodeTask(record, variant, self.features) for record in records]
        results = self.concurrent_executor.execute_tasks(tasks, process_task)
        return self._create_batch_result(variant, results)

    def encode_directory(
        self,
        input_dir: str | Path,
        variant: EncodingVariant | str,
        max_file_size: int | None = None,
        recursive: bool = True,
    ) -> BatchEncodeResult:
        """读取目录中的图像文件并批量编码

        文件逐个读取；读取失败的文件记为失败结果，不影响其他文件。
        """
        reader = ImageReader()

        try:
            variant = EncodingVariant.parse(variant)
            if max_file_size is not None:
                reader.add_max_file_size(max_file_size)
        except ImageCodecError as e:
            return ErrorHandler.create_error_batch_result(
                EncodingVariant.default(), e
            )

        records: list[ImageRecord] = []
        results: list[EncodeResult | None] = []
        for path in find_image_files(input_dir, recursive=recursive):
            try:
                records.append(reader.read_file(path))
                results.append(None)
            except ImageCodecError as e:
                results.append(
                    ErrorHandler.handle_encode_error(
                        e, path.stem, path.suffix[1:], variant, operation="文件读取"
                    )
                )

        if not results:
            return BatchEncodeResult(
                variant=variant.value,
                results=[],
                success=True,
                error="未找到图像文件",
            )

        encoded = iter(self.encode_records(records, variant).results)
        return self._create_batch_result(
            variant, [next(encoded) if r is None else r for r in results]
        )

    def _create_batch_result(
        self, variant: EncodingVariant, results: list[EncodeResult]
    ) -> BatchEncodeResult:
        """创建批量结果：至少一个成功即视为成功"""
        success = not results or any(r.success for r in results)
        batch = BatchEncodeResult(
            variant=variant.value,
            results=results,
            success=success,
            error=None if success else "所有记录编码都失败",
        )
        logger.debug(batch.get_summary())
        return batch
