"""并发执行器模块。

提供通用的并发任务执行功能。编码核心是无共享状态的纯函数，
并发只存在于这一层。
"""

from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from typing import Any

from ..core.record_codec import EncodeTask
from ..exceptions import ErrorHandler
from ..models.codec_result import EncodeResult
from ..utils.logging_helpers import get_logger


logger = get_logger()


class ConcurrentExecutor:
    """通用并发执行器

    结果顺序与任务顺序一致。
    """

    def __init__(
        self,
        max_workers: int = 4,
        force_executor_type: str | None = None,
        process_pool_threshold: int = 64 * 1024 * 1024,
    ):
        """初始化并发执行器

        Args:
            max_workers: 最大并发数
            force_executor_type: 强制指定执行器类型 ('thread'/'process'/None为自动选择)
            process_pool_threshold: 自动选择时，总字节数超过该值使用进程池
        """
        self.max_workers = max_workers
        self.force_executor_type = force_executor_type
        self.process_pool_threshold = process_pool_threshold

    def execute_tasks(
        self,
        tasks: Sequence[EncodeTask],
        task_function: Callable[[EncodeTask], EncodeResult],
    ) -> list[EncodeResult]:
        """执行并发任务

        Args:
            tasks: 编码任务列表
            task_function: 要执行的任务函数（进程池下必须可序列化）

        Returns:
            list[EncodeResult]: 与 tasks 顺序一致的结果列表
        """
        if not tasks:
            return []

        executor_class = self._choose_executor(tasks)

        with executor_class(max_workers=self.max_workers) as executor:
            futures = [executor.submit(task_function, task) for task in tasks]
            return [
                self._collect_result(future, task)
                for future, task in zip(futures, tasks)
            ]

    def _collect_result(self, future: Any, task: EncodeTask) -> EncodeResult:
        """收集单个任务结果，执行器层面的异常转换为失败结果"""
        record = task.record
        try:
            result = future.result()
        except Exception as e:
            return ErrorHandler.handle_encode_error(
                e,
                record.file_stem,
                record.extension,
                task.variant,
                record.size,
                "并发任务处理",
            )

        if result.success:
            logger.debug(f"编码成功: {record.file_stem}.{record.extension}")
        else:
            logger.warning(
                f"编码失败: {record.file_stem}.{record.extension} - {result.error}"
            )
        return result

    def _choose_executor(self, tasks: Sequence[EncodeTask]) -> type:
        """根据任务特征选择执行器"""
        if self.force_executor_type == "thread":
            return ThreadPoolExecutor
        if self.force_executor_type == "process":
            return ProcessPoolExecutor

        total_size = sum(task.record.size for task in tasks)
        if total_size > self.process_pool_threshold:
            logger.debug(
                f"使用ProcessPoolExecutor: 任务数={len(tasks)}, 总大小={total_size / 1024 / 1024:.1f}MB"
            )
            return ProcessPoolExecutor

        logger.debug(
            f"使用ThreadPoolExecutor: 任务数={len(tasks)}, 总大小={total_size / 1024 / 1024:.1f}MB"
        )
        return ThreadPoolExecutor
