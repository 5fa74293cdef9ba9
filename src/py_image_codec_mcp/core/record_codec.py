"""记录编码模块。

把单个 ImageRecord 按编码方案编码为 EncodeResult，
适用于单线程调用和进程池并发（任务对象与函数均可序列化）。
"""

from collections.abc import Iterable

from ..exceptions import ErrorHandler, ImageCodecError
from ..models.codec_result import EncodeResult
from ..models.encoding import EncodingVariant, Feature, Operation
from ..models.image_record import ImageRecord
from .engine import EncodingEngine, describe, get_engine


class EncodeTask:
    """单个编码任务：记录 + 变体 + 启用的能力"""

    def __init__(
        self,
        record: ImageRecord,
        variant: EncodingVariant,
        features: Iterable[Feature] | None = None,
    ) -> None:
        self.record = record
        self.variant = variant
        self.features = frozenset(features) if features is not None else None


def output_operation(variant: EncodingVariant) -> Operation:
    """变体的自然输出形式：纯压缩方案输出二进制，其余输出文本"""
    if describe(variant, Operation.ENCODE_BINARY) == "supported":
        return Operation.ENCODE_BINARY
    return Operation.ENCODE_TEXT


def encode_record(
    record: ImageRecord,
    variant: EncodingVariant,
    engine: EncodingEngine | None = None,
) -> EncodeResult:
    """编码单个记录。

    总是返回 EncodeResult，失败信息写入结果而不抛出。

    Args:
        record: 图像记录
        variant: 编码方案
        engine: 编码引擎，默认全部能力启用

    Returns:
        EncodeResult: 编码结果
    """
    engine = engine or get_engine()

    try:
        match output_operation(variant):
            case Operation.ENCODE_BINARY:
                data = engine.encode_to_binary(variant, record.data)
                text = None
                encoded_size = len(data)
            case _:
                text = engine.encode_to_text(variant, record.data)
                data = None
                encoded_size = len(text)

        return EncodeResult(
            file_stem=record.file_stem,
            extension=record.extension,
            variant=variant.value,
            media_tag=record.media_tag.value,
            original_size=record.size,
            encoded_size=encoded_size,
            text=text,
            data=data,
            success=True,
        )

    except ImageCodecError as e:
        return ErrorHandler.handle_encode_error(
            e, record.file_stem, record.extension, variant, record.size
        )


def process_task(task: EncodeTask) -> EncodeResult:
    """并发执行入口"""
    engine = EncodingEngine(task.features) if task.features is not None else None
    return encode_record(task.record, task.variant, engine)
