"""编码引擎模块。

能力矩阵把每个 (变体, 操作) 映射到一个转换函数或一个明确的失败。
矩阵由各变体的组合机械生成，查找不到的组合统一拒绝并抛出带变体和
操作信息的错误，保证矩阵对所有变体都是完整的。
"""

from collections.abc import Callable, Iterable
from typing import Any

from ..exceptions import (
    UnsupportedBinaryEncodingError,
    UnsupportedDecodeBinaryError,
    UnsupportedDecodeStringError,
    UnsupportedFormatError,
    UnsupportedOperationError,
    UnsupportedTextEncodingError,
    ValidationError,
    VariantUnavailableError,
)
from ..models.encoding import (
    Compressor,
    EncodingVariant,
    Feature,
    Operation,
    TextCodec,
)
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter
from .primitives import Base64Codec, HexCodec, Lz4BlockCodec, Z85Codec


logger = get_logger()

Transform = Callable[[Any], Any]

# 操作 -> 对应的“不支持”错误类型
UNSUPPORTED_ERRORS: dict[Operation, type[UnsupportedOperationError]] = {
    Operation.ENCODE_TEXT: UnsupportedTextEncodingError,
    Operation.ENCODE_BINARY: UnsupportedBinaryEncodingError,
    Operation.DECODE_TEXT: UnsupportedDecodeStringError,
    Operation.DECOMPRESS_BINARY: UnsupportedDecodeBinaryError,
}

_TEXT_CODECS = {
    TextCodec.BASE64: Base64Codec,
    TextCodec.HEX: HexCodec,
    TextCodec.Z85: Z85Codec,
}


class Unimplemented:
    """矩阵中“已声明但未实现”的占位"""

    def __repr__(self) -> str:
        return "UNIMPLEMENTED"


UNIMPLEMENTED = Unimplemented()

MatrixEntry = Transform | Unimplemented


def _compress_then_encode(text_codec: type) -> Transform:
    def transform(data: bytes) -> str:
        return text_codec.encode(Lz4BlockCodec.compress(data))

    return transform


def _decode_then_decompress(text_codec: type) -> Transform:
    def transform(text: str) -> bytes:
        return Lz4BlockCodec.decompress(text_codec.decode(text))

    return transform


def _row_for(variant: EncodingVariant) -> dict[Operation, MatrixEntry]:
    """根据变体的组合生成矩阵的一行，未列出的操作即不支持"""
    composition = variant.composition

    match composition.compressor, composition.text_codec:
        case Compressor.HIGH, _:
            return {operation: UNIMPLEMENTED for operation in Operation}
        case None, TextCodec() as codec:
            primitive = _TEXT_CODECS[codec]
            return {
                Operation.ENCODE_TEXT: primitive.encode,
                Operation.DECODE_TEXT: primitive.decode,
            }
        case Compressor.FAST, None:
            return {
                Operation.ENCODE_BINARY: Lz4BlockCodec.compress,
                Operation.DECOMPRESS_BINARY: Lz4BlockCodec.decompress,
            }
        case Compressor.FAST, TextCodec() as codec:
            primitive = _TEXT_CODECS[codec]
            return {
                Operation.ENCODE_TEXT: _compress_then_encode(primitive),
                Operation.DECODE_TEXT: _decode_then_decompress(primitive),
            }
        case _:
            return {}


CAPABILITY_MATRIX: dict[tuple[EncodingVariant, Operation], MatrixEntry] = {
    (variant, operation): entry
    for variant in EncodingVariant
    for operation, entry in _row_for(variant).items()
}


def resolve(variant: EncodingVariant, operation: Operation) -> Transform:
    """查找 (变体, 操作) 对应的转换函数

    Raises:
        UnsupportedFormatError: 变体依赖未实现的原语
        UnsupportedOperationError: 该变体不支持此操作（具体子类见 UNSUPPORTED_ERRORS）
    """
    entry = CAPABILITY_MATRIX.get((variant, operation))
    if entry is None:
        raise UNSUPPORTED_ERRORS[operation](variant, operation)
    if isinstance(entry, Unimplemented):
        raise UnsupportedFormatError(variant, operation)
    return entry


def describe(variant: EncodingVariant, operation: Operation) -> str:
    """矩阵单元的结果：supported / unsupported / unimplemented"""
    entry = CAPABILITY_MATRIX.get((variant, operation))
    if entry is None:
        return "unsupported"
    if isinstance(entry, Unimplemented):
        return "unimplemented"
    return "supported"


def _as_bytes(data: Any) -> bytes:
    """只接受字节类输入"""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise ValidationError(
            MessageFormatter.validation_error(
                "data", type(data).__name__, "必须是 bytes、bytearray 或 memoryview"
            )
        )
    return bytes(data)


class EncodingEngine:
    """编码引擎

    只暴露启用能力所覆盖的变体；四种操作对这些变体都是完整定义的。
    """

    def __init__(self, features: Iterable[Feature | str] | None = None):
        """初始化编码引擎。

        Args:
            features: 启用的底层能力，None 表示全部启用
        """
        if features is None:
            self.features = Feature.all()
        else:
            self.features = frozenset(Feature.parse(f) for f in features)

        self.variants = tuple(
            v for v in EncodingVariant if v.required_features <= self.features
        )
        logger.debug(
            f"编码引擎已启用: {', '.join(v.value for v in self.variants) or '无'}"
        )

    def is_available(self, variant: EncodingVariant) -> bool:
        return variant in self.variants

    def _dispatch(
        self, variant: EncodingVariant | str, operation: Operation, payload: Any
    ) -> Any:
        variant = EncodingVariant.parse(variant)
        if not self.is_available(variant):
            raise VariantUnavailableError(
                variant, variant.required_features - self.features
            )

        transform = resolve(variant, operation)
        result = transform(payload)
        logger.debug(
            f"{operation.value}[{variant.value}]: {len(payload)} -> {len(result)}"
        )
        return result

    def encode_to_text(self, variant: EncodingVariant | str, data: bytes) -> str:
        """字节 -> 文本（文本编码或先压缩再文本编码）"""
        return self._dispatch(variant, Operation.ENCODE_TEXT, _as_bytes(data))

    def encode_to_binary(self, variant: EncodingVariant | str, data: bytes) -> bytes:
        """字节 -> 带长度头的压缩字节，仅纯压缩变体支持"""
        return self._dispatch(variant, Operation.ENCODE_BINARY, _as_bytes(data))

    def decode_from_text(self, variant: EncodingVariant | str, text: str) -> bytes:
        """encode_to_text 的逆操作：先文本解码，再解压"""
        return self._dispatch(variant, Operation.DECODE_TEXT, text)

    def decompress_from_binary(
        self, variant: EncodingVariant | str, data: bytes
    ) -> bytes:
        """encode_to_binary 的逆操作"""
        return self._dispatch(variant, Operation.DECOMPRESS_BINARY, _as_bytes(data))

    def capabilities(self) -> dict[str, dict[str, str]]:
        """以数据形式返回启用变体的能力矩阵"""
        return {
            variant.value: {
                operation.value: describe(variant, operation)
                for operation in Operation
            }
            for variant in self.variants
        }


_default_engine = EncodingEngine()


def get_engine() -> EncodingEngine:
    """获取全部能力启用的默认引擎"""
    return _default_engine


def encode_to_text(variant: EncodingVariant | str, data: bytes) -> str:
    return _default_engine.encode_to_text(variant, data)


def encode_to_binary(variant: EncodingVariant | str, data: bytes) -> bytes:
    return _default_engine.encode_to_binary(variant, data)


def decode_from_text(variant: EncodingVariant | str, text: str) -> bytes:
    return _default_engine.decode_from_text(variant, text)


def decompress_from_binary(variant: EncodingVariant | str, data: bytes) -> bytes:
    return _default_engine.decompress_from_binary(variant, data)
