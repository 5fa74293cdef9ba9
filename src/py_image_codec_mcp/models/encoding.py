"""编码方案模型。

定义编码变体、编码操作以及底层能力特性。
每个变体只携带身份信息，具体组合由 ``Composition`` 声明。
"""

from dataclasses import dataclass
from enum import Enum


class Feature(str, Enum):
    """可启用的底层编码能力"""

    BASE64 = "base64"
    HEX = "hex"
    LZ4 = "lz4"
    Z85 = "z85"

    @classmethod
    def all(cls) -> frozenset["Feature"]:
        return frozenset(cls)

    @classmethod
    def parse(cls, name: "str | Feature") -> "Feature":
        """按名称解析能力特性，忽略大小写

        Raises:
            ValidationError: 名称无法识别时
        """
        if isinstance(name, cls):
            return name

        normalized = str(name).strip().lower()
        for feature in cls:
            if normalized == feature.value:
                return feature

        from ..exceptions import ValidationError
        from ..utils.message_formatter import MessageFormatter

        available = ", ".join(f.value for f in cls)
        raise ValidationError(
            MessageFormatter.validation_error("feature", name, f"可用能力: {available}")
        )


class Compressor(str, Enum):
    """块压缩器"""

    FAST = "lz4"
    HIGH = "lz4hc"  # 已声明但未实现


class TextCodec(str, Enum):
    """文本编码器"""

    BASE64 = "base64"
    HEX = "hex"
    Z85 = "z85"


class Operation(str, Enum):
    """编码引擎提供的四种操作"""

    ENCODE_TEXT = "encode_to_text"
    ENCODE_BINARY = "encode_to_binary"
    DECODE_TEXT = "decode_from_text"
    DECOMPRESS_BINARY = "decompress_from_binary"


@dataclass(frozen=True)
class Composition:
    """变体由哪些原语组成：先压缩，再文本编码"""

    compressor: Compressor | None = None
    text_codec: TextCodec | None = None

    @property
    def required_features(self) -> frozenset[Feature]:
        features = set()
        if self.compressor is not None:
            features.add(Feature.LZ4)
        if self.text_codec is not None:
            features.add(Feature(self.text_codec.value))
        return frozenset(features)


class EncodingVariant(str, Enum):
    """编码变体枚举，默认 HEX"""

    BASE64 = "base64"
    HEX = "hex"
    LZ4 = "lz4"
    LZ4_BASE64 = "lz4_base64"
    LZ4_Z85 = "lz4_z85"
    LZ4HC = "lz4hc"
    LZ4HC_BASE64 = "lz4hc_base64"
    LZ4HC_Z85 = "lz4hc_z85"

    @classmethod
    def default(cls) -> "EncodingVariant":
        return cls.HEX

    @classmethod
    def parse(cls, name: "str | EncodingVariant") -> "EncodingVariant":
        """按名称或值解析变体，忽略大小写

        Raises:
            ValidationError: 名称无法识别时
        """
        if isinstance(name, cls):
            return name

        normalized = str(name).strip().lower()
        for variant in cls:
            if normalized in (variant.value, variant.name.lower()):
                return variant

        from ..exceptions import ValidationError

        available = ", ".join(v.value for v in cls)
        raise ValidationError(f"未知的编码方案: {name}。可用方案: {available}")

    @property
    def composition(self) -> Composition:
        return COMPOSITIONS[self]

    @property
    def required_features(self) -> frozenset[Feature]:
        return self.composition.required_features


COMPOSITIONS: dict[EncodingVariant, Composition] = {
    EncodingVariant.BASE64: Composition(text_codec=TextCodec.BASE64),
    EncodingVariant.HEX: Composition(text_codec=TextCodec.HEX),
    EncodingVariant.LZ4: Composition(compressor=Compressor.FAST),
    EncodingVariant.LZ4_BASE64: Composition(Compressor.FAST, TextCodec.BASE64),
    EncodingVariant.LZ4_Z85: Composition(Compressor.FAST, TextCodec.Z85),
    EncodingVariant.LZ4HC: Composition(compressor=Compressor.HIGH),
    EncodingVariant.LZ4HC_BASE64: Composition(Compressor.HIGH, TextCodec.BASE64),
    EncodingVariant.LZ4HC_Z85: Composition(Compressor.HIGH, TextCodec.Z85),
}
