"""核心功能测试。

测试类型识别、编码原语和能力矩阵分发。
"""

import struct

import pytest

from py_image_codec_mcp.core.classifier import data_uri, mime_prefix, tag_from_extension
from py_image_codec_mcp.core.engine import (
    CAPABILITY_MATRIX,
    EncodingEngine,
    decode_from_text,
    decompress_from_binary,
    encode_to_binary,
    encode_to_text,
    resolve,
)
from py_image_codec_mcp.core.primitives import (
    Base64Codec,
    HexCodec,
    Lz4BlockCodec,
    Z85Codec,
)
from py_image_codec_mcp.exceptions import (
    DecodeError,
    EncodeFormatError,
    UnsupportedBinaryEncodingError,
    UnsupportedDecodeBinaryError,
    UnsupportedDecodeStringError,
    UnsupportedFormatError,
    UnsupportedImageFormatError,
    UnsupportedOperationError,
    UnsupportedTextEncodingError,
    ValidationError,
    VariantUnavailableError,
)
from py_image_codec_mcp.models import EncodingVariant, Feature, MediaTag, Operation


SAMPLE_BUFFERS = [
    b"",
    b"\x00",
    b"\x00\xff",
    bytes(range(256)),
    b"PNG" * 333,
    b"\x07" * 10_000,
]

V = EncodingVariant
OP = Operation

# 期望的能力矩阵：每个变体支持的操作；高压缩率系列全部未实现
EXPECTED_SUPPORTED = {
    V.BASE64: {OP.ENCODE_TEXT, OP.DECODE_TEXT},
    V.HEX: {OP.ENCODE_TEXT, OP.DECODE_TEXT},
    V.LZ4: {OP.ENCODE_BINARY, OP.DECOMPRESS_BINARY},
    V.LZ4_BASE64: {OP.ENCODE_TEXT, OP.DECODE_TEXT},
    V.LZ4_Z85: {OP.ENCODE_TEXT, OP.DECODE_TEXT},
}
UNIMPLEMENTED_VARIANTS = {V.LZ4HC, V.LZ4HC_BASE64, V.LZ4HC_Z85}

UNSUPPORTED_ERROR_FOR = {
    OP.ENCODE_TEXT: UnsupportedTextEncodingError,
    OP.ENCODE_BINARY: UnsupportedBinaryEncodingError,
    OP.DECODE_TEXT: UnsupportedDecodeStringError,
    OP.DECOMPRESS_BINARY: UnsupportedDecodeBinaryError,
}


def _call(engine: EncodingEngine, variant: EncodingVariant, operation: Operation):
    """用合法形状的输入调用操作"""
    match operation:
        case OP.ENCODE_TEXT:
            return engine.encode_to_text(variant, b"abcd")
        case OP.ENCODE_BINARY:
            return engine.encode_to_binary(variant, b"abcd")
        case OP.DECODE_TEXT:
            return engine.decode_from_text(variant, "00ff")
        case OP.DECOMPRESS_BINARY:
            return engine.decompress_from_binary(variant, b"\x00\x00\x00\x00\x00")


def _aligned_lz4_buffer() -> bytes:
    """找一个压缩结果长度为 4 的倍数的输入，供 z85 组合使用"""
    for n in range(1, 200):
        data = bytes(range(n))
        if len(Lz4BlockCodec.compress(data)) % 4 == 0:
            return data
    raise AssertionError("没有找到压缩后对齐的输入")


class TestClassifier:
    """类型识别测试"""

    @pytest.mark.parametrize(
        ("extension", "tag"),
        [
            ("svg", MediaTag.SVG),
            ("png", MediaTag.PNG),
            ("jpeg", MediaTag.JPEG),
            ("gif", MediaTag.GIF),
            ("avif", MediaTag.AVIF),
            ("webp", MediaTag.WEBP),
        ],
    )
    def test_known_extensions(self, extension: str, tag: MediaTag):
        assert tag_from_extension(extension) is tag

    @pytest.mark.parametrize(
        "extension", ["bmp", "jpg", "PNG", "Svg", "", ".png", "png ", "tiff"]
    )
    def test_unknown_extensions_are_unsupported(self, extension: str):
        """大小写敏感，精确匹配"""
        assert tag_from_extension(extension) is MediaTag.UNSUPPORTED

    @pytest.mark.parametrize(
        ("tag", "prefix"),
        [
            (MediaTag.SVG, "data:image/svg+xml"),
            (MediaTag.PNG, "data:image/png"),
            (MediaTag.JPEG, "data:image/jpeg"),
            (MediaTag.GIF, "data:image/gif"),
            (MediaTag.AVIF, "data:image/avif"),
            (MediaTag.WEBP, "data:image/webp"),
        ],
    )
    def test_mime_prefix(self, tag: MediaTag, prefix: str):
        assert mime_prefix(tag) == prefix

    def test_png_scenario(self):
        """png -> PNG -> data:image/png"""
        tag = tag_from_extension("png")
        assert tag is MediaTag.PNG
        assert mime_prefix(tag) == "data:image/png"

    def test_bmp_scenario(self):
        """bmp -> UNSUPPORTED -> UnsupportedImageFormatError"""
        tag = tag_from_extension("bmp")
        assert tag is MediaTag.UNSUPPORTED
        with pytest.raises(UnsupportedImageFormatError) as exc_info:
            mime_prefix(tag)
        assert exc_info.value.tag is MediaTag.UNSUPPORTED

    def test_default_tag_is_svg(self):
        assert MediaTag.default() is MediaTag.SVG

    def test_data_uri(self):
        assert data_uri(MediaTag.GIF, "R0lG") == "data:image/gif;base64,R0lG"
        with pytest.raises(UnsupportedImageFormatError):
            data_uri(MediaTag.UNSUPPORTED, "R0lG")


class TestBase64Codec:
    """base64 原语测试"""

    @pytest.mark.parametrize("length", range(0, 12))
    def test_no_padding(self, length: int):
        text = Base64Codec.encode(bytes(range(length)))
        assert "=" not in text
        assert Base64Codec.decode(text) == bytes(range(length))

    def test_known_value(self):
        assert Base64Codec.encode(b"\x00\xff") == "AP8"
        assert Base64Codec.decode("AP8") == b"\x00\xff"

    @pytest.mark.parametrize(
        "text", ["AP8=", "AA==", "A", "AP8!", "AP 8", "AB", "AP9"]
    )
    def test_rejects_malformed(self, text: str):
        with pytest.raises(DecodeError) as exc_info:
            Base64Codec.decode(text)
        assert exc_info.value.stage == "base64"

    def test_each_text_decodes_to_distinct_bytes(self):
        """末尾未用位非零的文本不能与规范文本解码出相同字节"""
        assert Base64Codec.decode("AA") == b"\x00"
        assert Base64Codec.decode("AP8") == b"\x00\xff"
        for text in ("AB", "AC", "AP9", "AP/"):
            with pytest.raises(DecodeError):
                Base64Codec.decode(text)


class TestHexCodec:
    """hex 原语测试"""

    def test_scenario_round_trip(self):
        assert HexCodec.encode(bytes([0x00, 0xFF])) == "00ff"
        assert HexCodec.decode("00ff") == bytes([0x00, 0xFF])

    def test_lowercase_even_length(self):
        data = bytes(range(256))
        text = HexCodec.encode(data)
        assert text == text.lower()
        assert len(text) == 2 * len(data)

    def test_accepts_uppercase(self):
        assert HexCodec.decode("00FF") == b"\x00\xff"
        assert HexCodec.decode("aBcD") == b"\xab\xcd"

    @pytest.mark.parametrize("text", ["0", "abc", "zz", "0g", "00 f", "ü0"])
    def test_rejects_malformed(self, text: str):
        with pytest.raises(DecodeError) as exc_info:
            HexCodec.decode(text)
        assert exc_info.value.stage == "hex"


class TestLz4BlockCodec:
    """lz4 原语测试"""

    def test_header_records_original_size(self):
        payload = Lz4BlockCodec.compress(b"\x07" * 10_000)
        assert struct.unpack("<I", payload[:4])[0] == 10_000
        assert Lz4BlockCodec.header_size(payload) == 10_000
        assert len(payload) < 1_000

    @pytest.mark.parametrize("data", SAMPLE_BUFFERS)
    def test_round_trip(self, data: bytes):
        assert Lz4BlockCodec.decompress(Lz4BlockCodec.compress(data)) == data

    @pytest.mark.parametrize("payload", [b"", b"\x01", b"\x01\x00\x00"])
    def test_missing_or_truncated_header(self, payload: bytes):
        with pytest.raises(DecodeError) as exc_info:
            Lz4BlockCodec.decompress(payload)
        assert exc_info.value.stage == "lz4"

    def test_corrupt_payload(self):
        payload = Lz4BlockCodec.compress(b"hello world " * 50)
        with pytest.raises(DecodeError):
            Lz4BlockCodec.decompress(payload[:-5])

    def test_header_mismatch(self):
        payload = Lz4BlockCodec.compress(b"abcdefgh" * 20)
        forged = struct.pack("<I", 10) + payload[4:]
        with pytest.raises(DecodeError):
            Lz4BlockCodec.decompress(forged)


class TestZ85Codec:
    """z85 原语测试"""

    def test_reference_vector(self):
        data = bytes([0x86, 0x4F, 0xD2, 0x6F, 0xB5, 0x59, 0xF7, 0x5B])
        assert Z85Codec.encode(data) == "HelloWorld"
        assert Z85Codec.decode("HelloWorld") == data

    @pytest.mark.parametrize("length", [1, 2, 3, 5, 7])
    def test_rejects_unaligned_input(self, length: int):
        with pytest.raises(EncodeFormatError) as exc_info:
            Z85Codec.encode(b"\x01" * length)
        assert exc_info.value.stage == "z85"

    @pytest.mark.parametrize("text", ["Hell", "HelloWorl", "~~~~~", "Hello Worl"])
    def test_rejects_malformed(self, text: str):
        with pytest.raises(DecodeError):
            Z85Codec.decode(text)


class TestCapabilityMatrix:
    """能力矩阵测试"""

    @pytest.fixture
    def engine(self):
        return EncodingEngine()

    def test_matrix_covers_only_known_pairs(self):
        for variant, operation in CAPABILITY_MATRIX:
            assert variant in EncodingVariant
            assert operation in Operation

    @pytest.mark.parametrize("variant", list(EncodingVariant))
    @pytest.mark.parametrize("operation", list(Operation))
    def test_every_pair_resolves(
        self, engine: EncodingEngine, variant: EncodingVariant, operation: Operation
    ):
        """每个 (变体, 操作) 要么成功，要么抛出指定的错误"""
        if variant in UNIMPLEMENTED_VARIANTS:
            with pytest.raises(UnsupportedFormatError) as exc_info:
                _call(engine, variant, operation)
            assert exc_info.value.variant is variant
            assert exc_info.value.operation is operation
        elif operation in EXPECTED_SUPPORTED[variant]:
            assert callable(resolve(variant, operation))
        else:
            with pytest.raises(UNSUPPORTED_ERROR_FOR[operation]) as exc_info:
                _call(engine, variant, operation)
            assert exc_info.value.variant is variant
            assert exc_info.value.operation is operation

    def test_unsupported_format_is_an_unsupported_operation(self):
        with pytest.raises(UnsupportedOperationError):
            encode_to_text(EncodingVariant.LZ4HC_BASE64, b"data")

    def test_compression_only_has_no_text_form(self):
        with pytest.raises(UnsupportedTextEncodingError):
            encode_to_text(EncodingVariant.LZ4, b"data")

    def test_binary_on_text_codec_scenario(self):
        """纯文本编码方案请求二进制编码"""
        with pytest.raises(UnsupportedBinaryEncodingError) as exc_info:
            encode_to_binary(EncodingVariant.HEX, b"\x00\xff")
        assert exc_info.value.variant is EncodingVariant.HEX

    def test_composed_variants_have_no_binary_form(self):
        with pytest.raises(UnsupportedBinaryEncodingError):
            encode_to_binary(EncodingVariant.LZ4_BASE64, b"data")
        with pytest.raises(UnsupportedDecodeBinaryError):
            decompress_from_binary(EncodingVariant.LZ4_Z85, b"data")

    def test_capabilities_as_data(self, engine: EncodingEngine):
        capabilities = engine.capabilities()
        assert set(capabilities) == {v.value for v in EncodingVariant}
        assert capabilities["lz4"]["encode_to_binary"] == "supported"
        assert capabilities["lz4"]["encode_to_text"] == "unsupported"
        assert capabilities["lz4hc_z85"]["decode_from_text"] == "unimplemented"
        for row in capabilities.values():
            assert set(row) == {op.value for op in Operation}


class TestRoundTrips:
    """往返测试"""

    @pytest.mark.parametrize(
        "variant", [EncodingVariant.BASE64, EncodingVariant.HEX, EncodingVariant.LZ4_BASE64]
    )
    @pytest.mark.parametrize("data", SAMPLE_BUFFERS)
    def test_text_round_trip(self, variant: EncodingVariant, data: bytes):
        assert decode_from_text(variant, encode_to_text(variant, data)) == data

    @pytest.mark.parametrize("data", SAMPLE_BUFFERS)
    def test_binary_round_trip(self, data: bytes):
        encoded = encode_to_binary(EncodingVariant.LZ4, data)
        assert decompress_from_binary(EncodingVariant.LZ4, encoded) == data

    def test_lz4_z85_round_trip_when_aligned(self):
        data = _aligned_lz4_buffer()
        text = encode_to_text(EncodingVariant.LZ4_Z85, data)
        assert decode_from_text(EncodingVariant.LZ4_Z85, text) == data

    @pytest.mark.parametrize("data", SAMPLE_BUFFERS)
    def test_lz4_z85_unaligned_payload_fails(self, data: bytes):
        """压缩结果未对齐时不做填充，直接报格式错误"""
        if len(Lz4BlockCodec.compress(data)) % 4 == 0:
            text = encode_to_text(EncodingVariant.LZ4_Z85, data)
            assert decode_from_text(EncodingVariant.LZ4_Z85, text) == data
        else:
            with pytest.raises(EncodeFormatError):
                encode_to_text(EncodingVariant.LZ4_Z85, data)

    def test_lz4_base64_scenario(self):
        """10000 个相同字节：压缩后远小于原始大小，长度头记录 10000"""
        data = b"\x2a" * 10_000
        text = encode_to_text(EncodingVariant.LZ4_BASE64, data)
        assert len(text) < 1_000
        assert "=" not in text

        payload = Base64Codec.decode(text)
        assert Lz4BlockCodec.header_size(payload) == 10_000
        assert decode_from_text(EncodingVariant.LZ4_BASE64, text) == data

    def test_composed_decode_reports_stage(self):
        with pytest.raises(DecodeError) as exc_info:
            decode_from_text(EncodingVariant.LZ4_BASE64, "AP8=")
        assert exc_info.value.stage == "base64"

        # base64 合法，但内容不是带长度头的压缩数据
        with pytest.raises(DecodeError) as exc_info:
            decode_from_text(EncodingVariant.LZ4_BASE64, Base64Codec.encode(b"\x01"))
        assert exc_info.value.stage == "lz4"


class TestEncodingEngine:
    """编码引擎能力开关测试"""

    def test_disabled_features_remove_variants(self):
        engine = EncodingEngine(features=[Feature.HEX])
        assert engine.variants == (EncodingVariant.HEX,)
        assert engine.encode_to_text("hex", b"\x01") == "01"

        with pytest.raises(VariantUnavailableError) as exc_info:
            engine.encode_to_text(EncodingVariant.BASE64, b"\x01")
        assert exc_info.value.missing == frozenset({Feature.BASE64})

    def test_lz4_without_z85(self):
        engine = EncodingEngine(features=["lz4", "base64"])
        assert EncodingVariant.LZ4_BASE64 in engine.variants
        assert EncodingVariant.LZ4HC in engine.variants
        assert EncodingVariant.LZ4_Z85 not in engine.variants
        assert set(engine.capabilities()) == {v.value for v in engine.variants}

    def test_default_variant(self):
        assert EncodingVariant.default() is EncodingVariant.HEX

    @pytest.mark.parametrize(
        ("name", "variant"),
        [
            ("hex", EncodingVariant.HEX),
            ("LZ4_BASE64", EncodingVariant.LZ4_BASE64),
            (" lz4hc_z85 ", EncodingVariant.LZ4HC_Z85),
            (EncodingVariant.LZ4, EncodingVariant.LZ4),
        ],
    )
    def test_parse(self, name, variant: EncodingVariant):
        assert EncodingVariant.parse(name) is variant

    def test_parse_unknown(self):
        with pytest.raises(ValidationError):
            EncodingVariant.parse("base32")

    @pytest.mark.parametrize("data", [3, "abc", None, [1, 2]])
    def test_rejects_non_bytes_input(self, data):
        engine = EncodingEngine()
        with pytest.raises(ValidationError):
            engine.encode_to_text(EncodingVariant.HEX, data)
        with pytest.raises(ValidationError):
            engine.encode_to_binary(EncodingVariant.LZ4, data)
        with pytest.raises(ValidationError):
            engine.decompress_from_binary(EncodingVariant.LZ4, data)

    def test_accepts_bytes_like_input(self):
        engine = EncodingEngine()
        assert engine.encode_to_text("hex", bytearray(b"\x01\x02")) == "0102"
        assert engine.encode_to_text("hex", memoryview(b"\xff")) == "ff"

    def test_unknown_feature(self):
        with pytest.raises(ValidationError) as exc_info:
            EncodingEngine(features=["hex", "base32"])
        assert "base32" in str(exc_info.value)

    def test_feature_parse(self):
        assert Feature.parse(" LZ4 ") is Feature.LZ4
        assert Feature.parse(Feature.Z85) is Feature.Z85
