"""编码原语模块。

每个原语都是无状态的纯函数集合，可独立测试：
base64（无填充）、hex、lz4 块压缩（带长度头）、z85。
原语库抛出的异常由 ``handle_codec_errors`` 统一转换为 ``DecodeError``。
"""

import base64
import binascii
import struct

import lz4.block
from zmq.utils import z85

from ..exceptions import DecodeError, EncodeFormatError, handle_codec_errors
from ..models.constants import ReaderLimits


class Base64Codec:
    """标准字母表 base64，输出不含填充字符"""

    stage = "base64"

    @staticmethod
    def encode(data: bytes) -> str:
        return base64.b64encode(data).decode("ascii").rstrip("=")

    @staticmethod
    @handle_codec_errors("base64")
    def decode(text: str) -> bytes:
        if "=" in text:
            raise DecodeError("base64", "不接受填充字符 '='")
        if len(text) % 4 == 1:
            raise DecodeError("base64", f"长度无效: {len(text)}")
        # 补齐填充后严格校验字母表
        padded = text + "=" * (-len(text) % 4)
        data = base64.b64decode(padded.encode("ascii"), validate=True)
        # 末字符的未用位必须为零
        if Base64Codec.encode(data) != text:
            raise DecodeError("base64", "末尾字符包含非零的填充位")
        return data


class HexCodec:
    """十六进制，编码输出小写；解码大小写均可接受"""

    stage = "hex"

    @staticmethod
    def encode(data: bytes) -> str:
        return binascii.hexlify(data).decode("ascii")

    @staticmethod
    @handle_codec_errors("hex")
    def decode(text: str) -> bytes:
        if len(text) % 2:
            raise DecodeError("hex", f"长度必须为偶数，得到: {len(text)}")
        return binascii.unhexlify(text.encode("ascii"))


class Lz4BlockCodec:
    """lz4 块压缩，压缩结果前置 4 字节小端原始长度"""

    stage = "lz4"
    header_length = ReaderLimits.LZ4_SIZE_HEADER

    @staticmethod
    def compress(data: bytes) -> bytes:
        return lz4.block.compress(data, mode="default", store_size=True)

    @staticmethod
    @handle_codec_errors("lz4")
    def decompress(payload: bytes) -> bytes:
        expected = Lz4BlockCodec.header_size(payload)
        decompressed = lz4.block.decompress(payload)
        if len(decompressed) != expected:
            raise DecodeError(
                "lz4", f"解压长度 {len(decompressed)} 与头部记录 {expected} 不一致"
            )
        return decompressed

    @staticmethod
    def header_size(payload: bytes) -> int:
        """读取长度头记录的原始字节数"""
        if len(payload) < Lz4BlockCodec.header_length:
            raise DecodeError("lz4", f"缺少长度头，数据只有 {len(payload)} 字节")
        return struct.unpack("<I", payload[: Lz4BlockCodec.header_length])[0]


class Z85Codec:
    """ZeroMQ Z85 文本安全编码，输入长度必须是 4 的倍数"""

    stage = "z85"

    @staticmethod
    def encode(data: bytes) -> str:
        if len(data) % 4:
            raise EncodeFormatError(
                "z85", f"输入长度必须是 4 的倍数，得到: {len(data)}"
            )
        return z85.encode(data).decode("ascii")

    @staticmethod
    @handle_codec_errors("z85")
    def decode(text: str) -> bytes:
        if len(text) % 5:
            raise DecodeError("z85", f"文本长度必须是 5 的倍数，得到: {len(text)}")
        return z85.decode(text.encode("ascii"))
