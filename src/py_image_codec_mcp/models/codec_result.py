"""编码结果模型。

定义图像编码、解码操作的结果数据结构。
"""

from pathlib import Path
from typing import Any

from humanize import naturalsize
from pydantic import BaseModel, Field


class BaseResult(BaseModel):
    """结果基类，包含通用字段和方法"""

    success: bool = Field(description="是否成功")
    error: str | None = Field(None, description="错误信息")
    error_type: str | None = Field(None, description="错误分类")

    def is_successful(self) -> bool:
        """检查是否成功"""
        return self.success and self.error is None

    @staticmethod
    def format_size(size_bytes: int) -> str:
        """格式化字节数为人类可读格式"""
        return naturalsize(size_bytes, binary=True)


class ResultCollection(BaseResult):
    """结果集合基类，提供通用的统计方法"""

    results: list[Any] = Field(description="结果列表")

    def get_successful_items(self) -> list[Any]:
        return [r for r in self.results if getattr(r, "success", False)]

    def get_failed_items(self) -> list[Any]:
        return [r for r in self.results if not getattr(r, "success", False)]

    def get_total_count(self) -> int:
        return len(self.results)

    def get_success_count(self) -> int:
        return len(self.get_successful_items())

    def get_failure_count(self) -> int:
        return len(self.get_failed_items())

    def get_success_rate(self) -> float:
        """获取成功率（百分比）"""
        total = self.get_total_count()
        if total == 0:
            return 0.0
        return (self.get_success_count() / total) * 100


class EncodeResult(BaseResult):
    """单个图像编码结果

    text 与 data 至多一个有值，取决于编码方案输出文本还是二进制。
    """

    file_stem: str = Field(description="文件名（不含扩展名）")
    extension: str = Field(description="扩展名")
    variant: str = Field(description="使用的编码方案")
    media_tag: str | None = Field(None, description="媒体类型")
    original_size: int = Field(0, description="原始字节数")
    encoded_size: int = Field(0, description="编码后长度")
    text: str | None = Field(None, description="文本编码结果")
    data: bytes | None = Field(None, description="二进制编码结果")

    def get_size_ratio(self) -> float:
        """编码后长度相对原始大小的比例（百分比）"""
        if self.original_size == 0:
            return 0.0
        return (self.encoded_size / self.original_size) * 100

    def get_summary(self) -> str:
        """编码结果摘要"""
        if not self.success:
            return f"失败: {self.error}"

        return (
            f"{self.file_stem}.{self.extension} [{self.variant}]: "
            f"{self.format_size(self.original_size)} → "
            f"{self.format_size(self.encoded_size)} ({self.get_size_ratio():.1f}%)"
        )


class DecodeResult(BaseResult):
    """文本解码并写出文件的结果"""

    variant: str = Field(description="使用的编码方案")
    output_path: Path | None = Field(None, description="写出的文件路径")
    decoded_size: int = Field(0, description="解码后字节数")

    def get_summary(self) -> str:
        if not self.success:
            return f"失败: {self.error}"
        return f"{self.output_path} ({self.format_size(self.decoded_size)})"


class BatchEncodeResult(ResultCollection):
    """批量编码结果"""

    variant: str = Field(description="使用的编码方案")
    results: list[EncodeResult] = Field(description="所有记录的编码结果")

    def get_total_original_size(self) -> int:
        return sum(r.original_size for r in self.results)

    def get_total_encoded_size(self) -> int:
        return sum(r.encoded_size for r in self.results if r.success)

    def get_summary(self) -> str:
        """批量编码摘要"""
        if not self.success:
            return f"批量编码失败: {self.error}"

        total = self.get_total_count()
        successful = self.get_success_count()
        original = self.format_size(self.get_total_original_size())
        encoded = self.format_size(self.get_total_encoded_size())

        return (
            f"编码 {successful}/{total} 个文件 "
            f"(成功率 {self.get_success_rate():.1f}%), "
            f"{original} → {encoded}"
        )
