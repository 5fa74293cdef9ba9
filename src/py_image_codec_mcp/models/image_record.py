"""图像记录模型。

读取层与编码核心之间传递的数据单元：文件名、扩展名、媒体类型和原始字节。
"""

from humanize import naturalsize
from pydantic import BaseModel, Field

from .constants import MediaTag


class ImageRecord(BaseModel):
    """单个图像文件的内存表示

    记录独占自己的字节缓冲区，只能通过显式的 setter 修改。
    """

    file_stem: str = Field("", description="文件名（不含扩展名）")
    extension: str = Field("", description="扩展名（不含点）")
    media_tag: MediaTag = Field(default_factory=MediaTag.default, description="媒体类型")
    data: bytes = Field(b"", description="原始字节", repr=False)

    @property
    def size(self) -> int:
        return len(self.data)

    def set_extension(self, extension: str) -> "ImageRecord":
        """修改扩展名，并重新推导媒体类型"""
        from ..core.classifier import tag_from_extension

        self.extension = extension
        self.media_tag = tag_from_extension(extension)
        return self

    def from_memory(self, data: bytes) -> "ImageRecord":
        """替换字节缓冲区"""
        self.data = bytes(data)
        return self

    def sanity_check(self, capacity: int) -> "ImageRecord":
        """检查字节数是否超过容量

        Raises:
            FileSizeExceededError: 字节数大于 capacity 时
        """
        # 避免循环导入
        from ..exceptions import FileSizeExceededError

        if self.size > capacity:
            raise FileSizeExceededError(
                capacity_allowed=capacity, size_encountered=self.size
            )
        return self

    def __repr__(self) -> str:
        return (
            f"ImageRecord(file_stem={self.file_stem!r}, extension={self.extension!r}, "
            f"media_tag={self.media_tag.name}, data={naturalsize(self.size, binary=True)})"
        )
