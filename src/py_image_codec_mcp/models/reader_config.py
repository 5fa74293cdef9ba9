"""读取配置模型。

定义图像读取器的文件列表和大小限制。
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from .constants import ReaderLimits


class ReaderConfig(BaseModel):
    """读取配置"""

    files: list[Path] = Field(default_factory=list, description="待读取的文件路径")
    max_file_size: int = Field(
        ReaderLimits.DEFAULT_MAX_FILE_SIZE, ge=0, description="单个文件最大字节数"
    )
    chunk_size: int = Field(
        ReaderLimits.READ_CHUNK_SIZE, gt=0, description="流式读取缓冲区大小"
    )

    model_config = {"validate_assignment": True}

    @field_validator("files")
    @classmethod
    def validate_files(cls, v: list[Path]) -> list[Path]:
        for path in v:
            if not path.name:
                raise ValueError("文件路径不能为空")
        return v
