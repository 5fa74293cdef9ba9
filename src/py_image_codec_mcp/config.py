"""统一配置管理模块。

提供应用程序的全局配置管理，包括默认值、环境变量支持等。
"""

import os
from dataclasses import dataclass, field

from .models.constants import ReaderLimits, SizeUnits
from .models.encoding import Feature


@dataclass(frozen=True)
class CodecDefaults:
    """编码相关的默认配置"""

    DEFAULT_ENCODING: str = "hex"
    ENABLED_FEATURES: frozenset[Feature] = field(default_factory=Feature.all)

    # 批量编码并发设置
    MAX_WORKERS: int = 4
    # 总字节数超过该值时改用进程池
    PROCESS_POOL_THRESHOLD: int = 64 * SizeUnits.MIB


@dataclass(frozen=True)
class ReaderDefaults:
    """读取相关的默认配置"""

    MAX_FILE_SIZE: int = ReaderLimits.DEFAULT_MAX_FILE_SIZE
    READ_CHUNK_SIZE: int = ReaderLimits.READ_CHUNK_SIZE


@dataclass(frozen=True)
class LoggingDefaults:
    """日志相关的默认配置"""

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig:
    """应用程序配置管理器

    支持环境变量覆盖默认配置
    """

    def __init__(self):
        self.codec = CodecDefaults()
        self.reader = ReaderDefaults()
        self.logging = LoggingDefaults()

        # 从环境变量加载配置
        self._load_from_env()

    def _load_from_env(self):
        """从环境变量加载配置"""
        if encoding := os.getenv("IMC_DEFAULT_ENCODING"):
            object.__setattr__(self.codec, "DEFAULT_ENCODING", encoding.lower())

        if features := os.getenv("IMC_FEATURES"):
            enabled = frozenset(
                Feature.parse(name) for name in features.split(",") if name.strip()
            )
            object.__setattr__(self.codec, "ENABLED_FEATURES", enabled)

        if max_workers := os.getenv("IMC_MAX_WORKERS"):
            object.__setattr__(self.codec, "MAX_WORKERS", int(max_workers))

        if max_kib := os.getenv("IMC_MAX_FILE_SIZE_KIB"):
            object.__setattr__(
                self.reader, "MAX_FILE_SIZE", int(max_kib) * SizeUnits.KIB
            )

        if log_level := os.getenv("IMC_LOG_LEVEL"):
            object.__setattr__(self.logging, "LOG_LEVEL", log_level.upper())


# 全局配置实例
config = AppConfig()


def get_config() -> AppConfig:
    """获取全局配置实例"""
    return config


def reset_config():
    """重置配置（主要用于测试）"""
    global config
    config = AppConfig()
