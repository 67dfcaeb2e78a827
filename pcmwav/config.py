from pydantic_settings import BaseSettings
from typing import Literal


class Settings(BaseSettings):
    """应用配置"""
    # 拼接配置
    copy_chunk_size: int = 65536                 # concat 复制负载时的块大小 (字节)

    # 合并配置
    merge_require_mono: bool = False             # merge 是否要求两个输入都是单声道

    # 日志配置
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
