# wmsconsole/core/config.py
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConsoleSettings(BaseSettings):
    """
    仓库作业控制台配置（环境变量 / .env）
    """

    # 运行环境
    ENV: str = Field(default="dev")

    # 远端库存服务
    API_BASE_URL: str = Field(
        default="http://localhost:8080",
        description="远端库存/订单/拣货服务地址，例如：http://127.0.0.1:8080",
    )
    HTTP_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)

    # 看板轮询 & 派生指标
    POLL_INTERVAL_SECONDS: float = Field(default=30.0, gt=0)
    LOW_STOCK_THRESHOLD: int = Field(default=10, ge=0)
    RECENT_ORDERS_LIMIT: int = Field(default=5, ge=1)
    LOW_STOCK_PREVIEW_LIMIT: int = Field(default=5, ge=1)

    # 拣货任务完成后延迟跳转（纯展示用途）
    TASK_COMPLETE_REDIRECT_SECONDS: float = Field(default=1.5, ge=0)

    # 日志
    LOG_LEVEL: str = Field(default="INFO")
    JSON_LOG: bool = Field(default=False, description="每行一个 JSON 对象（便于日志采集）")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> ConsoleSettings:
    """全局单例设置入口。"""
    return ConsoleSettings()
