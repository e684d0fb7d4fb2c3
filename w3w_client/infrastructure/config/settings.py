"""アプリケーション設定（Pydantic Settings）"""
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """アプリケーション設定"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # what3words API
    w3w_api_key: Optional[str] = Field(
        default=None,
        description="what3words APIキー",
    )
    w3w_host: str = Field(
        default="https://api.what3words.com/v3",
        description="APIのベースURL（ローカルで動かすエンドポイントを使う場合に変更）",
    )
    default_language: Optional[str] = Field(
        default=None,
        description="convert-to-3wa / autosuggest で使う既定の言語コード",
    )

    # HTTP
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        description="リクエストのタイムアウト（秒）",
    )
    max_retries: int = Field(
        default=3,
        ge=0,
        description="5xx・接続エラー時のリトライ回数",
    )
    backoff_factor: float = Field(
        default=0.5,
        ge=0,
        description="リトライのバックオフ係数",
    )
    user_agent: str = Field(
        default="w3w-client-python/1.0",
        description="User-Agentヘッダー",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {value}")
        return level

    @property
    def has_api_key(self) -> bool:
        """APIキーが設定されているか"""
        return bool(self.w3w_api_key and self.w3w_api_key.strip())
