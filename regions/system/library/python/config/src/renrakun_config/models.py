"""設定型定義（pydantic BaseModel）"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class AppSection(BaseModel):
    """アプリケーション基本設定。"""

    name: str
    version: str = "0.1.0"
    environment: str = "development"


class ServerSection(BaseModel):
    """HTTP サーバー設定。"""

    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)


class QuotaSection(BaseModel):
    """日次書き込みクォータ設定。"""

    daily_write_limit: int = Field(default=300, gt=0)
    timezone: str = "Asia/Tokyo"
    gate_url: str = "http://127.0.0.1:8787"
    instance_name: str = Field(default="global", min_length=1)
    timeout_seconds: float = Field(default=5.0, gt=0)
    reset_offset_seconds: float = Field(default=0.0, ge=0)
    reset_max_attempts: int = Field(default=5, ge=1)


class StorageSection(BaseModel):
    """クォータゲートの永続ストレージ設定。"""

    path: str = "quota.sqlite3"


class ActorLimitSection(BaseModel):
    """アクター単位の作成/参加リミッター設定。limit <= 0 で無効。"""

    daily_join_create_limit_per_actor: int = 40
    database_path: str = "actor_limits.sqlite3"


class CorsSection(BaseModel):
    """API アプリの CORS 設定。"""

    app_origin: str = "*"


class LogSection(BaseModel):
    """ログ設定。"""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class ObservabilitySection(BaseModel):
    """可観測性設定。"""

    log: LogSection = Field(default_factory=LogSection)


class AppConfig(BaseModel):
    """アプリケーション設定全体。"""

    app: AppSection
    server: ServerSection = Field(default_factory=ServerSection)
    quota: QuotaSection = Field(default_factory=QuotaSection)
    storage: StorageSection = Field(default_factory=StorageSection)
    actor_limit: ActorLimitSection = Field(default_factory=ActorLimitSection)
    cors: CorsSection = Field(default_factory=CorsSection)
    observability: ObservabilitySection = Field(default_factory=ObservabilitySection)
