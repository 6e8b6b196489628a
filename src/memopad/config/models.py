"""設定データクラス"""

from dataclasses import dataclass


@dataclass
class StoreConfig:
    """メモストア接続設定"""

    url: str
    access_key: str


@dataclass
class ServerConfig:
    """HTTP サーバー設定"""

    host: str = "0.0.0.0"
    port: int = 8080


@dataclass
class LoggingConfig:
    """ログ設定"""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    loggers: dict[str, str] | None = None


@dataclass
class Config:
    """アプリケーション設定"""

    store: StoreConfig
    server: ServerConfig
    logging: LoggingConfig | None = None
