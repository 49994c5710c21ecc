"""
設定管理モジュール

Related classes:
  - src.server.dependencies: builds the session store and templates from this
  - src.server.run: reads the server host/port
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "app_config.yaml"
DEFAULT_TEMPLATES_DIR = Path(__file__).parent.parent / "server" / "templates"


@dataclass
class ServerConfig:
    """HTTP server settings"""

    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False


@dataclass
class SessionConfig:
    """Browser session settings"""

    secret_key: str = "change-me"
    cookie_name: str = "todo_session"
    ttl_seconds: int = 86400  # 1 day
    max_sessions: int = 1000


@dataclass
class Config:
    """アプリケーション設定クラス"""

    server: ServerConfig = None  # type: ignore

    session: SessionConfig = None  # type: ignore

    # ログ設定
    log_level: str = "INFO"
    log_file: str = "logs/todo_lists.log"

    templates_dir: str = str(DEFAULT_TEMPLATES_DIR)

    def __post_init__(self):
        """デフォルト値の初期化"""
        if self.server is None:
            self.server = ServerConfig()
        if self.session is None:
            self.session = SessionConfig()

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "Config":
        """YAMLファイルから設定を読み込む

        Args:
            config_path: 設定ファイルパス（省略時は TODO_LISTS_CONFIG、
                次に config/app_config.yaml を使用）

        Returns:
            Config: 設定インスタンス
        """
        if config_path is None:
            env_path = os.getenv("TODO_LISTS_CONFIG")
            config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH
        config_path = Path(config_path)

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data: Dict[str, Any] = yaml.safe_load(f) or {}

        server_data = yaml_data.get("server") or {}
        session_data = yaml_data.get("session") or {}
        log_data = yaml_data.get("log") or {}

        templates_dir = yaml_data.get("templates_dir")
        if templates_dir and not Path(templates_dir).is_absolute():
            templates_dir = str(config_path.parent.parent / templates_dir)

        return cls(
            server=ServerConfig(
                host=server_data.get("host", "127.0.0.1"),
                port=int(server_data.get("port", 8000)),
                reload=bool(server_data.get("reload", False)),
            ),
            session=SessionConfig(
                secret_key=os.getenv("TODO_LISTS_SECRET_KEY")
                or session_data.get("secret_key", "change-me"),
                cookie_name=session_data.get("cookie_name", "todo_session"),
                ttl_seconds=int(session_data.get("ttl_seconds", 86400)),
                max_sessions=int(session_data.get("max_sessions", 1000)),
            ),
            log_level=log_data.get("level", "INFO"),
            log_file=log_data.get("file", "logs/todo_lists.log"),
            templates_dir=templates_dir or str(DEFAULT_TEMPLATES_DIR),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """環境変数から設定を読み込む"""
        return cls(
            server=ServerConfig(
                host=os.getenv("TODO_LISTS_HOST", "127.0.0.1"),
                port=int(os.getenv("TODO_LISTS_PORT", "8000")),
                reload=os.getenv("TODO_LISTS_RELOAD", "0").lower() in ("1", "true", "yes"),
            ),
            session=SessionConfig(
                secret_key=os.getenv("TODO_LISTS_SECRET_KEY", "change-me"),
                cookie_name=os.getenv("TODO_LISTS_COOKIE_NAME", "todo_session"),
                ttl_seconds=int(os.getenv("TODO_LISTS_SESSION_TTL", "86400")),
                max_sessions=int(os.getenv("TODO_LISTS_MAX_SESSIONS", "1000")),
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", "logs/todo_lists.log"),
            templates_dir=os.getenv("TODO_LISTS_TEMPLATES_DIR", str(DEFAULT_TEMPLATES_DIR)),
        )

    @classmethod
    def load(cls) -> "Config":
        """YAMLがあればそれを、無ければ環境変数を使う"""
        env_path = os.getenv("TODO_LISTS_CONFIG")
        if env_path or DEFAULT_CONFIG_PATH.exists():
            return cls.from_yaml(Path(env_path) if env_path else None)
        return cls.from_env()
