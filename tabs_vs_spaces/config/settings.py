# tabs_vs_spaces/config/settings.py

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_name: str = "tabs-vs-spaces"
    environment: Literal["dev", "test", "prod"] = "dev"
    debug: bool = False
    version: str = "0.1.0"
    host: str = "0.0.0.0"
    port: int = Field(8080, ge=1, le=65535)

    # --- Database ---
    # Full SQLAlchemy URL; when unset the MySQL URL is assembled from the parts below.
    database_url: Optional[str] = None
    db_user: str = "root"
    db_pass: str = ""
    db_name: str = "votes"
    cloud_sql_connection_name: Optional[str] = None
    db_socket_dir: str = "/cloudsql"
    db_host: str = "127.0.0.1"
    db_port: int = 3306
    db_echo: bool = False

    # --- Connection pool ---
    db_pool_size: int = Field(5, ge=1)
    db_connect_timeout: float = Field(10.0, gt=0)
    db_acquire_timeout: float = Field(10.0, ge=0)
    db_wait_for_connections: bool = True
    db_queue_limit: int = Field(0, ge=0, description="Max queued callers; 0 means unbounded")

    # --- Observability ---
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    def sqlalchemy_url(self) -> str:
        """Return the async SQLAlchemy URL for the vote database."""
        if self.database_url:
            return self.database_url
        query = {}
        host: Optional[str] = self.db_host
        port: Optional[int] = self.db_port
        if self.cloud_sql_connection_name:
            query["unix_socket"] = f"{self.db_socket_dir.rstrip('/')}/{self.cloud_sql_connection_name}"
            host = None
            port = None
        url = URL.create(
            "mysql+aiomysql",
            username=self.db_user,
            password=self.db_pass,
            host=host,
            port=port,
            database=self.db_name,
            query=query,
        )
        return url.render_as_string(hide_password=False)


@lru_cache
def get_settings() -> AppSettings:
    return AppSettings()
