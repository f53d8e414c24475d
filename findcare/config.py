"""Configuration for the map feed service."""

import os
from dataclasses import dataclass, field


@dataclass
class FeedSettings:
    """Fixed display metadata for GoodBarber Custom Map items."""

    pin_icon_url: str = "https://fcare.io/files/findcare_map_icon_red.png"
    pin_icon_color: str = "#0074D9"
    pin_icon_width: int = 150
    pin_icon_height: int = 300
    detail_url: str = "https://findcare.dev/facility/{id}"
    thumbnail_url: str = "https://findcare.dev/icons/default.png"


@dataclass
class Config:
    # Database: a full DSN wins over the discrete settings
    database_url: str = ""
    sql_server: str = ""
    sql_database: str = ""
    sql_user: str = ""
    sql_password: str = ""
    sql_port: int = 5432
    sql_sslmode: str = "require"

    # Timeouts
    connect_timeout_s: int = 30
    statement_timeout_ms: int = 60000

    # Pool bounds
    pool_min: int = 0
    pool_max: int = 10

    # Query bounds
    default_limit: int = 20
    max_limit: int = 200

    feed: FeedSettings = field(default_factory=FeedSettings)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a Config from process environment variables."""
        env = os.environ
        feed = FeedSettings()
        feed.detail_url = env.get("FEED_DETAIL_URL", feed.detail_url)
        feed.thumbnail_url = env.get("FEED_THUMBNAIL_URL", feed.thumbnail_url)
        feed.pin_icon_url = env.get("FEED_PIN_ICON_URL", feed.pin_icon_url)

        return cls(
            database_url=env.get("DATABASE_URL", ""),
            sql_server=env.get("SQL_SERVER", ""),
            sql_database=env.get("SQL_DATABASE", ""),
            sql_user=env.get("SQL_USER", ""),
            sql_password=env.get("SQL_PASSWORD", ""),
            sql_port=int(env.get("SQL_PORT", "5432")),
            sql_sslmode=env.get("SQL_SSLMODE", "require"),
            pool_min=int(env.get("DB_POOL_MIN", "0")),
            pool_max=int(env.get("DB_POOL_MAX", "10")),
            default_limit=int(env.get("FEED_DEFAULT_LIMIT", "20")),
            max_limit=int(env.get("FEED_MAX_LIMIT", "200")),
            feed=feed,
        )

    def connect_kwargs(self) -> dict:
        """Keyword arguments for psycopg2.connect()."""
        kwargs = {
            "connect_timeout": self.connect_timeout_s,
            "options": f"-c statement_timeout={self.statement_timeout_ms}",
        }
        if self.database_url:
            kwargs["dsn"] = self.database_url
            return kwargs
        kwargs.update({
            "host": self.sql_server,
            "dbname": self.sql_database,
            "user": self.sql_user,
            "password": self.sql_password,
            "port": self.sql_port,
            "sslmode": self.sql_sslmode,
        })
        return kwargs
