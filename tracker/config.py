"""Configuration - schedule tracker service settings"""
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv
load_dotenv(override=True)


@dataclass
class Settings:
    """Service settings"""

    # HTTP service
    host: str = "127.0.0.1"
    port: int = 8790
    debug: bool = False

    # Storage
    data_dir: Path = field(default_factory=lambda: Path.home() / ".tracker" / "data")
    db_name: str = "schedule_items.db"

    # Logging
    log_level: str = "INFO"

    @property
    def db_path(self) -> Path:
        return Path(self.data_dir).expanduser() / self.db_name

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables"""
        debug = os.getenv("TRACKER_DEBUG", "").lower() in ("1", "true")
        return cls(
            host=os.getenv("TRACKER_HOST", "127.0.0.1"),
            port=int(os.getenv("TRACKER_PORT", "8790")),
            debug=debug,
            data_dir=Path(os.getenv(
                "TRACKER_DATA_DIR", str(Path.home() / ".tracker" / "data")
            )),
            db_name=os.getenv("TRACKER_DB_NAME", "schedule_items.db"),
            log_level=os.getenv("TRACKER_LOG_LEVEL", "DEBUG" if debug else "INFO"),
        )


# Global settings instance
settings = Settings.from_env()
